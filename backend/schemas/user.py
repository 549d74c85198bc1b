from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


# Schema for user registration requests
class UserCreate(BaseModel):
    username: str = Field(..., min_length=3, description="Username (minimum 3 characters)")
    password: str = Field(..., min_length=6, max_length=128, description="Password (6 to 128 characters)")
    email: EmailStr

    @field_validator("password")
    @classmethod
    def password_has_no_nul(cls, value: str) -> str:
        if "\x00" in value:
            raise ValueError("Password must not contain NUL characters")
        return value


# Schema for user authentication credentials
class UserLogin(BaseModel):
    username: str
    password: str


# Public view of a user; the password hash never leaves the server
class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str


# Schema returned after a successful login
class LoginResponse(BaseModel):
    token: str
    user: UserResponse


# Identity claims carried inside the JWT
class TokenClaims(BaseModel):
    id: int
    username: str
    email: str
