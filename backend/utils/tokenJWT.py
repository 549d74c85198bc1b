# utils/tokenJWT.py
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from pydantic import ValidationError

from schemas.user import TokenClaims
from utils.errors import UnauthorizedError

INVALID_TOKEN_MESSAGE = "Invalid token or session expired"

# Authorization scheme; missing headers are handled below so every failure looks the same
bearer_scheme = HTTPBearer(auto_error=False)


class InvalidTokenError(Exception):
    """Raised for any token that must not be trusted, whatever the reason."""


class TokenService:
    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 1440):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    # Generate a new JWT access token for the given identity
    def issue(self, claims: TokenClaims, expires_delta: Optional[timedelta] = None) -> str:
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else timedelta(minutes=self.expire_minutes))
        to_encode = claims.model_dump()
        to_encode.update({"sub": str(claims.id), "iat": now, "exp": expire})
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        # Bad signature, garbage input, expiry and missing claims all end up here
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
            return TokenClaims.model_validate(payload)
        except (JWTError, ValidationError) as e:
            raise InvalidTokenError(str(e)) from e


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


# Resolve the bearer token into the caller's identity, or stop the request with 401
def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    if credentials is None:
        raise UnauthorizedError(INVALID_TOKEN_MESSAGE)
    try:
        return tokens.verify(credentials.credentials)
    except InvalidTokenError:
        raise UnauthorizedError(INVALID_TOKEN_MESSAGE)
