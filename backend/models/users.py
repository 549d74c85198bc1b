from sqlalchemy import Column, Integer, String
from database import Base


# Represents a user account with its login credentials
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), unique=True, nullable=False, index=True)
    # The column keeps the historical name "password" but only ever stores the hash
    password_hash = Column("password", String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
