"""Registration and login against the ``users`` table.

These are the only functions that read or write user records. Both are
exempt from the bearer-token gate since they are how a caller obtains a
token in the first place.
"""
import logging
from typing import Tuple

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.users import User
from schemas.user import TokenClaims
from utils.errors import ConflictError, UnauthorizedError
from utils.hashing import PasswordHasher
from utils.tokenJWT import TokenService

logger = logging.getLogger(__name__)

DUPLICATE_USER_MESSAGE = "Username or email already exists"
INVALID_CREDENTIALS_MESSAGE = "Invalid username or password"


def register(db: Session, hasher: PasswordHasher, username: str, password: str, email: str) -> User:
    """Create a user unless the username or the email is already taken.

    Nothing is hashed or written when either field collides.
    """
    existing = (
        db.query(User.id)
        .filter(or_(User.username == username, User.email == email))
        .first()
    )
    if existing:
        logger.info("Registration rejected, username or email taken: %s", username)
        raise ConflictError(DUPLICATE_USER_MESSAGE)

    user = User(username=username, password_hash=hasher.hash(password), email=email)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Another request registered the same username/email after our check
        db.rollback()
        raise ConflictError(DUPLICATE_USER_MESSAGE)
    db.refresh(user)

    logger.info("User registered: id=%s username=%s", user.id, user.username)
    return user


def authenticate(db: Session, hasher: PasswordHasher, username: str, password: str) -> User:
    """Return the user for a correct username/password pair.

    Unknown usernames and wrong passwords fail with the same message.
    """
    user = db.query(User).filter(User.username == username).first()
    if user is None:
        hasher.dummy_verify()
        raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

    if not hasher.verify(password, user.password_hash):
        raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

    return user


def login(
    db: Session, hasher: PasswordHasher, tokens: TokenService, username: str, password: str
) -> Tuple[str, User]:
    user = authenticate(db, hasher, username, password)
    token = tokens.issue(TokenClaims(id=user.id, username=user.username, email=user.email))
    logger.info("User logged in: id=%s", user.id)
    return token, user
