# backend/utils/hashing.py
from passlib.context import CryptContext
from passlib.exc import PasswordValueError

from utils.errors import InternalError

# passlib refuses anything longer than this
MAX_PASSWORD_BYTES = 4096


class PasswordHasher:
    """bcrypt hashing with a configurable work factor.

    Every hash carries its own random salt, so hashing the same password
    twice never gives the same string.
    """

    def __init__(self, rounds: int = 10):
        self.pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        return self.pwd_context.hash(password)

    def verify(self, password: str, hashed_password: str) -> bool:
        # Problems with the stored hash are broken data; problems with the
        # supplied password are just a failed login
        if not isinstance(hashed_password, str) or self.pwd_context.identify(hashed_password) is None:
            raise InternalError("Stored password hash is malformed")

        if not isinstance(password, str) or "\x00" in password or len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            self.dummy_verify()
            return False

        try:
            return self.pwd_context.verify(password, hashed_password)
        except PasswordValueError:
            return False
        except (ValueError, TypeError) as e:
            raise InternalError(f"Stored password hash is malformed: {e}") from e

    def dummy_verify(self) -> bool:
        # Same cost as a real verify, used when there is no user to check against
        return self.pwd_context.dummy_verify()
