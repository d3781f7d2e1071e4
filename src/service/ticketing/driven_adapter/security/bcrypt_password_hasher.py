import bcrypt
from pydantic import SecretStr

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_password_hasher import IPasswordHasher


# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


class BcryptPasswordHasher(IPasswordHasher):
    """Concrete bcrypt implementation of IPasswordHasher"""

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    @Logger.io
    def hash_password(self, *, plain_password: SecretStr) -> str:
        password_bytes = plain_password.get_secret_value().encode('utf-8')[:BCRYPT_MAX_BYTES]
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(password_bytes, salt)
        return hashed.decode('utf-8')

    @Logger.io
    def verify_password(self, *, plain_password: SecretStr, hashed_password: str) -> bool:
        password_bytes = plain_password.get_secret_value().encode('utf-8')[:BCRYPT_MAX_BYTES]
        hashed_bytes = hashed_password.encode('utf-8')
        try:
            return bcrypt.checkpw(password_bytes, hashed_bytes)
        except ValueError:
            # Stored value is not a bcrypt hash
            return False
