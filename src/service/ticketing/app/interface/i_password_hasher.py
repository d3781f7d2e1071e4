from abc import ABC, abstractmethod

from pydantic import SecretStr


class IPasswordHasher(ABC):
    """One-way password hashing; plain passwords only travel as SecretStr"""

    @abstractmethod
    def hash_password(self, *, plain_password: SecretStr) -> str:
        pass

    @abstractmethod
    def verify_password(self, *, plain_password: SecretStr, hashed_password: str) -> bool:
        pass
