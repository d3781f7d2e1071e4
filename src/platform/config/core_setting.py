from pathlib import Path
from typing import Annotated, List

import orjson
from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'TigerTix'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Database
    DATABASE_URL: str = f'sqlite+aiosqlite:///{_PROJECT_ROOT / "shared-db" / "database.sqlite"}'
    DB_BUSY_TIMEOUT_SECONDS: float = 5.0
    DB_ECHO: bool = False

    # Purchase transaction
    PURCHASE_LOCK_TIMEOUT_SECONDS: float = 5.0

    # Security
    SECRET_KEY: SecretStr = SecretStr('test_secret_key_change_in_production')
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    ALGORITHM: str = 'HS256'

    # CORS
    # NoDecode: the env value is a comma separated string, parsed below
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = ['http://localhost:3000']

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and v.strip().startswith('['):
            return orjson.loads(v)
        if isinstance(v, str):
            return [i.strip() for i in v.split(',') if i.strip()]
        elif isinstance(v, list):
            return v
        return []

    # Booking assistant (Gemini)
    GEMINI_API_KEY: SecretStr = SecretStr('')
    LLM_MODEL: str = 'gemini-2.5-flash-lite'
    LLM_BASE_URL: str = 'https://generativelanguage.googleapis.com/v1beta'
    LLM_TIMEOUT_SECONDS: float = 15.0

    @property
    def SQLITE_DB_PATH(self) -> Path | None:
        """Filesystem path of the SQLite database, None for in-memory URLs"""
        _, _, path = self.DATABASE_URL.partition(':///')
        if not path or path.startswith(':memory:'):
            return None
        return Path(path)


settings = Settings()
