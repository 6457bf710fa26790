from pathlib import Path
from typing import List, Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Box Office'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Security
    SECRET_KEY: SecretStr = SecretStr('test_secret_key_change_in_production')
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    ALGORITHM: str = 'HS256'
    AUTH_COOKIE_NAME: str = 'box_office_auth'

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',') if i.strip()]
        elif isinstance(v, list):
            return v
        return []

    # Database
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'box_office'
    DATABASE_URL: str = ''  # overrides POSTGRES_* when set (e.g. sqlite+aiosqlite:///./dev.db)

    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True
    SQLITE_BUSY_TIMEOUT: float = 15.0  # seconds a writer waits for the database lock
    AUTO_CREATE_TABLES: bool = False

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f'postgresql+asyncpg://{self.POSTGRES_USER}:'
            f'{self.POSTGRES_PASSWORD.get_secret_value()}'
            f'@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'
        )

    @property
    def IS_SQLITE(self) -> bool:
        return self.DATABASE_URL_ASYNC.startswith('sqlite')

    # Transactions
    TRANSACTION_MAX_ATTEMPTS: int = 3
    TRANSACTION_RETRY_BACKOFF: float = 0.05  # seconds, multiplied by attempt number

    # Email / ticket delivery
    EMAIL_BACKEND: Literal['mock', 'smtp'] = 'mock'
    EMAIL_FROM: str = 'box-office@example.com'
    SMTP_HOST: str = 'localhost'
    SMTP_PORT: int = 587
    SMTP_USER: str = ''
    SMTP_PASSWORD: SecretStr = SecretStr('')
    SMTP_USE_TLS: bool = False
    SMTP_START_TLS: bool = True
    DELIVERY_QUEUE_SIZE: int = 1000
    DELIVERY_MAX_ATTEMPTS: int = 3
    DELIVERY_RETRY_DELAY: float = 1.0
    BOX_OFFICE_NAME: str = 'Arts Centre Box Office'


settings = Settings()  # type: ignore
