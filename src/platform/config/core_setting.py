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

    PROJECT_NAME: str = 'Seating Engine'
    VERSION: str = '0.1.0'
    DEBUG: bool = False  # Also exposes exception text in 500 responses

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

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'seating_engine'

    # Full async URL override, e.g. sqlite+aiosqlite:///./seating.db
    DATABASE_URL: str = ''

    # Connection pool (ignored by sqlite)
    DB_POOL_SIZE: int = 5
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 10
    DB_POOL_RECYCLE: int = 3600

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f'postgresql+asyncpg://{self.POSTGRES_USER}:'
            f'{self.POSTGRES_PASSWORD.get_secret_value()}@'
            f'{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'
        )

    # Booking guard
    BOOKING_LOCK_TIMEOUT_SECONDS: float = 5.0
    # redis is required once more than one API worker serves bookings
    SEAT_LOCK_BACKEND: Literal['memory', 'redis'] = 'memory'
    SEAT_LOCK_TTL_MS: int = 10_000

    # Real-time broadcast
    BROADCAST_BACKEND: Literal['memory', 'redis'] = 'memory'
    REDIS_URL: str = 'redis://localhost:6379/0'
    REDIS_SOCKET_CONNECT_TIMEOUT: int = 5
    SUBSCRIBER_BUFFER_SIZE: int = 64

    # API server (script/launch_api.py)
    API_HOST: str = '0.0.0.0'
    API_PORT: int = 8100
    WORKERS: int = 1


settings = Settings()  # type: ignore
