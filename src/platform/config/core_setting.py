from datetime import timedelta
from pathlib import Path
from typing import List, Literal, Optional

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

    PROJECT_NAME: str = 'Library Seat Tracker'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Booking lifecycle
    RESERVE_WINDOW_MINUTES: int = 6  # Grace period to scan the entrance code
    SESSION_WINDOW_HOURS: int = 4  # Max stay after check-in
    LIMITED_SEATS_THRESHOLD: int = 3  # At or below this many free seats a library shows as limited
    EXPIRY_SWEEP_INTERVAL_SECONDS: float = 0  # 0 = sweep only on reads

    # Admin
    MASTER_ADMIN_PIN: SecretStr = SecretStr('1234')

    # Seed roster (JSON list of libraries); built-in campus roster when unset
    LIBRARY_ROSTER_FILE: Optional[Path] = None

    @field_validator('RESERVE_WINDOW_MINUTES', 'SESSION_WINDOW_HOURS')
    @classmethod
    def validate_positive_window(cls, v: int) -> int:
        if v <= 0:
            raise ValueError('booking windows must be positive')
        return v

    @property
    def RESERVE_WINDOW(self) -> timedelta:
        return timedelta(minutes=self.RESERVE_WINDOW_MINUTES)

    @property
    def SESSION_WINDOW(self) -> timedelta:
        return timedelta(hours=self.SESSION_WINDOW_HOURS)

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',')]
        elif isinstance(v, list):
            return v
        return []

    # Store backend
    STORE_BACKEND: Literal['memory', 'kvrocks'] = 'memory'

    # Kvrocks Configuration (Redis protocol + Kvrocks storage)
    KVROCKS_HOST: str = 'localhost'
    KVROCKS_PORT: int = 6666
    KVROCKS_DB: int = 0
    KVROCKS_PASSWORD: str = ''
    KVROCKS_KEY_PREFIX: str = ''  # Namespaces every stored document key
    REDIS_DECODE_RESPONSES: bool = True

    # Kvrocks Connection Pool Configuration
    KVROCKS_POOL_MAX_CONNECTIONS: int = 20  # Max connections in pool
    KVROCKS_POOL_SOCKET_TIMEOUT: int = 5  # Socket read/write timeout (seconds)
    KVROCKS_POOL_SOCKET_CONNECT_TIMEOUT: int = 5  # Connection timeout (seconds)
    KVROCKS_POOL_SOCKET_KEEPALIVE: bool = True  # Enable TCP keepalive
    KVROCKS_POOL_HEALTH_CHECK_INTERVAL: int = 30  # Health check interval (seconds)

    @property
    def KVROCKS_URL(self) -> str:
        return f'redis://{self.KVROCKS_HOST}:{self.KVROCKS_PORT}/{self.KVROCKS_DB}'


settings = Settings()  # type: ignore
