from pathlib import Path
from typing import List, Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (PROJECT_ROOT / '.env.example')


def _from_project_root(v: Path) -> Path:
    return v if v.is_absolute() else PROJECT_ROOT / v


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Event Spot Reservation'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Service identity, used in log lines and trace resources
    SERVICE_NAME: str = 'spot-reservation'
    DEPLOY_ENV: str = 'local_dev'

    # Catalog source, loaded once at startup
    CATALOG_DATA_PATH: Path = PROJECT_ROOT / 'data.json'

    # Logging; LOG_LEVEL falls back to DEBUG/INFO from the DEBUG flag
    LOG_LEVEL: Optional[Literal['TRACE', 'DEBUG', 'INFO', 'WARNING', 'ERROR']] = None
    LOG_DIR: Path = PROJECT_ROOT / 'logs'
    LOG_FILE_ENABLED: Optional[bool] = None  # defaults to DEBUG
    LOG_FILE_ROTATION: str = '1 hour'
    LOG_FILE_RETENTION: str = '7 days'

    @field_validator('CATALOG_DATA_PATH', 'LOG_DIR', mode='after')
    @classmethod
    def resolve_relative_path(cls, v: Path) -> Path:
        return _from_project_root(v)

    @property
    def effective_log_level(self) -> str:
        return self.LOG_LEVEL or ('DEBUG' if self.DEBUG else 'INFO')

    @property
    def log_to_file(self) -> bool:
        return self.DEBUG if self.LOG_FILE_ENABLED is None else self.LOG_FILE_ENABLED

    # Tracing; spans are only exported when an endpoint or console export is set
    OTEL_EXPORTER_OTLP_ENDPOINT: Optional[str] = None
    OTEL_CONSOLE_EXPORT: bool = False

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


settings = Settings()
