"""
Runtime configuration

Values are read from the environment (and a .env file when present).
"""
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

# Load .env from the working directory
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    """Pool defaults applied to every data source"""
    pool_size: int = 5
    max_overflow: int = 10
    pool_timeout: int = 30
    pool_recycle: int = 3600
    pool_pre_ping: bool = True
    verify_on_build: bool = True  # open one connection per pool in build()
    default_data_source_class: str = "mysql+pymysql"

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from POOLSYNC_* environment variables

        Returns:
            Settings with environment overrides applied
        """
        return cls(
            pool_size=int(os.getenv("POOLSYNC_POOL_SIZE", 5)),
            max_overflow=int(os.getenv("POOLSYNC_MAX_OVERFLOW", 10)),
            pool_timeout=int(os.getenv("POOLSYNC_POOL_TIMEOUT", 30)),
            pool_recycle=int(os.getenv("POOLSYNC_POOL_RECYCLE", 3600)),
            pool_pre_ping=_env_bool("POOLSYNC_POOL_PRE_PING", True),
            verify_on_build=_env_bool("POOLSYNC_VERIFY_ON_BUILD", True),
            default_data_source_class=os.getenv("POOLSYNC_DEFAULT_DRIVER", "mysql+pymysql"),
        )

    def engine_options(self) -> dict:
        """Keyword arguments for sqlalchemy.create_engine"""
        return {
            "pool_size": self.pool_size,
            "max_overflow": self.max_overflow,
            "pool_timeout": self.pool_timeout,
            "pool_recycle": self.pool_recycle,
            "pool_pre_ping": self.pool_pre_ping,
        }


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process-wide settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
