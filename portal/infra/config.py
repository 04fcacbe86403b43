"""
Configuration management using Pydantic Settings.

Sources, lowest priority first:
1. Defaults below
2. Environment variables (DATAPORTAL_*) and a .env file
3. A YAML file with portal options, the first one found of:
   - DATAPORTAL_CONFIG_FILE
   - ./config/settings.yaml
   - ~/.config/dataportal/settings.yaml

The database location has a single rule: DATAPORTAL_DATABASE_URL if set,
otherwise dataportal.db inside the data directory.
"""

import os
from pathlib import Path
from typing import Iterator, Optional
import yaml

from pydantic_settings import BaseSettings, SettingsConfigDict
from portal.domain.models import PortalOptions

DB_FILENAME = "dataportal.db"
OPTIONS_FILENAME = "settings.yaml"


def _user_dir(app_name: str, kind: str) -> Path:
    """Per-user directory: %APPDATA%\\<App> on Windows, ~/.<kind>/<app> elsewhere"""
    if os.name == 'nt':
        return Path(os.getenv('APPDATA')) / app_name
    return Path.home() / kind / app_name.lower()


class Settings(BaseSettings):
    """Where the portal keeps its data and how it behaves"""
    model_config = SettingsConfigDict(
        env_prefix='DATAPORTAL_',
        env_file='.env',
        env_file_encoding='utf-8'
    )

    app_name: str = "DataPortal"
    config_file: Optional[Path] = None
    data_dir: Optional[Path] = None
    database_url: Optional[str] = None

    options: PortalOptions = PortalOptions()

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if self.data_dir is None:
            self.data_dir = _user_dir(self.app_name, Path('.local') / 'share')
        options_file = self.find_options_file()
        if options_file is not None:
            self.options = self._read_options(options_file)

    def _options_candidates(self) -> Iterator[Path]:
        if self.config_file is not None:
            yield self.config_file
        yield Path("config") / OPTIONS_FILENAME
        yield _user_dir(self.app_name, '.config') / OPTIONS_FILENAME

    def find_options_file(self) -> Optional[Path]:
        return next((p for p in self._options_candidates() if p.exists()), None)

    @staticmethod
    def _read_options(path: Path) -> PortalOptions:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
        return PortalOptions(**data)

    def get_db_url(self) -> str:
        """Get database URL; the default SQLite file's directory is created on demand"""
        if self.database_url:
            return self.database_url

        self.data_dir.mkdir(parents=True, exist_ok=True)
        return f"sqlite+aiosqlite:///{self.data_dir / DB_FILENAME}"


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings():
    """Reload settings from environment and file"""
    global _settings
    _settings = Settings()
    return _settings
