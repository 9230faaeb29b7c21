"""
Server Configuration

Loads configuration from environment variables and provides defaults.
Supports loading from .env file using python-dotenv.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from skillrank import EngineConfig

# Single .env at the project root
root_env = Path(__file__).resolve().parent.parent / ".env"
if root_env.exists():
    load_dotenv(root_env)

DATA_SOURCES = ("memory", "json", "firebase")


@dataclass
class ServerConfig:
    """Server configuration."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Catalog/scratch backing: "memory" | "json" | "firebase"
    data_source: str = "memory"
    # When data_source=json: items fixture (list of item dicts or {"items": [...]})
    items_json_path: Optional[Path] = None
    # When data_source=firebase: service account JSON and optional project id
    firebase_credentials_path: Optional[Path] = None
    firebase_project_id: Optional[str] = None

    # Resurrection service (both required to call it; otherwise markers are deferred)
    resurrection_url: Optional[str] = None
    worker_secret: Optional[str] = None
    resurrection_timeout_seconds: float = 5.0

    # Related items
    related_cache_ttl_seconds: int = 3600
    related_limit: int = 10

    # Optional JSON file overriding EngineConfig defaults
    engine_config_path: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables."""
        base_dir = Path(__file__).parent.parent
        data_source = os.getenv("DATA_SOURCE", "").strip().lower() or "memory"
        if data_source not in DATA_SOURCES:
            data_source = "memory"

        def _path_env(key: str, default: Optional[Path] = None) -> Optional[Path]:
            v = os.getenv(key)
            if not v:
                return default
            p = Path(v)
            return p if p.is_absolute() else (base_dir / p).resolve()

        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            data_source=data_source,
            items_json_path=_path_env("ITEMS_JSON_PATH", base_dir / "data" / "items.json"),
            firebase_credentials_path=_path_env("FIREBASE_CREDENTIALS_PATH") or _path_env("GOOGLE_APPLICATION_CREDENTIALS"),
            firebase_project_id=os.getenv("FIREBASE_PROJECT_ID") or None,
            resurrection_url=(os.getenv("RESURRECTION_URL") or "").rstrip("/") or None,
            worker_secret=os.getenv("WORKER_SECRET") or None,
            resurrection_timeout_seconds=float(os.getenv("RESURRECTION_TIMEOUT_SECONDS", "5")),
            related_cache_ttl_seconds=int(os.getenv("RELATED_CACHE_TTL_SECONDS", "3600")),
            related_limit=int(os.getenv("RELATED_LIMIT", "10")),
            engine_config_path=_path_env("ENGINE_CONFIG_PATH"),
        )

    @property
    def resurrection_configured(self) -> bool:
        return bool(self.resurrection_url and self.worker_secret)

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the configuration.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        if self.data_source == "json":
            if not self.items_json_path or not self.items_json_path.exists():
                errors.append(f"Items JSON not found: {self.items_json_path}")

        if self.data_source == "firebase":
            if not self.firebase_credentials_path or not self.firebase_credentials_path.is_file():
                errors.append(f"Firebase credentials file not found: {self.firebase_credentials_path}")

        if self.resurrection_timeout_seconds <= 0:
            errors.append("RESURRECTION_TIMEOUT_SECONDS must be positive")

        if self.related_limit < 1:
            errors.append("RELATED_LIMIT must be at least 1")

        if self.engine_config_path and not self.engine_config_path.exists():
            errors.append(f"Engine config not found: {self.engine_config_path}")

        return len(errors) == 0, errors

    def load_engine_config(self) -> EngineConfig:
        """EngineConfig from engine_config_path, or defaults."""
        if not self.engine_config_path:
            return EngineConfig()
        with open(self.engine_config_path) as f:
            return EngineConfig.from_dict(json.load(f))


# Global config instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config


def reload_config() -> ServerConfig:
    """Reload configuration from environment."""
    global _config
    _config = None
    return get_config()
