"""Client configuration loaded from config.yaml + environment variables."""

from __future__ import annotations

from decimal import Decimal

import yaml
from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings

_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"


def _load_yaml() -> dict:
    if _CONFIG_PATH.exists():
        with open(_CONFIG_PATH) as f:
            return yaml.safe_load(f) or {}
    return {}


_yaml = _load_yaml()


class ApiConfig(BaseSettings):
    base_url: str = "http://localhost:8080/api"


class HealthConfig(BaseSettings):
    interval_seconds: float = 300.0


class PricingConfig(BaseSettings):
    tax_rate: Decimal = Decimal("0.08")


class PhotoConfig(BaseSettings):
    max_photo_size: int = 10 * 1024 * 1024
    accepted_types: list[str] = Field(default_factory=lambda: [
        "image/jpeg", "image/png", "image/gif", "image/webp",
    ])


class SessionConfig(BaseSettings):
    admin_emails: list[str] = Field(default_factory=list)


class PreferencesConfig(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///data/preferences.db"


class Settings(BaseSettings):
    api: ApiConfig = Field(default_factory=ApiConfig)
    health: HealthConfig = Field(default_factory=HealthConfig)
    pricing: PricingConfig = Field(default_factory=PricingConfig)
    photos: PhotoConfig = Field(default_factory=PhotoConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    preferences: PreferencesConfig = Field(default_factory=PreferencesConfig)

    # BREMRAY_API_URL overrides api.base_url (deployments point at their own backend)
    api_url: str = ""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "BREMRAY_"}

    @property
    def api_base_url(self) -> str:
        return self.api_url or self.api.base_url


def get_settings() -> Settings:
    """Build Settings by merging YAML defaults with env overrides."""
    y = _yaml
    return Settings(
        api=ApiConfig(**y.get("api", {})),
        health=HealthConfig(**y.get("health", {})),
        pricing=PricingConfig(**y.get("pricing", {})),
        photos=PhotoConfig(**y.get("photos", {})),
        session=SessionConfig(**y.get("session", {})),
        preferences=PreferencesConfig(**y.get("preferences", {})),
    )
