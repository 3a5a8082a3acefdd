"""Salesforce connection settings loaded from the environment or a YAML file."""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, SecretStr

from contact_journey.errors import ConfigError

DEFAULT_LOGIN_URL = "https://login.salesforce.com"
DEFAULT_API_VERSION = "v59.0"

# Settings field -> environment variable, in the order missing keys are reported
REQUIRED_ENV_KEYS = {
    "client_id": "SF_CLIENT_ID",
    "client_secret": "SF_CLIENT_SECRET",
    "username": "SF_USERNAME",
    "password": "SF_PASSWORD",
}

OPTIONAL_ENV_KEYS = {
    "login_url": "SF_LOGIN_URL",
    "api_version": "SF_API_VERSION",
    "timeout": "SF_TIMEOUT",
    "email_limit": "SF_EMAIL_LIMIT",
}


class Settings(BaseModel):
    """Connected App credentials plus request tuning for the CRM API."""

    model_config = ConfigDict(frozen=True)

    client_id: Optional[str] = None
    client_secret: Optional[SecretStr] = None
    username: Optional[str] = None
    password: Optional[SecretStr] = None

    login_url: str = DEFAULT_LOGIN_URL
    api_version: str = DEFAULT_API_VERSION
    timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")
    email_limit: int = Field(default=20, ge=1, description="Max EmailMessage rows per journey")

    @property
    def token_url(self) -> str:
        return self.login_url.rstrip("/") + "/services/oauth2/token"

    def missing_keys(self) -> list[str]:
        """Environment keys of required settings that are absent or blank."""
        missing = []
        for field, env_key in REQUIRED_ENV_KEYS.items():
            value = getattr(self, field)
            if isinstance(value, SecretStr):
                value = value.get_secret_value()
            if not value:
                missing.append(env_key)
        return missing

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from SF_* variables. Missing secrets are left unset, not rejected."""
        env = os.environ if environ is None else environ
        data: dict = {}
        for field, env_key in {**REQUIRED_ENV_KEYS, **OPTIONAL_ENV_KEYS}.items():
            value = env.get(env_key)
            if value is not None and value.strip():
                data[field] = value.strip()
        return cls.model_validate(data)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """
        Load settings from YAML. Accepts either a top-level mapping or one nested
        under a 'salesforce' key; keys are field names (client_id, password, ...).
        """
        data = yaml.safe_load(Path(path).read_text()) or {}
        if not isinstance(data, dict):
            raise ConfigError([], f"Settings file {path} must contain a mapping, not {type(data).__name__}")
        section = data.get("salesforce", data)
        if not isinstance(section, dict):
            raise ConfigError([], f"'salesforce' section in {path} must be a mapping, not {type(section).__name__}")
        known = {**REQUIRED_ENV_KEYS, **OPTIONAL_ENV_KEYS}
        return cls.model_validate({k: v for k, v in section.items() if k in known and v is not None})
