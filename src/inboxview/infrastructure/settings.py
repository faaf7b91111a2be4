"""Application settings using Pydantic Settings, loaded from a local JSON file."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional, Union

from pydantic import Field, SecretStr, ValidationError, computed_field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from inboxview.domain.errors import ConfigUnavailableError

DEFAULT_CONFIG_PATH = "config.json"
CONFIG_PATH_ENV = "INBOXVIEW_CONFIG"
DEFAULT_IMAP_PORT = 993
REQUIRED_FIELDS = ("imap_server", "email", "password", "listen_port")


class Settings(BaseSettings):
    """Settings read once at startup.

    The four connection fields have no defaults. ``INBOXVIEW_*`` environment
    variables override file values.
    """

    model_config = SettingsConfigDict(
        env_prefix="INBOXVIEW_",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    # Required
    imap_server: str = Field(..., min_length=1, description="host:port of the IMAPS server")
    email: str = Field(..., min_length=1)
    password: SecretStr
    listen_port: int = Field(..., ge=1, le=65535)

    # Tunables
    mailbox: str = "INBOX"
    listen_host: str = "0.0.0.0"
    imap_timeout: float = Field(default=30.0, gt=0)
    log_level: str = "INFO"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # file values arrive as init kwargs; environment wins over them
        return env_settings, init_settings

    @field_validator("imap_server")
    @classmethod
    def _check_imap_server(cls, value: str) -> str:
        host, sep, port = value.rpartition(":")
        if sep and (not host or not port.isdigit()):
            raise ValueError(f"expected host:port, got {value!r}")
        return value

    @field_validator("password")
    @classmethod
    def _check_password(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("password must not be empty")
        return value

    @computed_field
    @property
    def imap_host(self) -> str:
        host, sep, _ = self.imap_server.rpartition(":")
        return host if sep else self.imap_server

    @computed_field
    @property
    def imap_port(self) -> int:
        _, sep, port = self.imap_server.rpartition(":")
        return int(port) if sep else DEFAULT_IMAP_PORT


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Read and validate the settings file.

    Args:
        path: Settings file. Defaults to $INBOXVIEW_CONFIG, then ./config.json

    Raises:
        ConfigUnavailableError: if the file is missing, unreadable, not a JSON
            object, lacks one of REQUIRED_FIELDS, or fails validation.
    """
    config_path = Path(path or os.getenv(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH)

    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigUnavailableError(f"failed to open {config_path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigUnavailableError(f"failed to decode {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigUnavailableError(f"failed to decode {config_path}: expected a JSON object")

    # the environment may override these but never supply them
    missing = [field for field in REQUIRED_FIELDS if field not in data]
    if missing:
        raise ConfigUnavailableError(f"missing required field(s) in {config_path}: {', '.join(missing)}")

    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigUnavailableError(f"invalid settings in {config_path}: {e}") from e
