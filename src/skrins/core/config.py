#!/usr/bin/env python3
"""
Configuration for Skrins

Defines the immutable configuration (SkrinsConfig) that is built once at
startup and passed to every component that needs it. Values are read from
environment variables (a local .env file is loaded with python-dotenv) and
can be overridden by command-line options.

This module is part of the Core Layer and should have no dependencies on
Presentation or UI layers.

Links:
- python-dotenv: https://github.com/theskumar/python-dotenv
- Pydantic: https://docs.pydantic.dev/latest/

Sample input:
    config = load_config(
        capture_dir="~/Pictures/skrins",
        remote_host="example.com:2003",
        remote_user="deploy",
        private_key="~/.ssh/id_ed25519",
        remote_path="/var/www/i",
        base_url="https://i.example.com",
    )

Expected output:
    config.remote.url_for("abc.png")
    # 'https://i.example.com/abc.png'
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from skrins.core.constants import (
    APP_NAME,
    DEFAULT_Y_OFFSET,
    TRANSCODE_OUTPUT_NAME,
    TRANSFER_SETTINGS,
)
from skrins.core.exceptions import ConfigError

# Environment variable names for each option
ENV_VARS: Dict[str, str] = {
    "capture_dir": "SKRINS_CAPTURE_DIR",
    "remote_host": "SKRINS_REMOTE_HOST",
    "remote_user": "SKRINS_REMOTE_USER",
    "private_key": "SKRINS_PRIVATE_KEY",
    "remote_path": "SKRINS_REMOTE_PATH",
    "base_url": "SKRINS_BASE_URL",
    "y_offset": "SKRINS_Y_OFFSET",
    "ffmpeg_path": "SKRINS_FFMPEG",
    "connect_timeout": "SKRINS_CONNECT_TIMEOUT",
}

REMOTE_OPTIONS = ("remote_host", "remote_user", "private_key", "remote_path", "base_url")


def _with_trailing_slash(value: str) -> str:
    return value.rstrip("/") + "/"


class RemoteTarget(BaseModel):
    """Where uploads go and how they are reached."""
    model_config = ConfigDict(frozen=True)

    host: str = Field(..., description="Remote host as host[:port]")
    user: str = Field(..., description="Login name on the remote host")
    private_key_path: Path = Field(..., description="Private key used for authentication")
    remote_dir: str = Field(..., description="Directory on the remote host receiving uploads")
    base_url: str = Field(..., description="Public URL prefix of remote_dir")
    connect_timeout: float = Field(
        float(TRANSFER_SETTINGS["CONNECT_TIMEOUT"]),
        description="Seconds allowed for connect, banner and authentication",
    )

    @field_validator("host", "user")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("host")
    @classmethod
    def validate_port(cls, v: str) -> str:
        _, sep, port = v.rpartition(":")
        if sep and not port.isdigit():
            raise ValueError(f"invalid port in {v!r}")
        return v

    @field_validator("private_key_path")
    @classmethod
    def expand_key_path(cls, v: Path) -> Path:
        return Path(os.path.expanduser(str(v)))

    @field_validator("remote_dir", "base_url")
    @classmethod
    def normalize_trailing_slash(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return _with_trailing_slash(v.strip())

    @field_validator("connect_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @property
    def hostname(self) -> str:
        host, sep, port = self.host.rpartition(":")
        return host if sep else self.host

    @property
    def port(self) -> int:
        _, sep, port = self.host.rpartition(":")
        return int(port) if sep else TRANSFER_SETTINGS["DEFAULT_PORT"]

    def remote_path_for(self, name: str) -> str:
        return self.remote_dir + name

    def url_for(self, name: str) -> str:
        return self.base_url + name


class SkrinsConfig(BaseModel):
    """Process-wide configuration. Immutable after construction."""
    model_config = ConfigDict(frozen=True)

    capture_dir: Path = Field(..., description="Local directory written to and watched")
    remote: Optional[RemoteTarget] = Field(None, description="Upload destination")
    y_offset: int = Field(DEFAULT_Y_OFFSET, description="Vertical inset added after Y reflection")
    ffmpeg_path: Optional[str] = Field(None, description="ffmpeg binary, PATH lookup when unset")
    transcode_output_name: str = Field(TRANSCODE_OUTPUT_NAME, description="Transcoder output file name")
    app_name: str = Field(APP_NAME, description="Application name shown in notifications")

    @field_validator("capture_dir")
    @classmethod
    def expand_capture_dir(cls, v: Path) -> Path:
        return Path(os.path.expanduser(str(v)))

    @field_validator("transcode_output_name")
    @classmethod
    def validate_output_name(cls, v: str) -> str:
        if not v or "/" in v or os.sep in v:
            raise ValueError("must be a plain file name")
        return v

    def require_remote(self) -> RemoteTarget:
        """Return the remote target or raise ConfigError when none is configured."""
        if self.remote is None:
            missing = ", ".join(ENV_VARS[name] for name in REMOTE_OPTIONS)
            raise ConfigError(f"No remote target configured (set {missing} or the matching options)")
        return self.remote


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def load_config(**overrides: Any) -> SkrinsConfig:
    """
    Build the configuration from the environment and explicit overrides.

    Args:
        **overrides: Option values keyed like ENV_VARS; None means "not given"

    Returns:
        SkrinsConfig: Validated, immutable configuration

    Raises:
        ConfigError: If a required option is missing or a value is invalid
    """
    load_dotenv()

    unknown = set(overrides) - set(ENV_VARS)
    if unknown:
        raise ConfigError(f"Unknown configuration options: {', '.join(sorted(unknown))}")

    values: Dict[str, Any] = {}
    for name, env_var in ENV_VARS.items():
        value = overrides.get(name)
        if value is None:
            value = os.getenv(env_var) or None
        values[name] = value

    if values["capture_dir"] is None:
        raise ConfigError(f"Capture directory is required (--path or {ENV_VARS['capture_dir']})")

    remote_values = {name: values[name] for name in REMOTE_OPTIONS}
    given = [name for name, value in remote_values.items() if value is not None]

    try:
        remote = None
        if given:
            missing = [ENV_VARS[name] for name in REMOTE_OPTIONS if remote_values[name] is None]
            if missing:
                raise ConfigError(f"Incomplete remote target, missing: {', '.join(missing)}")
            remote_kwargs: Dict[str, Any] = {
                "host": remote_values["remote_host"],
                "user": remote_values["remote_user"],
                "private_key_path": remote_values["private_key"],
                "remote_dir": remote_values["remote_path"],
                "base_url": remote_values["base_url"],
            }
            if values["connect_timeout"] is not None:
                remote_kwargs["connect_timeout"] = values["connect_timeout"]
            remote = RemoteTarget(**remote_kwargs)

        config_kwargs: Dict[str, Any] = {
            "capture_dir": values["capture_dir"],
            "remote": remote,
            "ffmpeg_path": values["ffmpeg_path"],
        }
        if values["y_offset"] is not None:
            config_kwargs["y_offset"] = values["y_offset"]
        config = SkrinsConfig(**config_kwargs)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {_format_validation_error(e)}") from e

    logger.debug(f"Configuration loaded: capture_dir={config.capture_dir}, remote={'yes' if remote else 'no'}")
    return config
