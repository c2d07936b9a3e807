"""Provider settings loader.

Settings come from an optional YAML file, overridden by environment
variables:

- SECRET_PROVIDER_AUTH_MODE: "default" (credential chain) or "credentials"
- AWS_REGION or AWS_DEFAULT_REGION: AWS region
- SECRET_PROVIDER_ACCESS_KEY / SECRET_PROVIDER_SECRET_KEY: static credentials
- SECRET_PROVIDER_ENDPOINT_OVERRIDE: endpoint URL (e.g. LocalStack)
- SECRET_PROVIDER_DEFAULT_TTL_SECONDS: TTL for secrets without rotation
- SECRET_PROVIDER_SECRET_TYPE: "json" (default) or "string"
- SECRET_PROVIDER_FILE_WRITE_DIR: directory for file-encoded keys
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigurationError
from .models import AuthMode, AwsCredentials, SecretType

logger = logging.getLogger(__name__)

ENV_AUTH_MODE = "SECRET_PROVIDER_AUTH_MODE"
ENV_ACCESS_KEY = "SECRET_PROVIDER_ACCESS_KEY"
ENV_SECRET_KEY = "SECRET_PROVIDER_SECRET_KEY"
ENV_ENDPOINT_OVERRIDE = "SECRET_PROVIDER_ENDPOINT_OVERRIDE"
ENV_DEFAULT_TTL = "SECRET_PROVIDER_DEFAULT_TTL_SECONDS"
ENV_SECRET_TYPE = "SECRET_PROVIDER_SECRET_TYPE"
ENV_FILE_WRITE_DIR = "SECRET_PROVIDER_FILE_WRITE_DIR"


@dataclass(frozen=True)
class ProviderSettings:
    """Settings for the Secrets Manager client and lookup."""

    auth_mode: AuthMode = AuthMode.DEFAULT
    region: str | None = None
    credentials: AwsCredentials | None = None
    endpoint_override: str | None = None
    default_ttl: timedelta | None = None
    secret_type: SecretType = SecretType.JSON
    file_write_dir: str | None = None


def _parse_ttl(value: Any) -> timedelta | None:
    if value is None or value == "":
        return None
    try:
        seconds = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Default TTL must be an integer number of seconds: {value}") from e
    if seconds <= 0:
        raise ConfigurationError(f"Default TTL must be positive: {value}")
    return timedelta(seconds=seconds)


def _read_yaml(config_path: str) -> dict[str, Any]:
    if not os.path.exists(config_path):
        logger.info("No provider config at %s, using environment only", config_path)
        return {}

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, OSError) as e:
        raise ConfigurationError(f"Failed to load provider config from {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError("Config file must contain a YAML dictionary")
    return data


def parse_provider_settings(data: Mapping[str, Any]) -> ProviderSettings:
    """Parse a settings dictionary into ProviderSettings.

    Args:
        data: Dictionary with optional keys auth_mode, region, access_key,
            secret_key, endpoint_override, default_ttl_seconds, secret_type
            and file_write_dir

    Returns:
        ProviderSettings with parsed values

    Raises:
        ConfigurationError: If a value is invalid
    """
    access_key = data.get("access_key")
    secret_key = data.get("secret_key")
    if bool(access_key) != bool(secret_key):
        raise ConfigurationError("Both access_key and secret_key must be set together")

    credentials = AwsCredentials(str(access_key), str(secret_key)) if access_key else None

    return ProviderSettings(
        auth_mode=AuthMode.parse(str(data.get("auth_mode") or AuthMode.DEFAULT.value)),
        region=data.get("region") or None,
        credentials=credentials,
        endpoint_override=data.get("endpoint_override") or None,
        default_ttl=_parse_ttl(data.get("default_ttl_seconds")),
        secret_type=SecretType.parse(str(data.get("secret_type") or SecretType.JSON.value)),
        file_write_dir=data.get("file_write_dir") or None,
    )


def load_provider_settings(
    config_path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> ProviderSettings:
    """Load provider settings from YAML and environment variables.

    Args:
        config_path: Optional YAML file; a missing file is treated as empty
        env: Environment mapping (default: os.environ)

    Returns:
        ProviderSettings

    Raises:
        ConfigurationError: If the file or any value is invalid
    """
    if env is None:
        env = os.environ

    data: dict[str, Any] = {}
    if config_path is not None:
        data.update(_read_yaml(str(config_path)))

    overrides = {
        "auth_mode": env.get(ENV_AUTH_MODE),
        "region": env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION"),
        "access_key": env.get(ENV_ACCESS_KEY),
        "secret_key": env.get(ENV_SECRET_KEY),
        "endpoint_override": env.get(ENV_ENDPOINT_OVERRIDE),
        "default_ttl_seconds": env.get(ENV_DEFAULT_TTL),
        "secret_type": env.get(ENV_SECRET_TYPE),
        "file_write_dir": env.get(ENV_FILE_WRITE_DIR),
    }
    data.update({key: value for key, value in overrides.items() if value})

    return parse_provider_settings(data)
