"""Build the AWS Secrets Manager client from provider settings.

Called once at startup; the returned client is shared by all lookups.
"""

import logging
from typing import Any

import boto3

from .config import ProviderSettings
from .errors import ConfigurationError
from .logging_utils import log_info
from .models import AuthMode

logger = logging.getLogger(__name__)


def validate_settings(settings: ProviderSettings) -> None:
    """Check that settings are complete for the selected auth mode.

    Raises:
        ConfigurationError: If required values are missing
    """
    if not settings.region:
        raise ConfigurationError(
            "AWS region is required. Set AWS_REGION or AWS_DEFAULT_REGION environment variable."
        )
    if settings.auth_mode is AuthMode.CREDENTIALS and settings.credentials is None:
        raise ConfigurationError(
            "No access key and secret key credentials available for CREDENTIALS mode"
        )


def create_client(settings: ProviderSettings) -> Any:
    """Create a Secrets Manager client for the configured auth mode.

    CREDENTIALS mode uses the static key pair from settings; any other mode
    uses the standard boto3 credential chain (env vars, profiles, IAM roles).

    Args:
        settings: Provider settings

    Returns:
        boto3 secretsmanager client

    Raises:
        ConfigurationError: If settings are incomplete
    """
    validate_settings(settings)

    log_info(
        logger,
        "Initializing Secrets Manager client",
        mode=settings.auth_mode.value,
        region=settings.region,
        endpoint=settings.endpoint_override or "default",
    )

    if settings.auth_mode is AuthMode.CREDENTIALS:
        session = boto3.session.Session(
            aws_access_key_id=settings.credentials.access_key,
            aws_secret_access_key=settings.credentials.secret_key,
            region_name=settings.region,
        )
    else:
        session = boto3.session.Session(region_name=settings.region)

    return session.client(
        "secretsmanager",
        region_name=settings.region,
        endpoint_url=settings.endpoint_override,
    )
