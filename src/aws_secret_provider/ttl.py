"""Derive a secret's TTL from its rotation configuration."""

import logging
import re
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

from .logging_utils import log_warning
from .models import Ttl

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

_RATE_PATTERN = re.compile(r"^rate\(\s*(\d+)\s+(day|days|hour|hours)\s*\)$", re.IGNORECASE)


def local_now() -> datetime:
    """Current wall-clock time as an aware datetime in the local zone."""
    return datetime.now().astimezone()


def _rotation_interval(rules: dict[str, Any]) -> timedelta | None:
    days = rules.get("AutomaticallyAfterDays")
    if days is not None:
        return timedelta(days=int(days))

    expression = rules.get("ScheduleExpression")
    if expression:
        match = _RATE_PATTERN.match(expression.strip())
        if match:
            amount = int(match.group(1))
            if match.group(2).lower().startswith("day"):
                return timedelta(days=amount)
            return timedelta(hours=amount)
    return None


class TtlResolver:
    """Resolves the TTL of a secret from DescribeSecret metadata.

    Secrets under rotation expire at their next scheduled rotation. All
    other secrets use the configured default TTL, or never expire when no
    default is set.
    """

    def __init__(
        self,
        client: Any,
        default_ttl: timedelta | None = None,
        clock: Clock = local_now,
    ):
        """Initialize the resolver.

        Args:
            client: boto3 secretsmanager client (or compatible)
            default_ttl: TTL applied to secrets without rotation
            clock: Returns the current aware datetime; its zone is used for
                expiry timestamps
        """
        self._client = client
        self._default_ttl = default_ttl
        self._clock = clock

    def _default(self) -> Ttl:
        if self._default_ttl is None:
            return Ttl(rotation_interval=None, expires_at=None)
        return Ttl(rotation_interval=None, expires_at=self._clock() + self._default_ttl)

    def resolve(self, secret_id: str) -> Ttl:
        """Resolve the TTL for a secret.

        Args:
            secret_id: Secret name or ARN

        Returns:
            Ttl derived from rotation, or from the default TTL

        Raises:
            botocore.exceptions.ClientError: If DescribeSecret fails
        """
        response = self._client.describe_secret(SecretId=secret_id)

        if not response.get("RotationEnabled"):
            return self._default()

        next_rotation = response.get("NextRotationDate")
        interval = _rotation_interval(response.get("RotationRules") or {})
        if next_rotation is None or interval is None:
            log_warning(
                logger,
                "Rotation enabled but schedule is incomplete, using default TTL",
                secret_id=secret_id,
            )
            return self._default()

        if next_rotation.tzinfo is None:
            next_rotation = next_rotation.replace(tzinfo=UTC)
        local_zone = self._clock().tzinfo

        logger.debug("Secret %s rotates every %s, next at %s", secret_id, interval, next_rotation)
        return Ttl(rotation_interval=interval, expires_at=next_rotation.astimezone(local_zone))
