"""pytest configuration for aws_secret_provider tests."""

import sys
from datetime import UTC, datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add src directory to path so tests can import aws_secret_provider
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

# Local zone used by the fixed test clock
TEST_ZONE = timezone(timedelta(hours=2))
FIXED_NOW = datetime(2026, 1, 1, 12, 0, tzinfo=TEST_ZONE)


@pytest.fixture
def fixed_clock():
    """Clock that always returns FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def fixed_now():
    """The instant returned by fixed_clock."""
    return FIXED_NOW


@pytest.fixture
def mock_client():
    """Secrets Manager client stand-in with rotation disabled."""
    client = Mock()
    client.describe_secret.return_value = {"Name": "test", "RotationEnabled": False}
    return client


@pytest.fixture
def rotation_response():
    """DescribeSecret response for a secret rotated every 7 days."""
    return {
        "Name": "test",
        "RotationEnabled": True,
        "RotationRules": {"AutomaticallyAfterDays": 7},
        "NextRotationDate": datetime(2026, 1, 8, 0, 0, tzinfo=UTC),
    }
