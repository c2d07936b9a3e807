"""Tests for AWSSecretLookup."""

import base64
import json
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta
from pathlib import Path
from unittest.mock import Mock

import pytest
from botocore.exceptions import ClientError

from aws_secret_provider.errors import DecodeFailure, MalformedSecretPayload, SecretValueMissing
from aws_secret_provider.file_writer import FileWriter, LocalFileWriter
from aws_secret_provider.interface import SecretLookup
from aws_secret_provider.lookup import AWSSecretLookup
from aws_secret_provider.models import SecretType, Ttl, ValueWithTtl


def _secret(client, value):
    client.get_secret_value.return_value = {"Name": "test", "SecretString": value}


class TestJsonSecrets:
    """Lookups of JSON-typed secrets."""

    def test_db_creds_scenario(self, mock_client, fixed_clock, fixed_now):
        _secret(mock_client, '{"username":"alice","password_b64":"cGFzcw=="}')
        lookup = AWSSecretLookup(
            mock_client,
            secret_type=SecretType.JSON,
            default_ttl=timedelta(hours=1),
            clock=fixed_clock,
        )

        result = lookup.lookup("db-creds")

        assert result == ValueWithTtl(
            ttl=Ttl(None, fixed_now + timedelta(hours=1)),
            value={"username": "alice", "password_b64": "pass"},
        )
        mock_client.describe_secret.assert_called_once_with(SecretId="db-creds")
        mock_client.get_secret_value.assert_called_once_with(SecretId="db-creds")

    def test_malformed_payload(self, mock_client, fixed_clock):
        _secret(mock_client, "not json")
        lookup = AWSSecretLookup(mock_client, SecretType.JSON, clock=fixed_clock)

        with pytest.raises(MalformedSecretPayload) as exc_info:
            lookup.lookup("db-creds")

        assert exc_info.value.secret_id == "db-creds"

    def test_keys_preserved(self, mock_client, fixed_clock):
        payload = {"a": "1", "b_b64": "Mg==", "c_file": "Mw==", "d_unknown": "4"}
        _secret(mock_client, json.dumps(payload))

        result = AWSSecretLookup(mock_client, clock=fixed_clock).lookup("s")

        assert set(result.value) == set(payload)

    def test_file_keys_without_writer_return_sentinel(self, mock_client, fixed_clock):
        _secret(mock_client, json.dumps({"keystore_file": "AAEC"}))

        result = AWSSecretLookup(mock_client, clock=fixed_clock).lookup("s")

        assert result.value == {"keystore_file": "nofile"}

    def test_file_writer_factory_returning_none(self, mock_client, fixed_clock):
        _secret(mock_client, json.dumps({"keystore_file": "AAEC"}))
        lookup = AWSSecretLookup(
            mock_client, file_writer_factory=lambda secret_id: None, clock=fixed_clock
        )

        assert lookup.lookup("s").value == {"keystore_file": "nofile"}

    def test_file_keys_written_with_lowercased_name(self, mock_client, fixed_clock):
        content = b"\x00\x01\x02"
        _secret(mock_client, json.dumps({"KeyStore_FILE": base64.b64encode(content).decode()}))
        writer = Mock(spec=FileWriter)
        writer.write.return_value = Path("/secrets/s/keystore_file")
        factory = Mock(return_value=writer)

        result = AWSSecretLookup(
            mock_client, file_writer_factory=factory, clock=fixed_clock
        ).lookup("s")

        factory.assert_called_once_with("s")
        writer.write.assert_called_once_with("keystore_file", content, "KeyStore_FILE")
        assert result.value == {"KeyStore_FILE": "/secrets/s/keystore_file"}

    def test_file_keys_written_to_disk(self, mock_client, fixed_clock, tmp_path):
        _secret(mock_client, json.dumps({"cert_file": base64.b64encode(b"PEM").decode()}))
        lookup = AWSSecretLookup(
            mock_client,
            file_writer_factory=lambda secret_id: LocalFileWriter(tmp_path / secret_id),
            clock=fixed_clock,
        )

        result = lookup.lookup("tls")

        path = Path(result.value["cert_file"])
        assert path == (tmp_path / "tls" / "cert_file").resolve()
        assert path.read_bytes() == b"PEM"

    def test_decode_failure_aborts_lookup(self, mock_client, fixed_clock):
        _secret(mock_client, json.dumps({"ok": "fine", "bad_b64": "***"}))

        with pytest.raises(DecodeFailure) as exc_info:
            AWSSecretLookup(mock_client, clock=fixed_clock).lookup("s")

        assert exc_info.value.key == "bad_b64"

    def test_earlier_files_kept_when_later_key_fails(self, mock_client, fixed_clock):
        """Files written before a failing key are not removed."""
        _secret(mock_client, json.dumps({"first_file": "AAE=", "second_b64": "***"}))
        writer = Mock(spec=FileWriter)
        writer.write.return_value = Path("/secrets/first_file")

        with pytest.raises(DecodeFailure):
            AWSSecretLookup(
                mock_client, file_writer_factory=lambda s: writer, clock=fixed_clock
            ).lookup("s")

        writer.write.assert_called_once()

    def test_parse_failure_never_writes_files(self, mock_client, fixed_clock):
        _secret(mock_client, "{broken")
        factory = Mock()

        with pytest.raises(MalformedSecretPayload):
            AWSSecretLookup(
                mock_client, file_writer_factory=factory, clock=fixed_clock
            ).lookup("s")

        factory.assert_not_called()


class TestStringSecrets:
    """Lookups of STRING-typed secrets."""

    def test_api_key_scenario(self, mock_client, rotation_response, fixed_clock):
        mock_client.describe_secret.return_value = rotation_response
        _secret(mock_client, "abc123")

        result = AWSSecretLookup(
            mock_client, SecretType.STRING, default_ttl=timedelta(hours=1), clock=fixed_clock
        ).lookup("api-key")

        assert result.value == {"value": "abc123"}
        assert result.ttl.rotation_interval == timedelta(days=7)
        assert result.ttl.expires_at == rotation_response["NextRotationDate"]

    def test_string_secret_not_decoded(self, mock_client, fixed_clock):
        """JSON-looking or base64-looking content is returned as-is."""
        _secret(mock_client, '{"password_b64": "cGFzcw=="}')

        result = AWSSecretLookup(mock_client, SecretType.STRING, clock=fixed_clock).lookup("s")

        assert result.value == {"value": '{"password_b64": "cGFzcw=="}'}

    def test_string_secret_with_malformed_json_content(self, mock_client, fixed_clock):
        _secret(mock_client, "not json")

        result = AWSSecretLookup(mock_client, SecretType.STRING, clock=fixed_clock).lookup("s")

        assert result.value == {"value": "not json"}


class TestFailures:
    """Remote and payload failures."""

    def test_describe_failure_skips_get(self, mock_client, fixed_clock):
        mock_client.describe_secret.side_effect = ClientError(
            {"Error": {"Code": "AccessDeniedException", "Message": "denied"}}, "DescribeSecret"
        )

        with pytest.raises(ClientError):
            AWSSecretLookup(mock_client, clock=fixed_clock).lookup("s")

        mock_client.get_secret_value.assert_not_called()

    def test_get_failure_propagates_unchanged(self, mock_client, fixed_clock):
        error = ClientError(
            {"Error": {"Code": "ResourceNotFoundException", "Message": "missing"}},
            "GetSecretValue",
        )
        mock_client.get_secret_value.side_effect = error

        with pytest.raises(ClientError) as exc_info:
            AWSSecretLookup(mock_client, clock=fixed_clock).lookup("s")

        assert exc_info.value is error

    def test_binary_secret_has_no_string_value(self, mock_client, fixed_clock):
        mock_client.get_secret_value.return_value = {"Name": "s", "SecretBinary": b"\x00"}

        with pytest.raises(SecretValueMissing) as exc_info:
            AWSSecretLookup(mock_client, clock=fixed_clock).lookup("s")

        assert exc_info.value.secret_id == "s"


def test_implements_interface(mock_client):
    assert isinstance(AWSSecretLookup(mock_client), SecretLookup)


def test_concurrent_lookups_share_client(mock_client, fixed_clock):
    _secret(mock_client, '{"username":"alice","password_b64":"cGFzcw=="}')
    lookup = AWSSecretLookup(mock_client, clock=fixed_clock)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lookup.lookup, [f"s{i}" for i in range(32)]))

    assert all(r.value == {"username": "alice", "password_b64": "pass"} for r in results)
