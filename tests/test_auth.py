"""Tests for authentication mode selection and credential building."""

from __future__ import annotations

import base64
import json
from unittest.mock import MagicMock, patch

import pytest
from google.auth.exceptions import RefreshError

from drive_upload.auth import (
    DRIVE_SCOPES,
    DryRun,
    ServiceAccountKey,
    WorkloadIdentity,
    authenticate,
    resolve_auth_mode,
)
from drive_upload.exceptions import ConfigurationError

PROVIDER = "projects/123/locations/global/workloadIdentityPools/github/providers/repo"
SERVICE_ACCOUNT = "uploader@proj.iam.gserviceaccount.com"


def encode_key(info: dict) -> str:
    return base64.b64encode(json.dumps(info).encode("utf-8")).decode("ascii")


class TestResolveAuthMode:
    """Tests for picking the authentication variant."""

    def test_dry_run_wins(self) -> None:
        mode = resolve_auth_mode(credentials="abc", dry_run=True)
        assert isinstance(mode, DryRun)
        assert mode.is_dry_run is True

    def test_key_wins_over_federation(self) -> None:
        mode = resolve_auth_mode(
            credentials="abc",
            workload_identity_provider=PROVIDER,
            service_account_email=SERVICE_ACCOUNT,
        )
        assert isinstance(mode, ServiceAccountKey)

    def test_complete_federation(self) -> None:
        mode = resolve_auth_mode(
            workload_identity_provider=PROVIDER, service_account_email=SERVICE_ACCOUNT
        )
        assert isinstance(mode, WorkloadIdentity)
        assert mode.is_dry_run is False

    def test_nothing_supplied_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="Google Drive credentials are required"):
            resolve_auth_mode()

    def test_partial_federation_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="Both workload-identity-provider"):
            resolve_auth_mode(workload_identity_provider=PROVIDER)


class TestServiceAccountKey:
    """Tests for base64 key handling."""

    def test_decode_returns_key_info(self) -> None:
        info = {"type": "service_account", "client_email": SERVICE_ACCOUNT}
        assert ServiceAccountKey(encode_key(info)).decode() == info

    def test_invalid_key_raises_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError, match="Failed to decode"):
            ServiceAccountKey("not base64 json!").decode()

    def test_build_credentials_uses_drive_file_scope(self) -> None:
        info = {"type": "service_account", "client_email": SERVICE_ACCOUNT}
        with patch(
            "drive_upload.auth.service_account.Credentials.from_service_account_info"
        ) as from_info:
            ServiceAccountKey(encode_key(info)).build_credentials()

        from_info.assert_called_once_with(info, scopes=DRIVE_SCOPES)
        assert DRIVE_SCOPES == ["https://www.googleapis.com/auth/drive.file"]


class TestWorkloadIdentity:
    """Tests for the external account configuration."""

    def test_requires_oidc_environment(self) -> None:
        mode = WorkloadIdentity(PROVIDER, SERVICE_ACCOUNT)

        with pytest.raises(ConfigurationError, match="id-token: write"):
            mode.external_account_info()

    def test_external_account_info(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ACTIONS_ID_TOKEN_REQUEST_URL", "https://token.actions/x?api-version=2.0")
        monkeypatch.setenv("ACTIONS_ID_TOKEN_REQUEST_TOKEN", "runner-token")

        info = WorkloadIdentity(f"//iam.googleapis.com/{PROVIDER}", SERVICE_ACCOUNT).external_account_info()

        assert info["type"] == "external_account"
        assert info["audience"] == f"//iam.googleapis.com/{PROVIDER}"
        assert info["service_account_impersonation_url"].endswith(
            f"/{SERVICE_ACCOUNT}:generateAccessToken"
        )
        source = info["credential_source"]
        assert source["url"] == (
            f"https://token.actions/x?api-version=2.0&audience=https://iam.googleapis.com/{PROVIDER}"
        )
        assert source["headers"] == {"Authorization": "Bearer runner-token"}
        assert source["format"]["subject_token_field_name"] == "value"

    def test_build_credentials_uses_identity_pool(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ACTIONS_ID_TOKEN_REQUEST_URL", "https://token.actions/x")
        monkeypatch.setenv("ACTIONS_ID_TOKEN_REQUEST_TOKEN", "runner-token")
        mode = WorkloadIdentity(PROVIDER, SERVICE_ACCOUNT)

        with patch("drive_upload.auth.identity_pool.Credentials.from_info") as from_info:
            mode.build_credentials()

        info = from_info.call_args.args[0]
        assert info["credential_source"]["url"].startswith("https://token.actions/x?audience=")
        assert from_info.call_args.kwargs == {"scopes": DRIVE_SCOPES}


class TestAuthenticate:
    """Tests for the eager token refresh."""

    def test_refreshes_credentials_once(self) -> None:
        mode = MagicMock()
        mode.describe.return_value = "service account key"

        with patch("drive_upload.auth.Request") as request_class:
            credentials = authenticate(mode)

        assert credentials is mode.build_credentials.return_value
        credentials.refresh.assert_called_once_with(request_class.return_value)

    def test_rejected_credentials_propagate(self, capsys: pytest.CaptureFixture[str]) -> None:
        mode = MagicMock()
        mode.describe.return_value = "service account key"
        mode.build_credentials.return_value.refresh.side_effect = RefreshError("invalid_grant")

        with patch("drive_upload.auth.Request"), pytest.raises(RefreshError, match="invalid_grant"):
            authenticate(mode)

        assert "AUTHENTICATION FAILED" in capsys.readouterr().out
