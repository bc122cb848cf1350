# -*- coding: utf-8 -*-
"""
Google authentication for the Drive upload step.

The authentication mode is decided once at startup and represented by one
of three classes:

- ServiceAccountKey: base64-encoded service account key JSON
- WorkloadIdentity: keyless federation from the GitHub OIDC token
- DryRun: no credentials at all, nothing is sent to Drive

Credentials are built with google-auth and refreshed once up front over the
requests transport, so a bad key or federation setup fails before any
file is touched.
"""

import base64
import binascii
import json
import os

from google.auth import identity_pool
from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2 import service_account

from .config import MISSING_CREDENTIALS, INCOMPLETE_IDENTITY
from .exceptions import ConfigurationError

# Least-privilege scope: only files created or opened by this app
DRIVE_SCOPES = ['https://www.googleapis.com/auth/drive.file']

STS_TOKEN_URL = 'https://sts.googleapis.com/v1/token'
IAM_CREDENTIALS_URL = 'https://iamcredentials.googleapis.com/v1/projects/-/serviceAccounts'
JWT_TOKEN_TYPE = 'urn:ietf:params:oauth:token-type:jwt'


class ServiceAccountKey:
    """Authenticate with a service account key passed as base64-encoded JSON."""

    is_dry_run = False

    def __init__(self, encoded_key):
        self.encoded_key = encoded_key

    def decode(self):
        """
        Decode the base64 key into the service account info dict.

        Raises:
            ConfigurationError: If the value is not base64-encoded JSON
        """
        try:
            raw = base64.b64decode(self.encoded_key, validate=False)
            return json.loads(raw.decode('utf-8'))
        except (binascii.Error, UnicodeDecodeError, ValueError) as e:
            print("[!] ========================================")
            print("[!] INVALID CREDENTIALS INPUT")
            print("[!] ========================================")
            print("[!] The credentials input must be the service account key JSON, base64-encoded.")
            print("[!]   Example: base64 -w0 key.json")
            raise ConfigurationError(f"Failed to decode Google Drive credentials: {e}") from e

    def build_credentials(self):
        return service_account.Credentials.from_service_account_info(
            self.decode(), scopes=DRIVE_SCOPES
        )

    def describe(self):
        return "service account key"


class WorkloadIdentity:
    """
    Authenticate keylessly through Workload Identity Federation.

    The GitHub OIDC token is exchanged at Google STS, then used to
    impersonate `service_account`. The job needs `id-token: write`.
    """

    is_dry_run = False

    def __init__(self, provider, service_account_email):
        # Accept both "projects/..." and "//iam.googleapis.com/projects/..."
        self.provider = provider.replace('//iam.googleapis.com/', '', 1).lstrip('/')
        self.service_account_email = service_account_email

    def external_account_info(self):
        """
        Build the external_account configuration consumed by google.auth.identity_pool.

        Raises:
            ConfigurationError: If the runner did not expose an OIDC token endpoint
        """
        request_url = os.environ.get('ACTIONS_ID_TOKEN_REQUEST_URL', '')
        request_token = os.environ.get('ACTIONS_ID_TOKEN_REQUEST_TOKEN', '')
        if not request_url or not request_token:
            raise ConfigurationError(
                "GitHub OIDC token is unavailable. Grant the job `id-token: write` "
                "permission to use workload identity federation"
            )

        audience = f"https://iam.googleapis.com/{self.provider}"
        separator = '&' if '?' in request_url else '?'
        return {
            'type': 'external_account',
            'audience': f"//iam.googleapis.com/{self.provider}",
            'subject_token_type': JWT_TOKEN_TYPE,
            'token_url': STS_TOKEN_URL,
            'service_account_impersonation_url': (
                f"{IAM_CREDENTIALS_URL}/{self.service_account_email}:generateAccessToken"
            ),
            'credential_source': {
                'url': f"{request_url}{separator}audience={audience}",
                'headers': {'Authorization': f"Bearer {request_token}"},
                'format': {'type': 'json', 'subject_token_field_name': 'value'},
            },
        }

    def build_credentials(self):
        return identity_pool.Credentials.from_info(
            self.external_account_info(), scopes=DRIVE_SCOPES
        )

    def describe(self):
        return f"workload identity federation as {self.service_account_email}"


class DryRun:
    """No authentication: the dry-run adapter never talks to Drive."""

    is_dry_run = True

    def build_credentials(self):
        return None

    def describe(self):
        return "dry run (no credentials)"


def resolve_auth_mode(credentials='', workload_identity_provider='', service_account_email='',
                      dry_run=False):
    """
    Pick the authentication mode from the supplied inputs.

    Dry run wins over everything; a key wins over federation.
    No network access happens here.

    Returns:
        ServiceAccountKey | WorkloadIdentity | DryRun

    Raises:
        ConfigurationError: If neither a key nor a complete federation config is supplied
    """
    if dry_run:
        return DryRun()
    if credentials:
        return ServiceAccountKey(credentials)
    if workload_identity_provider and service_account_email:
        return WorkloadIdentity(workload_identity_provider, service_account_email)
    if workload_identity_provider or service_account_email:
        raise ConfigurationError(INCOMPLETE_IDENTITY)
    raise ConfigurationError(MISSING_CREDENTIALS)


def authenticate(auth_mode):
    """
    Build the credentials for the given mode and fetch a first access token.

    Refreshing eagerly surfaces a rejected key, a misconfigured provider or a
    missing impersonation grant before any folder or file is created.

    Args:
        auth_mode: ServiceAccountKey or WorkloadIdentity

    Returns:
        google.auth.credentials.Credentials: Credentials holding a valid token

    Raises:
        ConfigurationError: If the mode's configuration is unusable
        google.auth.exceptions.RefreshError: If Google rejects the credentials
    """
    credentials = auth_mode.build_credentials()
    try:
        credentials.refresh(Request())
    except RefreshError:
        print("[!] ========================================")
        print("[!] AUTHENTICATION FAILED")
        print("[!] ========================================")
        print(f"[!] Could not obtain a Google access token using {auth_mode.describe()}.")
        print("[!] Troubleshooting steps:")
        print("[!]   1. Verify the service account still exists and the key has not been revoked")
        print("[!]   2. For federation, verify the provider path and the principal's")
        print("[!]      roles/iam.workloadIdentityUser binding on the service account")
        print("[!]   3. Make sure the Drive API is enabled for the project")
        raise

    print(f"[✓] Authenticated with {auth_mode.describe()}")
    return credentials
