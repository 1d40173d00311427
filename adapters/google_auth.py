"""
Google Workspace credentials and API client construction.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from google.auth.transport.requests import Request as GoogleRequest
from google.oauth2 import service_account
from googleapiclient.discovery import build

from shared_utils.constants import GoogleEndpoints, LogScope
from shared_utils.error_handler import ConfigurationError
from shared_utils.logging_utils import get_scoped_logger

logger = get_scoped_logger(LogScope.ADAPTER)


def load_credentials(
    credentials_file: str,
    delegated_user: Optional[str] = None,
    scopes: Sequence[str] = GoogleEndpoints.SCOPES,
) -> service_account.Credentials:
    """Load service-account credentials, optionally impersonating a user.

    Raises:
        ConfigurationError: If no credentials file is configured.
    """
    if not credentials_file:
        raise ConfigurationError("GOOGLE_CREDENTIALS_FILE not configured")
    creds = service_account.Credentials.from_service_account_file(credentials_file, scopes=list(scopes))
    if delegated_user:
        creds = creds.with_subject(delegated_user)
    logger.info("google_credentials_loaded", delegated=bool(delegated_user))
    return creds


def bearer_token(credentials: Any) -> str:
    """Access token for raw HTTP calls, refreshed when expired."""
    if not credentials.valid:
        credentials.refresh(GoogleRequest())
    return credentials.token


def build_service(name: str, version: str, credentials: Any) -> Any:
    return build(name, version, credentials=credentials, cache_discovery=False)
