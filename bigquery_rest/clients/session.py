"""Authorized HTTP session and response handling."""

import logging
from typing import Any, Dict, Optional

import google.auth
from google.api_core import exceptions
from google.auth.credentials import AnonymousCredentials, Credentials
from google.auth.transport.requests import AuthorizedSession
from google.oauth2 import service_account
from requests import Response

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/bigquery"]


def create_session(
    credentials_path: Optional[str] = None,
    anonymous: bool = False,
) -> AuthorizedSession:
    """Create a requests session that attaches a bearer token to every call.

    Args:
        credentials_path: Service account key file. Application default
            credentials are used when omitted.
        anonymous: Send no credentials at all, for local emulators

    Returns:
        Session that refreshes its token as needed
    """
    credentials: Credentials
    if anonymous:
        credentials = AnonymousCredentials()
        logger.info("Using anonymous credentials")
    elif credentials_path:
        credentials = service_account.Credentials.from_service_account_file(
            credentials_path, scopes=SCOPES
        )
        logger.info("Using service account key file: %s", credentials_path)
    else:
        credentials, _ = google.auth.default(scopes=SCOPES)
        logger.info("Using application default credentials")

    return AuthorizedSession(credentials)


def process_response(response: Response) -> Dict[str, Any]:
    """Return the decoded JSON body of a successful response.

    Raises:
        google.api_core.exceptions.GoogleAPICallError: Subclass matching the
            HTTP status when the call failed
    """
    if response.status_code >= 400:
        raise exceptions.from_http_response(response)

    if not response.content:
        return {}
    return response.json()
