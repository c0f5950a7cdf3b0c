"""YouTube API authentication handling."""

import os
import pickle
import threading
from typing import List, Optional

import google_auth_httplib2
import httplib2
from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.http import HttpRequest

from . import config
from .logging_config import get_logger

logger = get_logger(__name__)


class ThreadLocalHttp:
    """Authorized transport with one httplib2 connection per thread.

    httplib2.Http is not thread-safe, so requests built through
    build_request always execute on the calling thread's own instance.
    """

    def __init__(self, credentials):
        self.credentials = credentials
        self._local = threading.local()

    def get(self) -> google_auth_httplib2.AuthorizedHttp:
        """Return the calling thread's transport, creating it on first use."""
        http = getattr(self._local, "http", None)
        if http is None:
            http = google_auth_httplib2.AuthorizedHttp(self.credentials, http=httplib2.Http())
            self._local.http = http
        return http

    def build_request(self, http, *args, **kwargs) -> HttpRequest:
        """Request builder for googleapiclient.discovery.build."""
        return HttpRequest(self.get(), *args, **kwargs)


def _load_cached_credentials(token_file: str, account: str):
    if not os.path.exists(token_file):
        return None
    try:
        with open(token_file, "rb") as token:
            return pickle.load(token)
    except Exception as e:
        logger.warning("Ignoring unreadable token file for %s: %s", account, str(e))
        return None


def _refresh(creds, account: str):
    """Refresh expired credentials, returning None if they were revoked."""
    try:
        creds.refresh(Request())
    except RefreshError as e:
        logger.warning("Could not refresh credentials for %s, logging in again: %s", account, str(e))
        return None
    return creds


def get_youtube_service(
    account: str = config.SOURCE_ACCOUNT, scopes: Optional[List[str]] = None
) -> Optional[object]:
    """
    Get an authenticated YouTube service object for one account.
    Each account keeps its own token file.
    Returns None if authentication fails.
    """
    # Check for client secrets file first
    if not config.CLIENT_SECRETS_FILE:
        logger.error("GOOGLE_CLIENT_SECRETS_FILE environment variable not set")
        return None

    scopes = scopes or config.YOUTUBE_SCOPES
    token_file = config.token_file(account)
    creds = _load_cached_credentials(token_file, account)

    # Cached credentials for narrower scopes cannot be reused
    if creds and not creds.has_scopes(scopes):
        creds = None

    # If there are no (valid) credentials available, let the user log in
    if not creds or not creds.valid:
        if creds and creds.expired and creds.refresh_token:
            creds = _refresh(creds, account)

        if not creds:
            try:
                flow = InstalledAppFlow.from_client_secrets_file(
                    config.CLIENT_SECRETS_FILE, scopes
                )
                creds = flow.run_local_server(port=0)
            except Exception as e:
                logger.error("Authentication failed for %s: %s", account, str(e))
                return None

        # Save the credentials for the next run
        try:
            os.makedirs(os.path.dirname(token_file), exist_ok=True)
            with open(token_file, "wb") as token:
                pickle.dump(creds, token)
        except OSError as e:
            logger.warning("Could not save token file for %s: %s", account, str(e))

    try:
        # Build the YouTube service
        transport = ThreadLocalHttp(creds)
        youtube = build(
            "youtube", "v3", http=transport.get(), requestBuilder=transport.build_request
        )
        return youtube
    except Exception as e:
        logger.error("Failed to build YouTube service: %s", str(e))
        return None
