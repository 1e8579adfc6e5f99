from __future__ import annotations

import logging
from pathlib import Path

import google_auth_httplib2
import httplib2
from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build

import config
from assignments.errors import SourceUnavailable
from classroom.settings import resolve_credentials_path, resolve_token_path

logger = logging.getLogger("classroom.client")


def get_credentials(
    credentials_file: str | Path | None = None,
    token_file: str | Path | None = None,
    scopes: list[str] | None = None,
) -> Credentials:
    """
    Load the cached OAuth token, refreshing it or running the installed-app
    flow when it is missing or expired. The refreshed token is written back.
    """
    credentials_path = resolve_credentials_path(credentials_file)
    token_path = resolve_token_path(token_file)
    scopes = scopes or config.GOOGLE_SCOPES

    creds = None
    if token_path.exists():
        creds = Credentials.from_authorized_user_file(str(token_path), scopes)
        logger.debug("Loaded cached credentials from %s", token_path)

    if creds and creds.valid:
        return creds

    if creds and creds.expired and creds.refresh_token:
        try:
            creds.refresh(Request())
        except RefreshError as exc:
            raise SourceUnavailable("refresh_credentials", reason=str(exc)) from exc
        logger.info("Refreshed cached credentials")
    else:
        if not credentials_path.exists():
            raise FileNotFoundError(
                "Google OAuth client secrets file not found: "
                f"{credentials_path}. Set GOOGLE_CREDENTIALS_FILE in .env."
            )
        flow = InstalledAppFlow.from_client_secrets_file(str(credentials_path), scopes)
        creds = flow.run_local_server(port=0)
        logger.info("Created new credentials through OAuth flow")

    token_path.parent.mkdir(parents=True, exist_ok=True)
    token_path.write_text(creds.to_json(), encoding="utf-8")
    logger.debug("Saved credentials to %s", token_path)
    return creds


def authorized_http(credentials: Credentials) -> google_auth_httplib2.AuthorizedHttp:
    # httplib2.Http is not thread-safe; every worker thread gets its own.
    return google_auth_httplib2.AuthorizedHttp(credentials, http=httplib2.Http())


def get_classroom_service(credentials: Credentials):
    return build("classroom", "v1", credentials=credentials, cache_discovery=False)


def get_docs_service(credentials: Credentials):
    return build("docs", "v1", credentials=credentials, cache_discovery=False)


def get_drive_service(credentials: Credentials):
    return build("drive", "v3", credentials=credentials, cache_discovery=False)
