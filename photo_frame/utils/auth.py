"""Authentication utilities for Google Photos API."""

import logging
import os
from typing import Optional, cast

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import Resource, build

from photo_frame.config import ApiConfig
from photo_frame.models import AuthenticationError

logger = logging.getLogger(__name__)

# If modifying these scopes, delete the file token.json.
SCOPES = ['https://www.googleapis.com/auth/photoslibrary.readonly']

def get_credentials(token_path: str, credentials_path: str) -> Credentials:
    """Get valid user credentials from storage.

    If there are no (valid) credentials available, let the user log in.

    Args:
        token_path: Path to token.json file
        credentials_path: Path to client secret file

    Returns:
        Valid credentials object

    Raises:
        FileNotFoundError: If the client secret file is not found
    """
    creds = None
    if os.path.exists(token_path):
        creds = Credentials.from_authorized_user_file(token_path, SCOPES)

    if not creds or not creds.valid:
        if creds and creds.expired and creds.refresh_token:
            logger.info("Refreshing expired token from %s", token_path)
            creds.refresh(Request())
        else:
            if not os.path.exists(credentials_path):
                raise FileNotFoundError(
                    f"Missing credentials file at {credentials_path}"
                )

            flow = InstalledAppFlow.from_client_secrets_file(
                credentials_path,
                SCOPES
            )
            creds = flow.run_local_server(port=0)

        # Save the credentials for the next run
        with open(token_path, 'w', encoding='utf-8') as token:
            token.write(creds.to_json())

    return cast(Credentials, creds)

def build_photos_service(credentials: Credentials,
                         config: Optional[ApiConfig] = None) -> Resource:
    """Build the photoslibrary v1 service against the configured endpoint.

    Args:
        credentials: Credentials used to authorize every request
        config: Supplies the API endpoint

    Returns:
        Discovery service object
    """
    config = config or ApiConfig()
    return build('photoslibrary', 'v1', credentials=credentials, static_discovery=False,
                 client_options={'api_endpoint': config.api_endpoint})

def authenticate_google_photos(token_path: str = 'token.json',
                               credentials_path: str = 'client_secret.json',
                               config: Optional[ApiConfig] = None) -> Resource:
    """Authenticate with Google Photos API and build the service.

    Args:
        token_path: Path to token.json file
        credentials_path: Path to client secret file
        config: Supplies the API endpoint

    Returns:
        Google Photos API service object

    Raises:
        AuthenticationError: If authentication fails
    """
    try:
        creds = get_credentials(token_path, credentials_path)
        return build_photos_service(creds, config)
    except Exception as e:
        raise AuthenticationError(f"Error authenticating with Google Photos: {e}") from e
