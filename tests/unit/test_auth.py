"""Unit tests for authentication utilities."""
import json
import pytest
from unittest.mock import MagicMock, patch, mock_open
from google.oauth2.credentials import Credentials

from photo_frame.config import ApiConfig
from photo_frame.models import AuthenticationError
from photo_frame.utils.auth import (
    SCOPES,
    authenticate_google_photos,
    build_photos_service,
    get_credentials,
)

def test_scopes_are_read_only():
    """Only library read access is requested."""
    assert SCOPES == ['https://www.googleapis.com/auth/photoslibrary.readonly']

def test_get_credentials_from_token():
    """Test getting credentials from existing token file."""
    with patch('os.path.exists') as mock_exists, \
         patch.object(Credentials, 'from_authorized_user_file') as mock_from_file:

        mock_exists.return_value = True
        mock_creds = MagicMock()
        mock_creds.valid = True
        mock_from_file.return_value = mock_creds

        creds = get_credentials("cached_token.json", "client_secret.json")

        assert creds is mock_creds
        mock_from_file.assert_called_once_with("cached_token.json", SCOPES)
        mock_creds.refresh.assert_not_called()

def test_get_credentials_refresh():
    """Test refreshing expired credentials."""
    with patch('os.path.exists') as mock_exists, \
         patch.object(Credentials, 'from_authorized_user_file') as mock_from_file, \
         patch('photo_frame.utils.auth.Request') as mock_request_class, \
         patch('builtins.open', mock_open()) as mock_file:

        mock_exists.return_value = True
        mock_creds = MagicMock()
        mock_creds.valid = False
        mock_creds.expired = True
        mock_creds.refresh_token = "refresh"
        mock_creds.to_json.return_value = json.dumps({"token": "refreshed"})
        mock_from_file.return_value = mock_creds

        creds = get_credentials("cached_token.json", "client_secret.json")

        assert creds is mock_creds
        mock_creds.refresh.assert_called_once_with(mock_request_class.return_value)
        mock_file().write.assert_called_once_with(json.dumps({"token": "refreshed"}))

def test_get_credentials_new_flow():
    """Test running the installed app flow when no token exists."""
    with patch('os.path.exists') as mock_exists, \
         patch('photo_frame.utils.auth.InstalledAppFlow.from_client_secrets_file') as mock_from_secrets, \
         patch('builtins.open', mock_open()) as mock_file:

        # token file is missing, client secret is present
        mock_exists.side_effect = [False, True]

        mock_flow = MagicMock()
        mock_creds = MagicMock()
        mock_creds.to_json.return_value = json.dumps({"token": "new"})
        mock_flow.run_local_server.return_value = mock_creds
        mock_from_secrets.return_value = mock_flow

        creds = get_credentials("cached_token.json", "client_secret.json")

        assert creds is mock_creds
        mock_from_secrets.assert_called_once_with("client_secret.json", SCOPES)
        mock_flow.run_local_server.assert_called_once_with(port=0)
        mock_file.assert_called_with("cached_token.json", 'w', encoding='utf-8')

def test_get_credentials_missing_credentials_file():
    """Test error when the client secret file is missing."""
    with patch('os.path.exists') as mock_exists:
        mock_exists.return_value = False
        with pytest.raises(FileNotFoundError):
            get_credentials("cached_token.json", "missing_secret.json")

def test_build_photos_service_uses_configured_endpoint(mocker):
    """The discovery service is pointed at the configured endpoint."""
    mock_build = mocker.patch('photo_frame.utils.auth.build')
    creds = mocker.Mock()

    service = build_photos_service(creds, ApiConfig(api_endpoint="https://photos.example.test/"))

    assert service is mock_build.return_value
    mock_build.assert_called_once_with(
        'photoslibrary', 'v1', credentials=creds, static_discovery=False,
        client_options={'api_endpoint': "https://photos.example.test/"})

def test_authenticate_google_photos(mocker):
    """Test authenticating with Google Photos API."""
    mock_service = mocker.Mock()
    mock_build = mocker.patch('photo_frame.utils.auth.build', return_value=mock_service)

    mock_creds = mocker.Mock()
    mock_get = mocker.patch('photo_frame.utils.auth.get_credentials', return_value=mock_creds)

    service = authenticate_google_photos("t.json", "s.json")
    assert service == mock_service
    mock_get.assert_called_once_with("t.json", "s.json")
    assert mock_build.call_args.kwargs['credentials'] is mock_creds

    mock_build.side_effect = Exception("API Error")
    with pytest.raises(AuthenticationError) as exc_info:
        authenticate_google_photos()
    assert "Error authenticating with Google Photos" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, Exception)
