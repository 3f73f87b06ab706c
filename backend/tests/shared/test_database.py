"""Tests for shared/database.py."""

from unittest.mock import MagicMock, patch

import pytest

from shared.database import get_supabase_client, reset_client_cache
from shared.exceptions import StorageError


@pytest.fixture(autouse=True)
def fresh_client_cache():
    reset_client_cache()
    yield
    reset_client_cache()


def configure(mock_settings: MagicMock, url: str, key: str) -> None:
    mock_settings.return_value.supabase_url = url
    mock_settings.return_value.supabase_service_role_key = key


class TestSupabaseClient:
    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_uses_service_role_key(self, mock_settings, mock_create):
        configure(mock_settings, "https://shop.supabase.co", "service-key")

        client = get_supabase_client()

        mock_create.assert_called_once_with("https://shop.supabase.co", "service-key")
        assert client is mock_create.return_value

    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_client_is_reused_until_reset(self, mock_settings, mock_create):
        configure(mock_settings, "https://shop.supabase.co", "service-key")
        mock_create.side_effect = lambda *args: MagicMock()

        first = get_supabase_client()
        assert get_supabase_client() is first

        reset_client_cache()
        assert get_supabase_client() is not first
        assert mock_create.call_count == 2

    @pytest.mark.parametrize(
        "url,key,missing",
        [
            ("", "", ["SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY"]),
            ("", "service-key", ["SUPABASE_URL"]),
            ("https://shop.supabase.co", "", ["SUPABASE_SERVICE_ROLE_KEY"]),
        ],
    )
    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_missing_configuration(self, mock_settings, mock_create, url, key, missing):
        configure(mock_settings, url, key)

        with pytest.raises(StorageError) as exc_info:
            get_supabase_client()

        assert exc_info.value.code == "STORAGE_NOT_CONFIGURED"
        assert exc_info.value.details == {"missing": missing}
        mock_create.assert_not_called()
