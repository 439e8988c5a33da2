import pytest

from cloud_oauth.validators import get_configured_providers, is_valid_client_id


@pytest.mark.parametrize("value", [
    "demo-client-id",
    "demo-onedrive-client-id",
    "your-client-id",
    "your-google-client-id",
    "abc123",
    "short",
    None,
    "",
    "xxxxxxxxxxxxxxxx",
    "test-client-id",
    "example-client-id",
    "placeholder-value",
    "00000000-0000-0000-0000-000000000000",
])
def test_rejects_placeholders(value):
    assert is_valid_client_id(value) is False


@pytest.mark.parametrize("value", [
    "abc123def456ghi789",
    "real-client-id-from-provider",
    "1234567890abcdef",
    "3f2504e0-4f89-11d3-9a0c-0305e82c3301",
])
def test_accepts_real_ids(value):
    assert is_valid_client_id(value) is True


def test_configured_providers_in_catalog_order():
    configured = get_configured_providers({
        "onedrive": "3f2504e0-4f89-11d3-9a0c-0305e82c3301",
        "dropbox": "your-dropbox-client-id",
        "google-drive": "1234567890abcdef",
    })

    assert configured == ("google-drive", "onedrive")
