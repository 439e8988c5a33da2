import pytest

from cloud_auth.credentials import Credential, CredentialIngredients, issue_credential, now_ms


def test_expiry_is_issue_time_plus_lifetime():
    credential = issue_credential(
        "google-drive",
        CredentialIngredients(lifetime_seconds=3600),
        issued_at_ms=1_000_000,
    )

    assert credential.expires_at == 1_000_000 + 3_600_000


def test_default_lifetime_is_one_hour():
    before = now_ms()
    credential = issue_credential("google-drive")

    assert before + 3_600_000 <= credential.expires_at <= now_ms() + 3_600_000
    assert not credential.is_expired()


def test_fresh_values_per_call():
    first = issue_credential("google-drive")
    second = issue_credential("google-drive")

    assert first.access_token != second.access_token
    assert first.refresh_token != second.refresh_token
    assert first.user_id != second.user_id


def test_supplied_ingredients_win():
    credential = issue_credential(
        "dropbox",
        CredentialIngredients(access_token="at", refresh_token="rt", user_id="dbid:1"),
    )

    assert (credential.provider, credential.access_token, credential.refresh_token, credential.user_id) == (
        "dropbox", "at", "rt", "dbid:1",
    )


@pytest.mark.parametrize("lifetime", [0, -5])
def test_non_positive_lifetime_rejected(lifetime):
    with pytest.raises(ValueError):
        issue_credential("google-drive", CredentialIngredients(lifetime_seconds=lifetime))


def test_is_expired():
    credential = Credential("google-drive", "a", "r", expires_at=5_000, user_id="u")

    assert credential.is_expired(5_000)
    assert not credential.is_expired(4_999)


def test_to_dict_and_repr():
    credential = Credential("google-drive", "secret-at", "secret-rt", expires_at=42, user_id="u1")

    assert credential.to_dict() == {
        "provider": "google-drive",
        "accessToken": "secret-at",
        "refreshToken": "secret-rt",
        "expiresAt": 42,
        "userId": "u1",
    }
    assert "secret" not in repr(credential)
