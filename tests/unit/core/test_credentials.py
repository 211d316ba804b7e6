"""Unit tests for the in-memory credential store."""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from larkexport.core import Credential, InMemoryCredentialStore, MissingCredentialError, Region


class TestInMemoryCredentialStore:
    def test_set_and_get(self):
        store = InMemoryCredentialStore()

        credential = store.set_token("t-abc")

        assert store.get_token() == "t-abc"
        assert store.is_authenticated is True
        assert credential.expires_at is not None

    def test_get_without_token(self):
        store = InMemoryCredentialStore()

        with pytest.raises(MissingCredentialError):
            store.get_token()

    @pytest.mark.parametrize("token", ["", "   "])
    def test_empty_token_rejected(self, token):
        store = InMemoryCredentialStore()

        with pytest.raises(MissingCredentialError):
            store.set_token(token)
        assert store.is_authenticated is False

    def test_non_critical_invalidate_is_silent(self):
        callback = MagicMock()
        store = InMemoryCredentialStore(on_critical_failure=callback)
        store.set_token("t-abc")

        store.invalidate()

        assert store.is_authenticated is False
        callback.assert_not_called()

    def test_critical_invalidate_notifies(self):
        callback = MagicMock()
        store = InMemoryCredentialStore(on_critical_failure=callback)
        store.set_token("t-abc")

        store.invalidate(critical=True)

        assert store.credential is None
        callback.assert_called_once_with()

    def test_critical_invalidate_without_callback(self):
        store = InMemoryCredentialStore()
        store.set_token("t-abc")

        store.invalidate(critical=True)

        assert store.is_authenticated is False

    def test_expiry_hint(self):
        store = InMemoryCredentialStore()
        assert store.expiry_hint_reached() is False

        store.set_token("t-abc", ttl=timedelta(minutes=1))
        assert store.expiry_hint_reached() is True

        store.set_token("t-abc", ttl=timedelta(hours=24))
        assert store.expiry_hint_reached() is False


def test_credential_model_validation():
    with pytest.raises(ValidationError):
        Credential(token="")
    assert Credential(token=" t ").token == "t"


def test_region_from_str():
    assert Region.from_str(" Lark ") is Region.LARK
    with pytest.raises(ValueError, match="Unknown region"):
        Region.from_str("mars")
