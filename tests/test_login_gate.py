"""
Unit tests for the shared-password login gate.
"""

import os
import tempfile

import config
from services import LocalStorage, LoginGate


class UnavailableStorage(LocalStorage):
    def get_item(self, key):
        raise PermissionError("storage disabled")

    def set_item(self, key, value):
        raise PermissionError("storage disabled")

    def remove_item(self, key):
        raise PermissionError("storage disabled")


class TestLoginGate:
    """Test login, persistence of the flag and logout."""

    def test_wrong_password(self):
        with tempfile.TemporaryDirectory() as tmp:
            gate = LoginGate(LocalStorage(tmp), password="secret")
            assert gate.login("guess", "Ana") is False
            assert gate.is_authenticated() is False

    def test_correct_password_is_remembered(self):
        with tempfile.TemporaryDirectory() as tmp:
            LoginGate(LocalStorage(tmp), password="secret").login("secret", " Ana ")

            gate = LoginGate(LocalStorage(tmp), password="secret")
            assert gate.is_authenticated() is True
            assert gate.reviewer() == "Ana"
            assert LocalStorage(tmp).get_item(config.AUTH_KEY) == "true"

    def test_logout(self):
        with tempfile.TemporaryDirectory() as tmp:
            gate = LoginGate(LocalStorage(tmp), password="secret")
            gate.login("secret", "Ana")
            gate.logout()

            assert gate.is_authenticated() is False
            assert gate.reviewer() == ""

    def test_logout_keeps_annotations(self):
        with tempfile.TemporaryDirectory() as tmp:
            storage = LocalStorage(tmp)
            storage.set_item(config.ANNOTATIONS_KEY, "{}")
            gate = LoginGate(storage, password="secret")
            gate.login("secret")
            gate.logout()

            assert storage.get_item(config.ANNOTATIONS_KEY) == "{}"

    def test_empty_password(self):
        with tempfile.TemporaryDirectory() as tmp:
            gate = LoginGate(LocalStorage(tmp), password="secret")
            assert gate.check(None) is False
            assert gate.check("") is False

    def test_default_password_from_config(self):
        with tempfile.TemporaryDirectory() as tmp:
            assert LoginGate(LocalStorage(tmp)).password == config.ACCESS_PASSWORD

    def test_undecodable_flag_is_not_authenticated(self):
        with tempfile.TemporaryDirectory() as tmp:
            with open(os.path.join(tmp, config.AUTH_KEY), "wb") as f:
                f.write(b"\xff\xfe")
            gate = LoginGate(LocalStorage(tmp), password="secret")
            assert gate.is_authenticated() is False

    def test_unavailable_storage(self):
        """Test storage errors never escape; the session still logs in."""
        gate = LoginGate(UnavailableStorage("/nonexistent"), password="secret")

        assert gate.login("secret", "Ana") is True
        assert gate.is_authenticated() is False
        assert gate.reviewer() == ""
        gate.logout()
