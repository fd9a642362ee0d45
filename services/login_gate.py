"""
Shared-password login gate.

A convenience that keeps casual visitors out of the review UI. It is not
a security boundary: the password is a plain shared string and the
authenticated flag is stored unprotected in local storage.
"""

import logging

import config
from .local_storage import LocalStorage

logger = logging.getLogger(__name__)


class LoginGate:
    """Compares input against the shared password and remembers success."""

    def __init__(self, storage: LocalStorage, password: str = config.ACCESS_PASSWORD):
        self.storage = storage
        self.password = password

    def check(self, password: str) -> bool:
        return (password or "") == self.password

    def login(self, password: str, reviewer: str = "") -> bool:
        """
        Try to log in.

        Returns:
            True if the password matched; the flag and reviewer name are stored
        """
        if not self.check(password):
            logger.info("Rejected login attempt")
            return False

        try:
            self.storage.set_item(config.AUTH_KEY, "true")
            self.storage.set_item(config.USER_KEY, reviewer.strip())
        except OSError as e:
            logger.warning(f"Could not remember login: {e}")
        return True

    def is_authenticated(self) -> bool:
        try:
            return self.storage.get_item(config.AUTH_KEY) == "true"
        except (OSError, ValueError):
            return False

    def reviewer(self) -> str:
        try:
            return self.storage.get_item(config.USER_KEY) or ""
        except (OSError, ValueError):
            return ""

    def logout(self) -> None:
        try:
            self.storage.remove_item(config.AUTH_KEY)
            self.storage.remove_item(config.USER_KEY)
        except OSError as e:
            logger.warning(f"Could not clear login: {e}")
