"""Process identifier tokens for the processIdentifier field."""

from uuid import uuid4

from logfields.core.logger import logger


class TokenProvider:
    """
    Default TokenAccessor: one random token per process or unit of work.

    Records sharing a token can be correlated as coming from the same
    process. Call regenerate() when a new unit of work starts (e.g. a queued
    job picked up by a long-running worker).
    """

    def __init__(self):
        self._token = self._generate()

    @staticmethod
    def _generate() -> str:
        return uuid4().hex

    def get_token(self) -> str:
        """Return the current token."""
        return self._token

    def regenerate(self) -> str:
        """Issue and return a new token."""
        self._token = self._generate()
        logger.debug(f"Issued new process token: {self._token}")
        return self._token
