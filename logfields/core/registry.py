"""
Field Registry - named providers of log record metadata.

The registry maps field names to providers. It is pre-populated with the
built-in fields and may be extended or overridden at runtime; a later
registration under the same name replaces the earlier one. Every lookup goes
through the mapping, so an override of a built-in name always wins.

Providers recompute on each call. Nothing is cached.
"""

import hashlib
import threading
from collections.abc import Callable, Iterable
from typing import Any

from logfields.core.absence import ABSENT, absent_if_none, is_absent
from logfields.core.errors import MissingRequiredContextError, UnknownFieldError
from logfields.core.identity import resolve_principal
from logfields.core.interfaces import (
    IdentityResolver,
    RequestAccessor,
    SessionAccessor,
    TokenAccessor,
)

Provider = Callable[..., Any]

# Built-in fields that need an argument and are skipped by collect() by default
ARGUMENT_FIELDS = frozenset({"fromSession"})


class FieldRegistry:
    """
    Registry of field providers for one logical scope (usually one request).

    Context handles are injected after construction through the set_*
    methods. A field whose optional context is missing evaluates to ABSENT;
    processIdentifier without a token accessor raises
    MissingRequiredContextError.

    A single lock guards the mapping and the handles, so an instance may be
    shared across threads. Providers run outside the lock.
    """

    def __init__(
        self,
        identity_resolvers: Iterable[IdentityResolver] | None = None,
        environment: str | None = None,
    ):
        self._lock = threading.RLock()
        self._providers: dict[str, Provider] = {}

        self._session: SessionAccessor | None = None
        self._request: RequestAccessor | None = None
        self._token: TokenAccessor | None = None
        self._environment = environment
        self._identity_resolvers: list[IdentityResolver] = list(identity_resolvers or [])

        # Defaults are bound before anything external can register
        for name, provider in self._default_providers().items():
            self.register(name, provider)

    def _default_providers(self) -> dict[str, Provider]:
        return {
            "sessionId": self._session_id,
            "url": self._url,
            "requestMethod": self._request_method,
            "serverIp": self._server_ip,
            "clientIp": self._client_ip,
            "clientUserAgent": self._client_user_agent,
            "environment": self._environment_label,
            "fromSession": self._from_session,
            "processIdentifier": self._process_identifier,
            "userId": self._user_id,
        }

    # --- Registration and dispatch ---

    def register(self, name: str, provider: Provider) -> None:
        """
        Bind name to provider, replacing any existing binding.

        Provider arity is not checked here; a mismatch surfaces when the
        field is evaluated.
        """
        if not isinstance(name, str) or not name:
            raise ValueError("Field name must be a non-empty string")
        with self._lock:
            self._providers[name] = provider

    def evaluate(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """
        Evaluate a field by name.

        Args:
            name: Registered field name.
            *args, **kwargs: Passed through to the provider.

        Returns:
            The provider's value, or ABSENT when no value is available.

        Raises:
            UnknownFieldError: If no provider is registered under name.
            Whatever the provider raises, unchanged.
        """
        with self._lock:
            if name not in self._providers:
                raise UnknownFieldError(name)
            provider = self._providers[name]
        return provider(*args, **kwargs)

    def names(self) -> list[str]:
        """Registered field names in registration order."""
        with self._lock:
            return list(self._providers)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._providers

    def collect(self, names: Iterable[str] | None = None) -> dict[str, Any]:
        """
        Evaluate several fields and drop the absent ones.

        With names=None every registered field is evaluated except those
        that need an argument (fromSession). Errors propagate.
        """
        if names is None:
            names = [name for name in self.names() if name not in ARGUMENT_FIELDS]

        values = {}
        for name in names:
            value = self.evaluate(name)
            if not is_absent(value):
                values[name] = value
        return values

    # --- Context injection ---

    def set_session_accessor(self, session: SessionAccessor | None) -> None:
        with self._lock:
            self._session = session

    def set_request_accessor(self, request: RequestAccessor | None) -> None:
        with self._lock:
            self._request = request

    def set_environment(self, environment: str | None) -> None:
        with self._lock:
            self._environment = environment

    def set_token_accessor(self, token: TokenAccessor | None) -> None:
        with self._lock:
            self._token = token

    def set_identity_resolvers(self, resolvers: Iterable[IdentityResolver]) -> None:
        """Replace the ordered list of identity backends used by userId."""
        with self._lock:
            self._identity_resolvers = list(resolvers)

    # --- Built-in providers ---

    def _session_id(self) -> Any:
        """SHA-1 hex digest of the session id; the raw id never reaches a record."""
        session = self._session
        if session is None:
            return ABSENT

        session_id = session.get_id()
        if session_id is None:
            return ABSENT

        return hashlib.sha1(str(session_id).encode("utf-8")).hexdigest()

    def _url(self) -> Any:
        request = self._request
        if request is None:
            return ABSENT

        url = request.path() or ""
        if not url.startswith("/"):
            url = "/" + url

        query_string = request.query_string()
        if query_string:
            url += "?" + query_string

        return url

    def _request_method(self) -> Any:
        request = self._request
        if request is None:
            return ABSENT
        return absent_if_none(request.method())

    def _server_ip(self) -> Any:
        request = self._request
        if request is None:
            return ABSENT
        return absent_if_none(request.server_address())

    def _client_ip(self) -> Any:
        request = self._request
        if request is None:
            return ABSENT
        return absent_if_none(request.client_ip())

    def _client_user_agent(self) -> Any:
        request = self._request
        if request is None:
            return ABSENT
        return absent_if_none(request.user_agent())

    def _environment_label(self) -> Any:
        return absent_if_none(self._environment)

    def _from_session(self, key: str) -> Any:
        session = self._session
        if session is None:
            return ABSENT
        return absent_if_none(session.get(key))

    def _user_id(self) -> Any:
        with self._lock:
            resolvers = list(self._identity_resolvers)
        return resolve_principal(resolvers)

    def _process_identifier(self) -> Any:
        token = self._token
        if token is None:
            raise MissingRequiredContextError("processIdentifier", "token accessor")
        return token.get_token()
