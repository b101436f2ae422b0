"""Protocol-Driven Interfaces: contracts between the registry and its host.

The host application owns sessions, requests, process tokens and
authentication. It hands the registry objects satisfying these protocols;
the registry only reads through them and never mutates host state.
"""

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from logfields.core.identity import IdentityResult


@runtime_checkable
class SessionAccessor(Protocol):
    """Read access to the current session store.

    Contract:
        - get_id returns the raw session identifier, or None when the
          session has none yet
        - get returns the value stored under key, or None when missing
    """

    def get_id(self) -> str | None: ...

    def get(self, key: str) -> Any: ...


@runtime_checkable
class RequestAccessor(Protocol):
    """Read access to the inbound request being served.

    Contract:
        - path returns the request path, with or without a leading slash
        - query_string returns the raw query string without "?", or None/""
        - server_address is the address the server accepted the request on
          (the SERVER_ADDR equivalent)
        - client_ip applies the host's proxy-forwarding rules
    """

    def path(self) -> str: ...

    def query_string(self) -> str | None: ...

    def method(self) -> str: ...

    def server_address(self) -> str | None: ...

    def client_ip(self) -> str | None: ...

    def user_agent(self) -> str | None: ...


@runtime_checkable
class TokenAccessor(Protocol):
    """Source of the current process/request identifier token."""

    def get_token(self) -> str: ...


@runtime_checkable
class IdentityResolver(Protocol):
    """One pluggable authentication backend.

    Contract:
        - name identifies the backend in results and logs
        - resolve reports resolved/anonymous/unavailable/failed and should
          not raise; the resolution chain tolerates it if it does
    """

    name: str

    def resolve(self) -> "IdentityResult": ...
