"""
Starlette/FastAPI adapters.

Wraps a Starlette request (FastAPI's Request is the same class) in the
accessor protocols the registry consumes, and provides a FastAPI dependency
that wires a fresh registry per request.
"""

from collections.abc import Iterable
from typing import Any

from fastapi import Request

from logfields.core.config import settings
from logfields.core.interfaces import IdentityResolver, TokenAccessor
from logfields.core.registry import FieldRegistry
from logfields.core.token import TokenProvider

# Shared by every registry built without an explicit token provider
process_token = TokenProvider()


class StarletteRequestAccessor:
    """RequestAccessor over a Starlette request."""

    def __init__(
        self,
        request: Request,
        trust_forwarded_headers: bool | None = None,
        forwarded_for_header: str | None = None,
    ):
        self.request = request
        self.trust_forwarded_headers = (
            settings.trust_forwarded_headers
            if trust_forwarded_headers is None
            else trust_forwarded_headers
        )
        self.forwarded_for_header = forwarded_for_header or settings.forwarded_for_header

    def path(self) -> str:
        return self.request.url.path

    def query_string(self) -> str | None:
        return self.request.url.query or None

    def method(self) -> str:
        return self.request.method

    def server_address(self) -> str | None:
        server = self.request.scope.get("server")
        if not server:
            return None
        return server[0]

    def client_ip(self) -> str | None:
        if self.trust_forwarded_headers:
            forwarded = self.request.headers.get(self.forwarded_for_header)
            if forwarded:
                # Left-most entry is the originating client
                client = forwarded.split(",")[0].strip()
                if client:
                    return client

        if self.request.client is None:
            return None
        return self.request.client.host

    def user_agent(self) -> str | None:
        return self.request.headers.get("user-agent")


class StarletteSessionAccessor:
    """
    SessionAccessor over the session populated by Starlette's SessionMiddleware.

    Starlette sessions carry no identifier of their own, so the host stores
    one under `id_key`. Without SessionMiddleware every lookup returns None.
    """

    def __init__(self, request: Request, id_key: str | None = None):
        self.request = request
        self.id_key = id_key or settings.session_id_key

    def _session(self) -> dict[str, Any]:
        # request.session asserts when the middleware is not installed
        if "session" not in self.request.scope:
            return {}
        return self.request.session

    def get_id(self) -> str | None:
        return self._session().get(self.id_key)

    def get(self, key: str) -> Any:
        return self._session().get(key)


def build_registry(
    request: Request,
    token_provider: TokenAccessor | None = None,
    identity_resolvers: Iterable[IdentityResolver] | None = None,
    environment: str | None = None,
) -> FieldRegistry:
    """
    Wire a registry for one request.

    Without a token_provider the process-wide `process_token` is used, so
    processIdentifier is always available.

    Starlette sessions carry no identifier. sessionId stays absent unless the
    host stores its own id in the session under `settings.session_id_key`
    (LOGFIELDS_SESSION_ID_KEY, default "_session_id"), e.g. on login:
    `request.session[settings.session_id_key] = secrets.token_urlsafe(32)`.
    """
    registry = FieldRegistry(identity_resolvers=identity_resolvers)
    registry.set_environment(environment if environment is not None else settings.environment)
    registry.set_request_accessor(StarletteRequestAccessor(request))
    registry.set_session_accessor(StarletteSessionAccessor(request))
    registry.set_token_accessor(token_provider if token_provider is not None else process_token)
    return registry


def get_field_registry(request: Request) -> FieldRegistry:
    """
    FastAPI dependency returning a per-request FieldRegistry.

    Reads optional `token_provider` and `identity_resolvers` from
    `request.app.state`, set by the host at startup.
    """
    state = request.app.state
    return build_registry(
        request,
        token_provider=getattr(state, "token_provider", None),
        identity_resolvers=getattr(state, "identity_resolvers", None),
    )
