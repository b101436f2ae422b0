"""Shared pytest fixtures for logfields tests."""

from typing import Any

import pytest

from logfields.core.registry import FieldRegistry


class FakeSession:
    """In-memory SessionAccessor."""

    def __init__(self, session_id: str | None = "abc123", data: dict[str, Any] | None = None):
        self.session_id = session_id
        self.data = data or {}

    def get_id(self) -> str | None:
        return self.session_id

    def get(self, key: str) -> Any:
        return self.data.get(key)


class FakeRequest:
    """In-memory RequestAccessor."""

    def __init__(
        self,
        path: str = "/",
        query_string: str | None = None,
        method: str = "GET",
        server_address: str | None = "10.0.0.1",
        client_ip: str | None = "192.168.1.5",
        user_agent: str | None = "Mozilla/5.0",
    ):
        self._path = path
        self._query_string = query_string
        self._method = method
        self._server_address = server_address
        self._client_ip = client_ip
        self._user_agent = user_agent

    def path(self) -> str:
        return self._path

    def query_string(self) -> str | None:
        return self._query_string

    def method(self) -> str:
        return self._method

    def server_address(self) -> str | None:
        return self._server_address

    def client_ip(self) -> str | None:
        return self._client_ip

    def user_agent(self) -> str | None:
        return self._user_agent


class FakeToken:
    """Fixed-value TokenAccessor."""

    def __init__(self, token: str = "token-1"):
        self.token = token

    def get_token(self) -> str:
        return self.token


@pytest.fixture
def registry() -> FieldRegistry:
    """A registry with no context injected."""
    return FieldRegistry()


@pytest.fixture
def session() -> FakeSession:
    return FakeSession(data={"k": "v", "locale": "en"})


@pytest.fixture
def request_accessor() -> FakeRequest:
    return FakeRequest(path="foo/bar", query_string="a=1", method="POST")


@pytest.fixture
def wired_registry(session, request_accessor) -> FieldRegistry:
    """A registry with every context handle injected."""
    registry = FieldRegistry()
    registry.set_session_accessor(session)
    registry.set_request_accessor(request_accessor)
    registry.set_environment("staging")
    registry.set_token_accessor(FakeToken())
    return registry


@pytest.fixture
def make_session():
    """Factory for FakeSession instances."""
    return FakeSession


@pytest.fixture
def make_request():
    """Factory for FakeRequest instances."""
    return FakeRequest


@pytest.fixture
def make_token():
    """Factory for FakeToken instances."""
    return FakeToken
