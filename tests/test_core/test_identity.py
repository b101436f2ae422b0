"""Tests for ordered identity resolution."""

from types import SimpleNamespace
from unittest.mock import MagicMock

from logfields.core.absence import ABSENT
from logfields.core.identity import (
    CallableIdentityResolver,
    IdentityResult,
    ResolutionStatus,
    UserObjectIdentityResolver,
    resolve_principal,
)


class TestCallableIdentityResolver:
    """Backends exposing the principal id directly."""

    def test_resolved(self):
        result = CallableIdentityResolver("auth", lambda: 7).resolve()

        assert result.status == ResolutionStatus.RESOLVED
        assert result.principal_id == 7
        assert result.backend == "auth"

    def test_anonymous(self):
        result = CallableIdentityResolver("auth", lambda: None).resolve()

        assert result.status == ResolutionStatus.ANONYMOUS
        assert result.principal_id is None

    def test_unavailable_skips_getter(self):
        getter = MagicMock(return_value=7)
        result = CallableIdentityResolver("auth", getter, available=lambda: False).resolve()

        assert result.status == ResolutionStatus.UNAVAILABLE
        getter.assert_not_called()

    def test_getter_failure_is_reported(self):
        getter = MagicMock(side_effect=RuntimeError("db down"))
        result = CallableIdentityResolver("auth", getter).resolve()

        assert result.status == ResolutionStatus.FAILED
        assert result.error == "RuntimeError: db down"

    def test_probe_failure_is_reported(self):
        probe = MagicMock(side_effect=ImportError("no module"))
        result = CallableIdentityResolver("auth", lambda: 7, available=probe).resolve()

        assert result.status == ResolutionStatus.FAILED


class TestUserObjectIdentityResolver:
    """Backends exposing the current user object."""

    def test_reads_id_attribute(self):
        user = SimpleNamespace(id=42, email="a@example.com")

        result = UserObjectIdentityResolver("sentinel", lambda: user).resolve()

        assert result.status == ResolutionStatus.RESOLVED
        assert result.principal_id == 42

    def test_custom_attribute(self):
        user = SimpleNamespace(uuid="u-1")

        result = UserObjectIdentityResolver("sso", lambda: user, attribute="uuid").resolve()

        assert result.principal_id == "u-1"

    def test_no_user_is_anonymous(self):
        result = UserObjectIdentityResolver("sentinel", lambda: None).resolve()

        assert result.status == ResolutionStatus.ANONYMOUS

    def test_missing_attribute_is_failure(self):
        result = UserObjectIdentityResolver("sentinel", lambda: object()).resolve()

        assert result.status == ResolutionStatus.FAILED


class TestResolvePrincipal:
    """Fallback across backends in the supplied order."""

    def test_first_resolved_wins(self):
        second = MagicMock()
        second.name = "sentinel"

        resolvers = [CallableIdentityResolver("auth", lambda: "alice"), second]

        assert resolve_principal(resolvers) == "alice"
        second.resolve.assert_not_called()

    def test_falls_through_to_third(self):
        resolvers = [
            CallableIdentityResolver("auth", lambda: 1, available=lambda: False),
            UserObjectIdentityResolver("sentinel", lambda: None, available=lambda: False),
            UserObjectIdentityResolver("sentry", lambda: SimpleNamespace(id=42)),
        ]

        assert resolve_principal(resolvers) == 42

    def test_anonymous_falls_through(self):
        resolvers = [
            CallableIdentityResolver("auth", lambda: None),
            CallableIdentityResolver("sentinel", lambda: 5),
        ]

        assert resolve_principal(resolvers) == 5

    def test_resolver_raising_is_skipped(self):
        broken = MagicMock()
        broken.name = "broken"
        broken.resolve.side_effect = RuntimeError("bug in backend")

        resolvers = [broken, CallableIdentityResolver("auth", lambda: 9)]

        assert resolve_principal(resolvers) == 9

    def test_malformed_result_is_skipped(self):
        class NoResultResolver:
            name = "no-result"

            def resolve(self):
                return None

        resolvers = [NoResultResolver(), CallableIdentityResolver("auth", lambda: 42)]

        assert resolve_principal(resolvers) == 42

    def test_only_malformed_results(self):
        legacy = MagicMock()
        legacy.name = "legacy"
        legacy.resolve.return_value = {"status": "resolved", "principal_id": 1}

        assert resolve_principal([legacy]) is ABSENT

    def test_nothing_resolves(self):
        resolvers = [
            CallableIdentityResolver("auth", MagicMock(side_effect=RuntimeError())),
            CallableIdentityResolver("sentinel", lambda: None),
            CallableIdentityResolver("sentry", lambda: 1, available=lambda: False),
        ]

        assert resolve_principal(resolvers) is ABSENT

    def test_no_resolvers(self):
        assert resolve_principal([]) is ABSENT

    def test_custom_resolver_protocol(self):
        class HeaderResolver:
            name = "header"

            def resolve(self) -> IdentityResult:
                return IdentityResult.resolved(self.name, "svc-account")

        assert resolve_principal([HeaderResolver()]) == "svc-account"
