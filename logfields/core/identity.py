"""
Identity resolution for the userId field.

A host may run zero, one or several authentication backends. Each backend
is wrapped in an IdentityResolver and the resolvers are tried in the order
the host supplies them; the first one that finds an authenticated principal
wins. Backend failures are logged and skipped, never propagated.
"""

from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any

from pydantic import BaseModel

from logfields.core.absence import ABSENT
from logfields.core.errors import BackendUnavailableError
from logfields.core.interfaces import IdentityResolver
from logfields.core.logger import logger


class ResolutionStatus(str, Enum):
    """Outcome of asking one backend for the current principal."""

    RESOLVED = "resolved"
    ANONYMOUS = "anonymous"
    UNAVAILABLE = "unavailable"
    FAILED = "failed"


class IdentityResult(BaseModel):
    """Result reported by a single identity backend."""

    backend: str
    status: ResolutionStatus
    principal_id: Any = None
    error: str | None = None

    @classmethod
    def resolved(cls, backend: str, principal_id: Any) -> "IdentityResult":
        return cls(backend=backend, status=ResolutionStatus.RESOLVED, principal_id=principal_id)

    @classmethod
    def anonymous(cls, backend: str) -> "IdentityResult":
        return cls(backend=backend, status=ResolutionStatus.ANONYMOUS)

    @classmethod
    def unavailable(cls, backend: str) -> "IdentityResult":
        return cls(backend=backend, status=ResolutionStatus.UNAVAILABLE)

    @classmethod
    def failed(cls, backend: str, error: Exception) -> "IdentityResult":
        return cls(
            backend=backend,
            status=ResolutionStatus.FAILED,
            error=f"{type(error).__name__}: {error}",
        )


class CallableIdentityResolver:
    """
    Resolver for backends that expose the current principal id directly.

    Args:
        name: Backend name used in results and logs.
        id_getter: Returns the current principal id, or None when nobody is
            authenticated.
        available: Optional probe; when it returns False the backend is
            reported unavailable without calling id_getter.
    """

    def __init__(
        self,
        name: str,
        id_getter: Callable[[], Any],
        available: Callable[[], bool] | None = None,
    ):
        self.name = name
        self._id_getter = id_getter
        self._available = available

    def _lookup(self) -> Any:
        return self._id_getter()

    def resolve(self) -> IdentityResult:
        try:
            if self._available is not None and not self._available():
                raise BackendUnavailableError(self.name)
            principal_id = self._lookup()
        except BackendUnavailableError:
            return IdentityResult.unavailable(self.name)
        except Exception as e:
            logger.debug(f"Identity backend '{self.name}' failed: {e}")
            return IdentityResult.failed(self.name, e)

        # Falsy ids (0, "") count as unauthenticated, like a guest session
        if not principal_id:
            return IdentityResult.anonymous(self.name)
        return IdentityResult.resolved(self.name, principal_id)


class UserObjectIdentityResolver(CallableIdentityResolver):
    """
    Resolver for backends that expose the current user object.

    The principal id is read from `attribute` (default "id") of the object
    returned by user_getter. A None user means nobody is authenticated.
    """

    def __init__(
        self,
        name: str,
        user_getter: Callable[[], Any],
        attribute: str = "id",
        available: Callable[[], bool] | None = None,
    ):
        super().__init__(name, user_getter, available=available)
        self.attribute = attribute

    def _lookup(self) -> Any:
        user = self._id_getter()
        if user is None:
            return None
        return getattr(user, self.attribute)


def resolve_principal(resolvers: Iterable[IdentityResolver]) -> Any:
    """
    Return the first principal id any resolver finds, or ABSENT.

    Resolvers are tried in iteration order. Unavailable, anonymous and
    failing backends are skipped. Never raises.
    """
    for resolver in resolvers:
        name = getattr(resolver, "name", type(resolver).__name__)
        try:
            result = resolver.resolve()
        except Exception as e:
            logger.debug(f"Identity backend '{name}' raised during resolve: {e}")
            continue

        if not isinstance(result, IdentityResult):
            logger.debug(f"Identity backend '{name}' returned {type(result).__name__}, skipping")
            continue

        if result.status == ResolutionStatus.RESOLVED:
            return result.principal_id

        logger.debug(f"Identity backend '{name}' skipped: {result.status.value}")

    return ABSENT
