"""Typed "no value" marker returned by field providers."""

from typing import Any, ClassVar


class Absent:
    """
    Result of a field that has no value right now.

    Distinct from None and from an empty string so a pipeline can omit the
    field instead of logging a misleading empty value. There is exactly one
    instance, ABSENT.
    """

    _instance: ClassVar["Absent | None"] = None

    def __new__(cls) -> "Absent":
        """Singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"

    def __reduce__(self):
        return (Absent, ())


ABSENT = Absent()


def is_absent(value: Any) -> bool:
    """Return True if value is the absence marker."""
    return value is ABSENT


def absent_if_none(value: Any) -> Any:
    """Normalize a None coming from a host accessor to ABSENT."""
    return ABSENT if value is None else value
