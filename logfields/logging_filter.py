"""Attach evaluated registry fields to stdlib log records."""

import logging
from collections.abc import Callable, Iterable

from logfields.core.registry import FieldRegistry


class FieldsFilter(logging.Filter):
    """
    Logging filter that sets `record.fields` from a FieldRegistry.

    `registry` is either a FieldRegistry or a zero-argument callable
    returning the registry of the current scope (or None outside any scope,
    in which case `record.fields` is an empty dict). Absent fields are
    omitted. Records are never dropped.
    """

    def __init__(
        self,
        registry: FieldRegistry | Callable[[], FieldRegistry | None],
        names: Iterable[str] | None = None,
        name: str = "",
    ):
        super().__init__(name)
        self._registry = registry
        self._names = list(names) if names is not None else None

    def _current_registry(self) -> FieldRegistry | None:
        if isinstance(self._registry, FieldRegistry):
            return self._registry
        return self._registry()

    def filter(self, record: logging.LogRecord) -> bool:
        registry = self._current_registry()
        record.fields = registry.collect(self._names) if registry is not None else {}
        return True
