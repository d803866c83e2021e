# custom_serialize/tracking.py
from __future__ import annotations

"""
Explicit per-attribute change ("dirty") tracking for Django models.

A deep-copied snapshot of each tracked attribute is taken after a record is
loaded and after it is saved. An attribute is *changed* when its current value
differs from the snapshot, or when it has no snapshot yet (new records).
In-place mutations such as `record.ids.append(7)` are therefore detected.

Tracked attributes are the record's loaded (non-deferred) concrete field
attnames plus any extra names returned by `tracked_extra_attributes()`.
Deferred fields are never read, so tracking never triggers a query.

Cost: `copy.deepcopy` returns immutable values (str, bytes, int, Decimal,
datetime, UUID, ...) as-is, so plain column values are shared, not copied.
Only mutable values (the decoded lists and dicts) are duplicated per snapshot.
"""

import copy
from typing import Any, Iterable

_SNAPSHOT_ATTR = "_change_tracking_snapshot"


class ChangeTrackingMixin:
    """Mixin for `models.Model` subclasses; keeps its state in `__dict__`."""

    @classmethod
    def tracked_extra_attributes(cls) -> Iterable[str]:
        return ()

    def __getstate__(self):
        # copies and pickles get their own snapshot
        state = super().__getstate__()
        if _SNAPSHOT_ATTR in state:
            state[_SNAPSHOT_ATTR] = dict(state[_SNAPSHOT_ATTR])
        return state

    # ---- internals ---------------------------------------------------------
    def _snapshot(self) -> dict[str, Any]:
        return self.__dict__.setdefault(_SNAPSHOT_ATTR, {})

    def _tracked_attributes(self) -> list[str]:
        deferred = set(self.get_deferred_fields())
        names = [f.attname for f in self._meta.concrete_fields if f.attname not in deferred]
        for name in self.tracked_extra_attributes():
            if name not in deferred and name not in names:
                names.append(name)
        return names

    def _attnames(self, names: Iterable[str]) -> list[str]:
        """Concrete field names or attnames -> attnames; other names are dropped."""
        attnames = {}
        for field in self._meta.concrete_fields:
            attnames[field.name] = attnames[field.attname] = field.attname
        return [attnames[name] for name in names if name in attnames]

    def _keep_changes_except(self, previous: dict[str, Any], names: Iterable[str]) -> None:
        """Put back the `previous` snapshot for everything outside `names`."""
        names = set(names)
        snapshot = self._snapshot()
        kept = {name: value for name, value in snapshot.items() if name in names}
        snapshot.clear()
        snapshot.update({name: value for name, value in previous.items() if name not in names})
        snapshot.update(kept)

    # ---- public API --------------------------------------------------------
    def clear_attribute_change(self, name: str) -> None:
        """Mark `name` as unchanged at its current value."""
        self._snapshot()[name] = copy.deepcopy(getattr(self, name))

    def clear_changes(self, names: Iterable[str] | None = None) -> None:
        """Mark every tracked attribute (or only `names`) as unchanged."""
        for name in self._tracked_attributes() if names is None else names:
            self.clear_attribute_change(name)

    def attribute_changed(self, name: str) -> bool:
        snapshot = self._snapshot()
        if name not in snapshot:
            return True
        return getattr(self, name) != snapshot[name]

    @property
    def changed_attributes(self) -> list[str]:
        return [name for name in self._tracked_attributes() if self.attribute_changed(name)]

    @property
    def changes(self) -> dict[str, tuple[Any, Any]]:
        """`{name: (snapshot value or None, current value)}` for changed attributes."""
        snapshot = self._snapshot()
        return {name: (snapshot.get(name), getattr(self, name)) for name in self.changed_attributes}
