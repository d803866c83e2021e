# custom_serialize/hooks.py
from __future__ import annotations

"""
Explicit lifecycle hook chains for model classes.

Each model class carries an immutable mapping `phase -> tuple[hook, ...]`
composed at registration time: a newly registered hook is placed in front of
the chain inherited from the nearest ancestor, so a class's own hooks run
first and its ancestors' hooks run after. Ancestor chains are never mutated.

Hooks are plain callables taking the record instance. In `BEFORE_SAVE` a hook
returning exactly `False` vetoes the save; any other return value continues.
"""

import enum
import logging
from types import MappingProxyType
from typing import Any, Callable, Mapping

from .codecs import Codec

logger = logging.getLogger(__name__)

HOOKS_ATTR = "_lifecycle_hooks"

Hook = Callable[[Any], Any]


class Phase(str, enum.Enum):
    AFTER_FIND = "after_find"
    BEFORE_SAVE = "before_save"
    AFTER_SAVE = "after_save"


def hook_chain(model_cls: type, phase: Phase) -> tuple[Hook, ...]:
    chains: Mapping[Phase, tuple[Hook, ...]] = getattr(model_cls, HOOKS_ATTR, None) or {}
    return chains.get(Phase(phase), ())


def register_hook(model_cls: type, phase: Phase, hook: Hook) -> None:
    """Prepend `hook` to `model_cls`'s chain for `phase`."""
    if not callable(hook):
        raise TypeError(f"lifecycle hook must be callable; got {type(hook)!r}")
    phase = Phase(phase)
    chains = dict(getattr(model_cls, HOOKS_ATTR, None) or {})
    chains[phase] = (hook,) + chains.get(phase, ())
    setattr(model_cls, HOOKS_ATTR, MappingProxyType(chains))
    logger.debug(
        "hooks.registered model=%s phase=%s chain_length=%d",
        model_cls.__name__,
        phase.value,
        len(chains[phase]),
    )


def run_hooks(record: Any, phase: Phase) -> bool:
    """Run `record`'s chain for `phase`; False only when a save hook vetoes."""
    phase = Phase(phase)
    for hook in hook_chain(type(record), phase):
        result = hook(record)
        if phase is Phase.BEFORE_SAVE and result is False:
            logger.debug("hooks.vetoed model=%s hook=%r", type(record).__name__, hook)
            return False
    return True


def _deferred(record: Any) -> set[str]:
    get_deferred = getattr(record, "get_deferred_fields", None)
    return set(get_deferred()) if get_deferred is not None else set()


class _CodecHook:
    def __init__(self, codecs: Mapping[str, Codec]) -> None:
        self.codecs = MappingProxyType(dict(codecs))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(self.codecs)})"


class DecodeAttributes(_CodecHook):
    """Raw -> structured for each attribute, then clear its change flag.

    Used for both `AFTER_FIND` and `AFTER_SAVE`. Deferred fields are skipped;
    Django loads them later through `refresh_from_db`, which copies an
    already decoded value.
    """

    def __call__(self, record: Any) -> bool:
        deferred = _deferred(record)
        for attribute, codec in self.codecs.items():
            if attribute in deferred:
                continue
            setattr(record, attribute, codec.decode(getattr(record, attribute)))
            record.clear_attribute_change(attribute)
        return True


class EncodeAttributes(_CodecHook):
    """Structured -> raw for each attribute, all or nothing.

    Every value is encoded before any attribute is assigned, so an encode
    error leaves the record untouched. The structured values are stashed on
    the record so `save()` can put them back if the write fails.
    """

    def __call__(self, record: Any) -> bool:
        deferred = _deferred(record)
        staged: list[tuple[str, Any, Any]] = []
        for attribute, codec in self.codecs.items():
            if attribute in deferred:
                continue
            value = getattr(record, attribute)
            staged.append((attribute, value, codec.encode(value)))

        for attribute, value, raw in staged:
            record.stash_structured_value(attribute, value)
            setattr(record, attribute, raw)
        return True


__all__ = [
    "DecodeAttributes",
    "EncodeAttributes",
    "Hook",
    "Phase",
    "hook_chain",
    "register_hook",
    "run_hooks",
]
