# custom_serialize/codecs.py
from __future__ import annotations

"""
Codec pairs and the named codec registry.

A **codec** is the `(serialize, unserialize)` function pair that converts an
attribute between its *structured* in-memory value (e.g. `[4, 5]`) and the
*raw* value stored in the database column (e.g. `"4,5"`).

Registry policy:
- **Duplicate**: the same codec registered again under the same name → skip
  idempotently (DEBUG log only).
- **Collision**: a *different* codec registered under a taken name → behavior
  controlled by `CUSTOM_SERIALIZE_COLLISIONS_STRICT` (default True):
    * True  → raise `CodecDuplicateRegistrationError`
    * False → log WARNING and replace
- **Invalid name or value** → always raise `CodecRegistrationError`.

Built-in codecs:
- "json"                      – compact JSON text (the default)
- "comma_separated_integers"  – `[4, 5]` ⇄ `"4,5"`, empty list stored as NULL
"""

import json
import logging
import threading
from typing import Any, Callable, Iterable, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError

from .exceptions import (
    CodecConfigurationError,
    CodecDuplicateRegistrationError,
    CodecNotFoundError,
    CodecRegistrationError,
)
from .settings import collisions_strict, default_codec_name

logger = logging.getLogger(__name__)

__all__ = [
    "Codec",
    "CodecRegistry",
    "JSON_CODEC",
    "COMMA_SEPARATED_INTEGERS",
    "OPTION_KEYS",
    "codecs",
    "get_codec",
    "json_serialize",
    "json_unserialize",
    "register_codec",
    "resolve_codec",
]

OPTION_KEYS = frozenset({"serialize", "unserialize", "codec"})


class Codec(BaseModel):
    """An immutable `(serialize, unserialize)` pair.

    `unserialize(serialize(x)) == x` is expected for every value the
    application stores. That law is a contract on the supplied functions; it
    is not enforced here.
    """

    model_config = ConfigDict(frozen=True)

    serialize: Callable[[Any], Any]
    unserialize: Callable[[Any], Any]
    name: str | None = None

    def encode(self, value: Any) -> Any:
        """Structured value -> raw stored value."""
        return self.serialize(value)

    def decode(self, raw: Any) -> Any:
        """Raw stored value -> structured value."""
        return self.unserialize(raw)


# ----------------------------------------------------------------------
# Built-in codec functions
# ----------------------------------------------------------------------
def json_serialize(value: Any) -> str:
    # no fallback encoder: anything json cannot load back (Decimal, date, set) raises TypeError
    return json.dumps(value, separators=(",", ":"))


def json_unserialize(raw: Any) -> Any:
    return json.loads(raw)


def _join_integers(value: Iterable[int] | None) -> str | None:
    # blank list is stored as NULL
    if not value:
        return None
    return ",".join(str(int(item)) for item in value)


def _split_integers(raw: str | None) -> list[int]:
    if raw is None or not raw.strip():
        return []
    return [int(part) for part in raw.split(",")]


JSON_CODEC = Codec(name="json", serialize=json_serialize, unserialize=json_unserialize)

COMMA_SEPARATED_INTEGERS = Codec(
    name="comma_separated_integers",
    serialize=_join_integers,
    unserialize=_split_integers,
)


# -------------------------
# Registry
# -------------------------
class CodecRegistry:
    """Registry of `Codec` instances keyed by name."""

    def __init__(self) -> None:
        self._by_name: dict[str, Codec] = {}
        self._lock = threading.RLock()

    @staticmethod
    def _validate(name: Any, codec: Any) -> str:
        if not isinstance(name, str):
            raise CodecRegistrationError(f"codec name must be str; got {type(name)!r}")
        if not name.strip():
            raise CodecRegistrationError("codec name cannot be empty")
        if not isinstance(codec, Codec):
            raise CodecRegistrationError(f"expected a Codec for {name!r}; got {type(codec)!r}")
        return name.strip()

    def register(self, name: str, codec: Codec) -> Codec:
        key = self._validate(name, codec)
        with self._lock:
            existing = self._by_name.get(key)
            if existing is None:
                self._by_name[key] = codec
                logger.debug("codec.registered %s", key)
                return codec

            if existing == codec:
                logger.debug("codec.duplicate-same-codec %s", key)
                return existing

            msg = f"Codec name collision {key!r} between {existing!r} and {codec!r}"
            if collisions_strict():
                logger.error("codec.collision %s", msg)
                raise CodecDuplicateRegistrationError(msg)
            logger.warning("codec.collision %s (replacing)", msg)
            self._by_name[key] = codec
            return codec

    def unregister(self, name: str) -> None:
        with self._lock:
            self._by_name.pop(name, None)

    def get(self, name: str) -> Codec:
        with self._lock:
            try:
                return self._by_name[name]
            except KeyError:
                raise CodecNotFoundError(
                    f"No codec registered as {name!r}; known: {sorted(self._by_name)}"
                ) from None

    def names(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(sorted(self._by_name))

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._by_name


codecs = CodecRegistry()
codecs.register("json", JSON_CODEC)
codecs.register("comma_separated_integers", COMMA_SEPARATED_INTEGERS)


def register_codec(name: str, codec: Codec) -> Codec:
    """Register `codec` in the process-wide registry under `name`."""
    return codecs.register(name, codec)


def get_codec(name: str) -> Codec:
    return codecs.get(name)


def resolve_codec(options: Mapping[str, Any] | None = None) -> Codec:
    """Build the codec for one registration from its options.

    `codec` selects a base (a registered name or a `Codec`; defaults to the
    `CUSTOM_SERIALIZE_DEFAULT_CODEC` setting). `serialize` / `unserialize`
    replace the matching half of that base.
    """
    options = dict(options or {})
    unknown = set(options) - OPTION_KEYS
    if unknown:
        raise CodecConfigurationError(
            f"Unknown custom_serialize option(s) {sorted(unknown)}; allowed: {sorted(OPTION_KEYS)}"
        )

    base = options.get("codec")
    if base is None:
        base = get_codec(default_codec_name())
    elif isinstance(base, str):
        base = get_codec(base)
    elif not isinstance(base, Codec):
        raise CodecConfigurationError(f"'codec' must be a codec name or Codec; got {type(base)!r}")

    overrides = {k: options[k] for k in ("serialize", "unserialize") if options.get(k) is not None}
    if not overrides:
        return base

    try:
        return Codec(
            serialize=overrides.get("serialize", base.serialize),
            unserialize=overrides.get("unserialize", base.unserialize),
        )
    except ValidationError as ve:
        raise CodecConfigurationError(f"Invalid custom_serialize codec functions: {ve}") from ve
