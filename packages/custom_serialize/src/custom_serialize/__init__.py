# custom_serialize/__init__.py
"""
Transparent per-attribute encode/decode for Django models.

Main components
---------------
- **custom_serialize.mixins.CustomSerializeMixin** – abstract model base;
  `Model.custom_serialize(...)` registers a codec for attributes stored in a
  serialized text column.
- **custom_serialize.decorators.custom_serialize** – class decorator sugar for
  the same registration.
- **Codec** / **register_codec** / **get_codec** – codec pairs and the named
  registry ("json" and "comma_separated_integers" are built in).
- **Phase** / **register_hook** – explicit lifecycle hook chains.

The mixin and decorator define Django models, so they are not re-exported
here: this package is imported while the app registry is still loading.
Import them from your app's `models.py`.

Add `"custom_serialize"` to `INSTALLED_APPS` to enable the system checks.
"""
from .codecs import COMMA_SEPARATED_INTEGERS, JSON_CODEC, Codec, get_codec, register_codec, resolve_codec
from .exceptions import (
    CodecConfigurationError,
    CodecDuplicateRegistrationError,
    CodecError,
    CodecNotFoundError,
    CodecRegistrationError,
    CustomSerializeError,
)
from .hooks import Phase, register_hook

__all__ = [
    "Codec",
    "CodecConfigurationError",
    "CodecDuplicateRegistrationError",
    "CodecError",
    "CodecNotFoundError",
    "CodecRegistrationError",
    "COMMA_SEPARATED_INTEGERS",
    "CustomSerializeError",
    "JSON_CODEC",
    "Phase",
    "get_codec",
    "register_codec",
    "register_hook",
    "resolve_codec",
]
