# custom_serialize/exceptions.py
"""Exception hierarchy for `custom_serialize`.

Errors raised by the caller-supplied `serialize`/`unserialize` functions are
never wrapped in these types; they propagate to the caller of load/save as-is.
"""


class CustomSerializeError(Exception):
    """Base for all custom_serialize exceptions."""


class CodecError(CustomSerializeError): ...


class CodecConfigurationError(CodecError): ...  # bad options / attribute names at registration


class CodecRegistrationError(CodecError): ...  # unable to register a named codec


class CodecDuplicateRegistrationError(CodecRegistrationError): ...


class CodecNotFoundError(CodecError, LookupError): ...


__all__ = [
    "CustomSerializeError",
    "CodecError",
    "CodecConfigurationError",
    "CodecRegistrationError",
    "CodecDuplicateRegistrationError",
    "CodecNotFoundError",
]
