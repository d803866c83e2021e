# custom_serialize/settings.py


"""
Project-overridable knobs for `custom_serialize`.

Every key below may be set in the Django project's settings module; anything
left unset falls back to `DEFAULTS`. Nothing is cached, so a value changed by
`override_settings` takes effect on the next registration or lookup.

- CUSTOM_SERIALIZE_DEFAULT_CODEC (str, "json")
    Registered codec applied when `custom_serialize(...)` is given no `codec`
    and no `serialize`/`unserialize`.
- CUSTOM_SERIALIZE_COLLISIONS_STRICT (bool, True)
    Whether registering a second, different codec under an existing name
    raises (True) or replaces it with a WARNING (False).
"""

from typing import Any

from django.conf import settings as dj_settings

DEFAULTS = {
    "CUSTOM_SERIALIZE_DEFAULT_CODEC": "json",
    "CUSTOM_SERIALIZE_COLLISIONS_STRICT": True,
}

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def get_setting(key: str, default: Any | None = None) -> Any:
    """Project value for `key`, else `default`, else the package default."""
    if dj_settings.configured and hasattr(dj_settings, key):
        return getattr(dj_settings, key)
    return default if default is not None else DEFAULTS.get(key)


def get_bool(key: str, default: bool | None = None) -> bool:
    """`get_setting` read as a flag; strings such as "yes"/"0" are accepted."""
    fallback = DEFAULTS.get(key, False) if default is None else default
    val = get_setting(key, fallback)
    if isinstance(val, str):
        return val.strip().lower() in _TRUTHY
    return bool(val)


def default_codec_name() -> str:
    val = get_setting("CUSTOM_SERIALIZE_DEFAULT_CODEC")
    if not isinstance(val, str) or not val.strip():
        return DEFAULTS["CUSTOM_SERIALIZE_DEFAULT_CODEC"]
    return val.strip()


def collisions_strict() -> bool:
    return get_bool("CUSTOM_SERIALIZE_COLLISIONS_STRICT")
