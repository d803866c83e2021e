# custom_serialize/decorators.py
from __future__ import annotations

"""
Class-decorator form of `CustomSerializeMixin.custom_serialize`.

    @custom_serialize("player_ids", codec="comma_separated_integers")
    @custom_serialize("settings")                      # default JSON codec
    class Alliance(CustomSerializeMixin, models.Model):
        player_ids = models.TextField(null=True)
        settings = models.TextField(default="{}")

Arguments are exactly those of the classmethod, including the trailing
options mapping.
"""

from typing import Any, Callable, TypeVar

from .exceptions import CodecConfigurationError
from .mixins import CustomSerializeMixin

M = TypeVar("M", bound=type)


def custom_serialize(*args: Any, **options: Any) -> Callable[[M], M]:
    def decorator(model_cls: M) -> M:
        if not (isinstance(model_cls, type) and issubclass(model_cls, CustomSerializeMixin)):
            raise CodecConfigurationError(
                f"@custom_serialize requires a CustomSerializeMixin subclass; got {model_cls!r}"
            )
        model_cls.custom_serialize(*args, **options)
        return model_cls

    return decorator


__all__ = ["custom_serialize"]
