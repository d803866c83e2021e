# custom_serialize/apps.py


"""
custom_serialize.apps
=====================

Django integration for `custom_serialize`.

Responsibilities
----------------
- Register the package's system checks.
- Fail fast when `CUSTOM_SERIALIZE_DEFAULT_CODEC` names an unknown codec.
"""

import logging

from django.apps import AppConfig
from django.core import checks
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)


class CustomSerializeConfig(AppConfig):
    name = "custom_serialize"
    label = "custom_serialize"
    verbose_name = "Custom serialize"

    def ready(self) -> None:
        from .checks import check_custom_serialized_attributes
        from .codecs import codecs
        from .settings import default_codec_name

        checks.register(check_custom_serialized_attributes, checks.Tags.models)

        name = default_codec_name()
        if name not in codecs:
            raise ImproperlyConfigured(
                f"CUSTOM_SERIALIZE_DEFAULT_CODEC={name!r} is not a registered codec; known: {codecs.names()}"
            )
        logger.debug("custom_serialize.ready default_codec=%s codecs=%s", name, codecs.names())
