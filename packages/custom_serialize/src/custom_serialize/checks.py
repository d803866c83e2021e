# custom_serialize/checks.py
"""Django system checks for custom serialized attributes."""

from django.apps import apps
from django.core import checks

from .codecs import COMMA_SEPARATED_INTEGERS
from .mixins import CustomSerializeMixin


def check_custom_serialized_attributes(app_configs=None, **kwargs):
    errors = []
    if app_configs is None:
        models = apps.get_models()
    else:
        models = [m for app_config in app_configs for m in app_config.get_models()]

    for model in models:
        if not issubclass(model, CustomSerializeMixin):
            continue
        fields = {f.attname: f for f in model._meta.concrete_fields}
        for attribute, codec in model.custom_serialized_attributes().items():
            field = fields.get(attribute)
            if field is None:
                errors.append(
                    checks.Warning(
                        f"'{attribute}' has a custom serializer but is not a concrete field; "
                        "its value is never persisted.",
                        obj=model,
                        id="custom_serialize.W001",
                    )
                )
            elif codec == COMMA_SEPARATED_INTEGERS and not field.null:
                errors.append(
                    checks.Warning(
                        f"'{attribute}' uses the comma_separated_integers codec, which stores "
                        "empty lists as NULL, but the field is not nullable.",
                        hint="Set null=True on the field.",
                        obj=model,
                        id="custom_serialize.W002",
                    )
                )
    return errors
