# custom_serialize/mixins.py
from __future__ import annotations

"""
`CustomSerializeMixin`: per-attribute encode/decode around Django persistence.

Declare which attributes are stored in a serialized text form and how to
convert them; application code then only ever sees the structured value.

Example
-------
    class Alliance(CustomSerializeMixin, models.Model):
        planet_player_ids = models.TextField(null=True)
        ship_player_ids = models.TextField(null=True)

    Alliance.custom_serialize(
        "planet_player_ids",
        "ship_player_ids",
        {
            "serialize": lambda v: ",".join(map(str, v)) if v else None,
            "unserialize": lambda v: [int(x) for x in v.split(",")] if v else [],
        },
    )

or, equivalently, with the class decorator from `custom_serialize.decorators`.
Without options the JSON codec (or `CUSTOM_SERIALIZE_DEFAULT_CODEC`) is used.

Lifecycle (per registered attribute):
    load:  raw ──after_find──▶ structured (change flag cleared)
    save:  structured ──before_save──▶ raw ──write──▶ raw ──after_save──▶ structured

If you override `after_find`, call `super().after_find()` so the registered
decode hooks still run.
"""

import logging
from types import MappingProxyType
from typing import Any, Mapping

from django.db import models

from .codecs import Codec, resolve_codec
from .exceptions import CodecConfigurationError
from .hooks import DecodeAttributes, EncodeAttributes, Phase, register_hook, run_hooks
from .tracking import ChangeTrackingMixin

logger = logging.getLogger(__name__)

_STASH_ATTR = "_custom_serialize_stash"


class CustomSerializeMixin(ChangeTrackingMixin, models.Model):
    """Abstract model base providing the custom serialize registrar and hooks."""

    _custom_serialize_codecs: Mapping[str, Codec] = MappingProxyType({})

    class Meta:
        abstract = True

    # ---- declaration -------------------------------------------------------
    @classmethod
    def custom_serialize(cls, *args: Any, **options: Any) -> None:
        """Register a codec for one or more attributes of this class.

        Positional args are attribute names; a trailing mapping is consumed as
        options (`serialize`, `unserialize`, `codec`). Keyword options win over
        the mapping. Names are not checked against the model here; an unknown
        name fails with `AttributeError` when a hook runs.
        """
        attributes = list(args)
        if attributes and isinstance(attributes[-1], Mapping):
            options = {**attributes.pop(), **options}

        if not attributes:
            raise CodecConfigurationError(f"{cls.__name__}.custom_serialize() needs at least one attribute name")
        for attribute in attributes:
            if not isinstance(attribute, str) or not attribute:
                raise CodecConfigurationError(f"attribute names must be non-empty str; got {attribute!r}")
        if len(set(attributes)) != len(attributes):
            raise CodecConfigurationError(f"duplicate attribute names in {attributes!r}")

        already = sorted(set(attributes) & set(cls._custom_serialize_codecs))
        if already:
            raise CodecConfigurationError(
                f"{cls.__name__}: attribute(s) {already} already have a custom serializer"
            )

        codec = resolve_codec(options)
        own = {attribute: codec for attribute in attributes}

        cls._custom_serialize_codecs = MappingProxyType({**cls._custom_serialize_codecs, **own})
        register_hook(cls, Phase.AFTER_FIND, DecodeAttributes(own))
        register_hook(cls, Phase.BEFORE_SAVE, EncodeAttributes(own))
        # restore attributes changed by the encode hook
        register_hook(cls, Phase.AFTER_SAVE, DecodeAttributes(own))

        logger.debug(
            "custom_serialize.registered model=%s attributes=%s codec=%s",
            cls.__name__,
            attributes,
            codec.name or "custom",
        )

    @classmethod
    def custom_serialized_attributes(cls) -> Mapping[str, Codec]:
        return cls._custom_serialize_codecs

    @classmethod
    def tracked_extra_attributes(cls):
        return tuple(cls._custom_serialize_codecs)

    # ---- load --------------------------------------------------------------
    @classmethod
    def from_db(cls, db, field_names, values):
        instance = super().from_db(db, field_names, values)
        instance.clear_changes()
        instance.after_find()
        return instance

    def after_find(self) -> None:
        run_hooks(self, Phase.AFTER_FIND)
        parent = getattr(super(), "after_find", None)
        if parent is not None:
            parent()

    def refresh_from_db(self, using=None, fields=None, **kwargs):
        super().refresh_from_db(using=using, fields=fields, **kwargs)
        # copied from a freshly loaded, already decoded instance
        self.clear_changes(None if fields is None else self._attnames(fields))

    # ---- save --------------------------------------------------------------
    def stash_structured_value(self, attribute: str, value: Any) -> None:
        self.__dict__.setdefault(_STASH_ATTR, {})[attribute] = value

    def _restore_structured_values(self) -> None:
        for attribute, value in self.__dict__.pop(_STASH_ATTR, {}).items():
            setattr(self, attribute, value)

    def save(self, *args: Any, **kwargs: Any) -> bool:
        """Encode, write, decode. Returns False when a before-save hook vetoes."""
        self.__dict__.pop(_STASH_ATTR, None)
        try:
            proceed = run_hooks(self, Phase.BEFORE_SAVE)
        except Exception:
            self._restore_structured_values()
            raise
        if not proceed:
            self._restore_structured_values()
            logger.info("custom_serialize.save-vetoed model=%s pk=%s", type(self).__name__, self.pk)
            return False

        try:
            super().save(*args, **kwargs)
        except Exception:
            self._restore_structured_values()
            raise

        self.__dict__.pop(_STASH_ATTR, None)
        update_fields = kwargs.get("update_fields")
        if update_fields is None:
            run_hooks(self, Phase.AFTER_SAVE)
            self.clear_changes()
            return True

        # only the written columns become unchanged
        written = self._attnames(update_fields)
        previous = dict(self._snapshot())
        run_hooks(self, Phase.AFTER_SAVE)
        self._keep_changes_except(previous, written)
        self.clear_changes(written)
        return True

    # ---- validation --------------------------------------------------------
    def clean_fields(self, exclude=None):
        """Validate registered attributes in their persisted (encoded) form."""
        deferred = self.get_deferred_fields()
        structured = {
            attribute: getattr(self, attribute)
            for attribute in self._custom_serialize_codecs
            if attribute not in deferred
        }
        encoded = {
            attribute: self._custom_serialize_codecs[attribute].encode(value)
            for attribute, value in structured.items()
        }
        try:
            for attribute, raw in encoded.items():
                setattr(self, attribute, raw)
            super().clean_fields(exclude=exclude)
        finally:
            for attribute, value in structured.items():
                setattr(self, attribute, value)
