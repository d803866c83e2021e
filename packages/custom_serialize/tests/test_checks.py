"""Tests for system checks, app config and settings accessors."""

import pytest
from django.apps import apps
from django.core.exceptions import ImproperlyConfigured
from django.test import override_settings

from custom_serialize import settings as cs_settings
from custom_serialize.checks import check_custom_serialized_attributes
from testapp.models import Widget


def warnings_for(model):
    app_config = apps.get_app_config("testapp")
    return [w for w in check_custom_serialized_attributes(app_configs=[app_config]) if w.obj is model]


class TestSystemChecks:
    def test_non_field_attribute(self):
        ids = [w.id for w in warnings_for(Widget)]
        assert "custom_serialize.W001" in ids

    def test_non_nullable_comma_codec_field(self):
        ids = [w.id for w in warnings_for(Widget)]
        assert "custom_serialize.W002" in ids

    def test_well_formed_models_pass(self):
        from testapp.models import Alliance, Scoreboard, TaggedItem

        for model in (Alliance, Scoreboard, TaggedItem):
            assert warnings_for(model) == []

    def test_all_installed_apps(self):
        ids = {w.id for w in check_custom_serialized_attributes()}
        assert ids == {"custom_serialize.W001", "custom_serialize.W002"}


class TestAppConfig:
    def test_ready_validates_default_codec(self):
        config = apps.get_app_config("custom_serialize")
        with override_settings(CUSTOM_SERIALIZE_DEFAULT_CODEC="yaml"):
            with pytest.raises(ImproperlyConfigured, match="yaml"):
                config.ready()

    def test_ready_is_repeatable(self):
        apps.get_app_config("custom_serialize").ready()


class TestSettings:
    def test_defaults(self):
        assert cs_settings.default_codec_name() == "json"
        assert cs_settings.collisions_strict() is True

    @override_settings(CUSTOM_SERIALIZE_DEFAULT_CODEC="  comma_separated_integers ")
    def test_default_codec_is_stripped(self):
        assert cs_settings.default_codec_name() == "comma_separated_integers"

    @override_settings(CUSTOM_SERIALIZE_DEFAULT_CODEC="")
    def test_blank_default_codec_falls_back(self):
        assert cs_settings.default_codec_name() == "json"

    @pytest.mark.parametrize("raw, expected", [("yes", True), ("0", False), (0, False), (1, True)])
    def test_get_bool_coercion(self, raw, expected):
        with override_settings(CUSTOM_SERIALIZE_COLLISIONS_STRICT=raw):
            assert cs_settings.collisions_strict() is expected

    def test_get_setting_fallbacks(self):
        assert cs_settings.get_setting("CUSTOM_SERIALIZE_UNKNOWN") is None
        assert cs_settings.get_setting("CUSTOM_SERIALIZE_UNKNOWN", "x") == "x"
