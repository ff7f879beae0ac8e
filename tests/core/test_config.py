"""Tests for RewireConfig."""

import pytest

from jsrewire.core.config import RewireConfig


class TestRewireConfig:
    """Construction, validation and serialization of the configuration."""

    def test_defaults(self):
        config = RewireConfig()
        assert config.unsafe_const is False
        assert config.version == "1.0"

    def test_from_dict_accepts_plugin_style_alias(self):
        config = RewireConfig.from_dict({"unsafeConst": True})
        assert config.unsafe_const is True

    def test_from_dict_accepts_field_name(self):
        assert RewireConfig.from_dict({"unsafe_const": True}).unsafe_const is True

    def test_from_dict_empty_gives_defaults(self):
        assert RewireConfig.from_dict({}) == RewireConfig()

    def test_from_dict_rejects_unknown_option(self):
        with pytest.raises(ValueError, match="Unknown option 'strict'"):
            RewireConfig.from_dict({"strict": True})

    def test_validate_rejects_non_boolean_flag(self):
        with pytest.raises(ValueError, match="must be a boolean"):
            RewireConfig(unsafe_const="yes").validate()

    def test_validate_rejects_unknown_version(self):
        with pytest.raises(ValueError, match="Invalid version"):
            RewireConfig(version="2.0").validate()

    def test_to_dict_round_trips(self):
        config = RewireConfig(unsafe_const=True)
        assert config.to_dict() == {"version": "1.0", "unsafe_const": True}
        assert RewireConfig.from_dict(config.to_dict()) == config
