"""Configuration data model for the rewire pass.

This module defines the RewireConfig dataclass holding the options that
steer the transformation. It handles conversion from plugin-style option
names, validation, and serialization.

Example:
    Creating a configuration from plugin-style options:

    >>> config = RewireConfig.from_dict({"unsafeConst": True})
    >>> config.unsafe_const
    True

    Converting to dictionary for JSON serialization:

    >>> config.to_dict()
    {'version': '1.0', 'unsafe_const': True}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from jsrewire.utils.logger import get_logger

logger = get_logger("jsrewire.core.config")

# Mapping from plugin-style option names to configuration field names
OPTION_ALIASES = {
    "unsafeConst": "unsafe_const",
}

# Valid configuration keys
VALID_OPTIONS = {"version", "unsafe_const"}

SUPPORTED_VERSIONS = {"1.0"}


@dataclass
class RewireConfig:
    """Rewire pass configuration.

    Attributes:
        unsafe_const: Weaken ``const`` bindings to ``let`` so constant
            exports become rewireable. Changes observable semantics of the
            module (the binding becomes assignable), hence off by default.
        version: Schema version (currently "1.0")
    """

    unsafe_const: bool = False
    version: str = "1.0"

    def validate(self) -> None:
        """Validate the configuration.

        Raises:
            ValueError: If any validation check fails
        """
        if self.version not in SUPPORTED_VERSIONS:
            raise ValueError(
                f"Invalid version: {self.version}. Expected one of {sorted(SUPPORTED_VERSIONS)}"
            )

        if not isinstance(self.unsafe_const, bool):
            raise ValueError("Option 'unsafe_const' must be a boolean")

        logger.debug(f"Configuration validated (unsafe_const={self.unsafe_const})")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for JSON serialization."""
        return {
            "version": self.version,
            "unsafe_const": self.unsafe_const,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RewireConfig:
        """Create configuration from dictionary.

        Plugin-style keys (``unsafeConst``) are accepted alongside the
        field names.

        Args:
            data: Dictionary containing configuration data

        Returns:
            Validated RewireConfig instance

        Raises:
            ValueError: If an unknown option is given or validation fails

        Example:
            >>> RewireConfig.from_dict({"unsafe_const": False}).unsafe_const
            False
        """
        normalized: Dict[str, Any] = {}
        for key, value in data.items():
            field_name = OPTION_ALIASES.get(key, key)
            if field_name not in VALID_OPTIONS:
                raise ValueError(
                    f"Unknown option '{key}' in configuration. "
                    f"Valid options: {sorted(VALID_OPTIONS | set(OPTION_ALIASES))}"
                )
            normalized[field_name] = value

        config = cls(**normalized)
        config.validate()
        logger.debug(f"Created configuration from dictionary: {config.to_dict()}")
        return config
