"""
Rust-specific configuration and validation.

Extends the base configuration system with Rust-specific settings.
"""

import copy
import re
from dataclasses import asdict

from ...core.config import (
    LANGUAGE_DEFAULTS,
    VALID_FIELD_CASES,
    VALID_LINE_ENDINGS,
    ConfigError,
    GeneratorConfig,
)

RUST_PATH_RE = re.compile(r"^(::)?[A-Za-z_][A-Za-z0-9_]*(::[A-Za-z_][A-Za-z0-9_]*)*$")
LIFETIME_RE = re.compile(r"^'[a-z_][a-z0-9_]*$")
# Not declarable as a struct lifetime: reserved, or claimed by serde derive
RESERVED_LIFETIMES = {"'static", "'_", "'de"}

RUST_DEFAULTS = LANGUAGE_DEFAULTS["rust"]["custom"]


class RustConfig(GeneratorConfig):
    """Rust-specific configuration."""

    def __init__(self, **kwargs):
        """Initialize Rust configuration with defaults."""
        super().__init__(**kwargs)

        if not self.custom:
            self.custom = {}

        for key, value in RUST_DEFAULTS.items():
            self.custom.setdefault(key, copy.deepcopy(value))

        self._validate_rust_settings()

    @classmethod
    def from_config(cls, config: GeneratorConfig) -> "RustConfig":
        """Build a RustConfig from a generic configuration."""
        if isinstance(config, cls):
            return config
        values = asdict(config)
        values["custom"] = dict(values.get("custom") or {})
        return cls(**values)

    def _validate_rust_settings(self):
        """Validate Rust-specific configuration."""
        if self.field_case not in VALID_FIELD_CASES:
            raise ConfigError(f"Invalid field_case: {self.field_case!r}")

        if self.line_ending not in VALID_LINE_ENDINGS:
            raise ConfigError(f"Invalid line_ending: {self.line_ending!r}")

        if self.indent_size < 1:
            raise ConfigError(f"Invalid indent_size: {self.indent_size}")

        lifetime = self.custom["lifetime"]
        if (
            not isinstance(lifetime, str)
            or not LIFETIME_RE.match(lifetime)
            or lifetime in RESERVED_LIFETIMES
        ):
            raise ConfigError(f"Invalid lifetime: {lifetime!r}")

        derives = self.custom["derives"]
        if not derives or not all(RUST_PATH_RE.match(d) for d in derives):
            raise ConfigError(f"Invalid derives: {derives!r}")

        if not self.custom["tag_field"]:
            raise ConfigError("tag_field must not be empty")

        deserializer = self.custom["cow_deserializer"]
        if not RUST_PATH_RE.match(deserializer):
            raise ConfigError(f"Invalid cow_deserializer path: {deserializer!r}")

        maximal_union = self.custom["maximal_union"]
        if maximal_union and not RUST_PATH_RE.match(maximal_union):
            raise ConfigError(f"Invalid maximal_union path: {maximal_union!r}")

        for key in ("enums_module", "types_module", "functions_module"):
            module = self.custom[key]
            if not module.isidentifier():
                raise ConfigError(f"Invalid {key}: {module!r}")

    @property
    def lifetime(self) -> str:
        return self.custom["lifetime"]

    @property
    def tag_field(self) -> str:
        return self.custom["tag_field"]

    @property
    def derives(self) -> list[str]:
        return list(self.custom["derives"])

    @property
    def cow_deserializer(self) -> str:
        return self.custom["cow_deserializer"]

    @property
    def maximal_union(self) -> str:
        return self.custom["maximal_union"] or ""
