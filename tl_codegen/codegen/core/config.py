"""
Configuration for code generation.

Settings come from three layers, later ones winning: the language
defaults, an optional JSON configuration file and explicit overrides
(usually from the command line). Keys that are not GeneratorConfig fields
are language-specific and collected in GeneratorConfig.custom.
"""

import copy
import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Settings shared by all generators."""

    output_file: Optional[str] = None

    indent_size: int = 4
    use_tabs: bool = True
    line_ending: str = "\n"

    # snake, camel, pascal, original
    field_case: str = "snake"

    add_comments: bool = True

    # Language-specific settings
    custom: Dict[str, Any] = field(default_factory=dict)


VALID_FIELD_CASES = {"snake", "camel", "pascal", "original"}
VALID_LINE_ENDINGS = {"\n", "\r\n"}

LANGUAGE_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "rust": {
        "use_tabs": True,
        "field_case": "snake",
        "add_comments": True,
        "custom": {
            "lifetime": "'a",
            "tag_field": "@type",
            "derives": ["Serialize", "Deserialize", "Clone", "Debug"],
            "cow_deserializer": "crate::cow_de::de_opt_cow_str",
            "maximal_union": "crate::AnyValue",
            "enums_module": "dynamic",
            "types_module": "types",
            "functions_module": "functions",
        },
    },
}

_CONFIG_FIELDS = {f.name for f in fields(GeneratorConfig)}


class ConfigManager:
    """Builds GeneratorConfig objects from defaults, files and overrides."""

    def __init__(self):
        self._defaults = copy.deepcopy(LANGUAGE_DEFAULTS)

    def get_config(self, language: str, custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
        """
        Merged configuration for a language.

        Args:
            language: Target language name
            custom_config: Overrides, applied last
            config_file: JSON configuration file, applied before overrides

        Raises:
            ConfigError: If the configuration file is missing or invalid
        """
        merged = copy.deepcopy(self._defaults.get(language, {}))
        merged.setdefault("custom", {})

        if config_file:
            self._merge(merged, self._load_config_file(config_file))
        if custom_config:
            self._merge(merged, custom_config)

        return GeneratorConfig(**merged)

    @staticmethod
    def _merge(base: Dict[str, Any], overrides: Dict[str, Any]):
        for key, value in overrides.items():
            if key == "custom":
                base["custom"].update(value or {})
            elif key in _CONFIG_FIELDS:
                base[key] = value
            else:
                base["custom"][key] = value

    @staticmethod
    def _load_config_file(config_path: Union[str, Path]) -> Dict[str, Any]:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")
        if path.suffix.lower() != ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")
        return data

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Write config as a flat JSON object that get_config() reads back."""
        data = asdict(config)
        data.update(data.pop("custom"))

        try:
            with open(output_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {output_path}: {e}") from e

    def list_languages(self) -> List[str]:
        return list(self._defaults)

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """Problems with the language-independent settings, as messages."""
        problems = []
        if config.field_case not in VALID_FIELD_CASES:
            problems.append(f"Invalid field_case: {config.field_case}")
        if config.line_ending not in VALID_LINE_ENDINGS:
            problems.append(f"Invalid line_ending: {config.line_ending!r}")
        if config.indent_size < 1:
            problems.append(f"Invalid indent_size: {config.indent_size}")
        return problems


_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(language: str = "rust", custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
    """Merged configuration from the global ConfigManager."""
    return get_config_manager().get_config(language, custom_config, config_file)
