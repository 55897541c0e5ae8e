"""
Configuration management for snippet generation.

Handles loading and merging generation options from JSON files,
providing per-target defaults and validation.
"""

import json
from dataclasses import dataclass, field, fields as dataclass_fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GenerationOptions:
    """Cross-cutting rendering preferences passed to every plugin."""

    # Layout
    indent_size: Optional[int] = None  # None: plugin default
    use_tabs: bool = False
    line_ending: str = "\n"

    # Content
    include_comments: bool = True
    redact_credentials: bool = False
    degradation_comments: Optional[bool] = None  # None: plugin policy

    # Unrecognized settings, ignored by plugins
    custom: Dict[str, Any] = field(default_factory=dict)

    def indent_unit(self, default_size: int = 2) -> str:
        """Return one level of indentation."""
        if self.use_tabs:
            return "\t"
        size = default_size if self.indent_size is None else self.indent_size
        return " " * max(size, 0)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GenerationOptions":
        """Build options from a mapping; unknown keys land in ``custom``."""
        known = {f.name for f in dataclass_fields(cls)}
        args: Dict[str, Any] = {}
        custom: Dict[str, Any] = {}

        for key, value in data.items():
            key = _ALIASES.get(key, key)
            if key in known:
                args[key] = value
            else:
                custom[key] = value

        if custom:
            merged = dict(args.get("custom") or {})
            merged.update(custom)
            args["custom"] = merged

        return cls(**args)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "indent_size": self.indent_size,
            "use_tabs": self.use_tabs,
            "line_ending": self.line_ending,
            "include_comments": self.include_comments,
            "redact_credentials": self.redact_credentials,
            "degradation_comments": self.degradation_comments,
        }
        data.update(self.custom)
        return data


# camelCase spellings accepted from JSON documents
_ALIASES = {
    "indentSize": "indent_size",
    "useTabs": "use_tabs",
    "lineEnding": "line_ending",
    "includeComments": "include_comments",
    "redactCredentials": "redact_credentials",
    "degradationComments": "degradation_comments",
}


class ConfigManager:
    """Manages option defaults, loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default options for targets whose conventions differ."""
        self._defaults["python"] = {"indent_size": 4}
        self._defaults["go"] = {"use_tabs": True}
        self._defaults["java"] = {"indent_size": 4}
        self._defaults["kotlin"] = {"indent_size": 4}
        self._defaults["csharp"] = {"indent_size": 4}
        self._defaults["php"] = {"indent_size": 4}
        self._defaults["rust"] = {"indent_size": 4}

    def get_options(
        self,
        target: Optional[str] = None,
        custom_options: Optional[Mapping[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GenerationOptions:
        """
        Get complete options for a target.

        Args:
            target: Target language identifier
            custom_options: Option overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged options
        """
        base = dict(self._defaults.get(target, {})) if target else {}

        if config_file:
            base.update(self._load_config_file(config_file))

        if custom_options:
            base.update(custom_options)

        return GenerationOptions.from_dict(base)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load options from a JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}")
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def save_options(self, options: GenerationOptions, output_path: Union[str, Path]):
        """Save options to a JSON file."""
        path = Path(output_path)
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(options.to_dict(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}")

    def list_targets(self) -> list[str]:
        """Targets that carry their own defaults."""
        return list(self._defaults.keys())

    def validate_options(self, options: GenerationOptions) -> list[str]:
        """
        Validate options.

        Returns:
            List of validation warnings
        """
        warnings = []

        if options.indent_size is not None:
            if not isinstance(options.indent_size, int) or options.indent_size < 0:
                warnings.append(f"Invalid indent_size: {options.indent_size!r}")
            elif options.use_tabs:
                warnings.append("indent_size is ignored when use_tabs is set")

        if options.line_ending not in ("\n", "\r\n"):
            warnings.append(f"Unusual line_ending: {options.line_ending!r}")

        if options.degradation_comments and not options.include_comments:
            warnings.append(
                "degradation_comments has no effect when include_comments is off"
            )

        for key in options.custom:
            warnings.append(f"Unrecognized option ignored: {key}")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_options(
    target: Optional[str] = None,
    custom_options: Optional[Mapping[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GenerationOptions:
    """
    Convenience function to load options.

    Args:
        target: Target language identifier
        custom_options: Option overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged options for the target
    """
    return get_config_manager().get_options(target, custom_options, config_file)


EXAMPLE_CONFIG = {
    "indent_size": 4,
    "include_comments": True,
    "redact_credentials": True,
    "degradation_comments": False,
}
