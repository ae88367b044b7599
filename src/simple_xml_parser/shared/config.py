"""Configuration classes for simple XML parsing.

This module provides configuration objects for the parser, the DOM builder and
the serializer, plus an immutable aggregate that can be loaded from JSON.
"""

import json
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

# Parsing recurses once per nested tag; the default recursion limit is 1000
DEFAULT_MAX_DEPTH = 256
MAX_ALLOWED_DEPTH = 500

_COMPONENTS = ("parser", "dom", "serializer")


class TextMode(Enum):
    """How the DOM builder treats several text runs inside one tag."""

    LAST = auto()          # Last text run replaces earlier ones
    CONCATENATE = auto()   # Text runs are appended in document order


@dataclass
class ParserConfig:
    """Configuration for the event parser."""

    max_depth: int = DEFAULT_MAX_DEPTH
    strip_comment_whitespace: bool = True

    def __post_init__(self) -> None:
        """Validate parser configuration."""
        if self.max_depth <= 0:
            raise ValueError("max_depth must be > 0")
        if self.max_depth > MAX_ALLOWED_DEPTH:
            raise ValueError(f"max_depth must be <= {MAX_ALLOWED_DEPTH}")


@dataclass
class DomConfig:
    """Configuration for DOM construction."""

    text_mode: TextMode = TextMode.LAST


@dataclass
class SerializerConfig:
    """Configuration for rendering a DOM back to text."""

    include_declaration: bool = True
    indent: Optional[int] = None  # None renders compact output

    def __post_init__(self) -> None:
        """Validate serializer configuration."""
        if self.indent is not None and self.indent < 0:
            raise ValueError("indent must be >= 0 or None")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class XMLConfig:
    """Complete configuration for parsing, tree building and serialization.

    Immutable so a single instance can be shared between parser objects.
    """

    parser: ParserConfig = field(default_factory=ParserConfig)
    dom: DomConfig = field(default_factory=DomConfig)
    serializer: SerializerConfig = field(default_factory=SerializerConfig)

    logging_level: str = "WARNING"
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete configuration."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.logging_level not in valid_levels:
            raise ConfigValidationError(
                f"logging_level must be one of {valid_levels}",
                field_name="logging_level",
            )
        try:
            self.parser.__post_init__()
            self.serializer.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    @classmethod
    def default(cls) -> "XMLConfig":
        """Create the default configuration."""
        return cls()

    @classmethod
    def preserving(cls) -> "XMLConfig":
        """Create a configuration that keeps as much source text as possible."""
        return cls(
            parser=ParserConfig(strip_comment_whitespace=False),
            dom=DomConfig(text_mode=TextMode.CONCATENATE),
        )

    def override(self, **kwargs: Any) -> "XMLConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Field overrides; component fields use ``component__field``

        Returns:
            New XMLConfig instance with overrides applied

        Example:
            >>> config = XMLConfig().override(parser__max_depth=64)
            >>> config.parser.max_depth
            64
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                        suggestions=list(_COMPONENTS),
                    )
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                nested_overrides[key] = value

        new_fields: Dict[str, Any] = {}
        try:
            for key, value in nested_overrides.items():
                if key in _COMPONENTS:
                    new_fields[key] = replace(getattr(self, key), **value)
                else:
                    new_fields[key] = value
            return replace(self, **new_fields)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            if isinstance(obj, Enum):
                return obj.name
            return obj

        return _dataclass_to_dict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "XMLConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so typos in configuration files surface early.
        """
        def _dict_to_dataclass(data_dict: Dict[str, Any], target_class: type) -> Any:
            if not isinstance(data_dict, dict):
                raise ConfigValidationError(
                    f"Expected an object for {target_class.__name__}"
                )
            known = target_class.__dataclass_fields__
            unknown = set(data_dict) - set(known)
            if unknown:
                raise ConfigValidationError(
                    f"Unknown {target_class.__name__} fields: {sorted(unknown)}",
                    field_name=sorted(unknown)[0],
                )
            return target_class(**data_dict)

        values: Dict[str, Any] = {}
        try:
            for key, value in data.items():
                if key == "parser":
                    values[key] = _dict_to_dataclass(value, ParserConfig)
                elif key == "serializer":
                    values[key] = _dict_to_dataclass(value, SerializerConfig)
                elif key == "dom":
                    dom_values = dict(value)
                    if isinstance(dom_values.get("text_mode"), str):
                        dom_values["text_mode"] = TextMode[dom_values["text_mode"]]
                    values[key] = _dict_to_dataclass(dom_values, DomConfig)
                elif key in ("logging_level", "correlation_id"):
                    values[key] = value
                else:
                    raise ConfigValidationError(
                        f"Unknown configuration field: {key}", field_name=key
                    )
            return cls(**values)
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigValidationError(f"Invalid configuration: {e}") from e

    @classmethod
    def from_json(cls, json_str: str) -> "XMLConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Configuration is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "XMLConfig":
        """Load configuration from a JSON file."""
        config_path = Path(path)
        try:
            text = config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Could not read configuration file {config_path}: {e}") from e
        return cls.from_json(text)
