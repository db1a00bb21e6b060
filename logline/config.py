"""
Formatter configuration.

Options can be given in code or loaded from a YAML file:

    logline:
      field_order: [request_id, user]
      hide_keys: false
      no_colors: true
"""

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Callable, Optional, Union

import yaml

from .exceptions import ConfigError
from .models import CallerInfo

logger = logging.getLogger(__name__)

CallerFormatter = Callable[[CallerInfo], str]


@dataclass(frozen=True)
class FormatterConfig:
    """Options of the line formatter. All toggle independently."""

    # Fields printed first, in this order; the rest follow sorted.
    # None sorts everything alphabetically.
    field_order: Optional[tuple[str, ...]] = None

    # strftime format; None renders RFC 3339
    timestamp_format: Optional[str] = None

    # Show <value> instead of <key:value>
    hide_keys: bool = True

    # Disable ANSI colors
    no_colors: bool = False

    # Color only the level (and caller), not the fields
    no_fields_colors: bool = False

    # No space between fields
    no_fields_space: bool = False

    # [WARNING] instead of [WARN]
    show_full_level: bool = False

    # Keep the level name lowercase
    no_uppercase_level: bool = False

    # Strip whitespace around the message
    trim_messages: bool = False

    # Caller block before the level instead of after it
    caller_first: bool = False

    # Replaces the default " (file:line function) " caller block
    caller_formatter: Optional[CallerFormatter] = None

    # Skip the correlation ID segment
    disable_correlation_id: bool = False

    def __post_init__(self):
        if self.field_order is not None and not isinstance(self.field_order, tuple):
            object.__setattr__(self, "field_order", tuple(self.field_order))

    def with_options(self, **changes: Any) -> "FormatterConfig":
        """Copy of this config with some options changed."""
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: dict) -> "FormatterConfig":
        """
        Build a config from plain data (e.g. parsed YAML).

        Raises:
            ConfigError: unknown key or a value of the wrong type
        """
        known = {f.name for f in fields(cls)} - {"caller_formatter"}
        values: dict[str, Any] = {}

        for key, value in data.items():
            if key not in known:
                raise ConfigError(f"Unknown formatter option: {key}", key=key)

            if key == "field_order":
                if value is not None and (
                    not isinstance(value, (list, tuple))
                    or not all(isinstance(name, str) for name in value)
                ):
                    raise ConfigError("field_order must be a list of field names", key=key)
            elif key == "timestamp_format":
                if value is not None and not isinstance(value, str):
                    raise ConfigError("timestamp_format must be a string", key=key)
            elif not isinstance(value, bool):
                raise ConfigError(f"{key} must be true or false", key=key)

            values[key] = value

        return cls(**values)

    def to_dict(self) -> dict:
        """Serializable options (caller_formatter is omitted)."""
        data = {}
        for f in fields(self):
            if f.name == "caller_formatter":
                continue
            value = getattr(self, f.name)
            if isinstance(value, tuple):
                value = list(value)
            data[f.name] = value
        return data


def load_config(path: Union[str, Path], section: str = "logline") -> FormatterConfig:
    """
    Load a FormatterConfig from a YAML file.

    Options are read from the `section` key when present, otherwise
    from the top level of the document. An empty file yields defaults.

    Raises:
        ConfigError: file missing/unparseable or options invalid
    """
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    options = data.get(section, data)
    if options is None:
        options = {}
    if not isinstance(options, dict):
        raise ConfigError(f"Section '{section}' in {path} must be a mapping", key=section)

    logger.debug("Loaded formatter config from %s (%d options)", path, len(options))
    return FormatterConfig.from_dict(options)
