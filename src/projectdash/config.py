"""Configuration loading and management for ProjectDash.

This module provides configuration discovery and validation. Configuration
sources are merged in priority order:
    1. Defaults (defined in DashboardConfig)
    2. Global config (~/.projectdash.toml)
    3. Project config (./projectdash.toml)
    4. Explicit config file
    5. Environment variables (PROJECTDASH_* prefix)
    6. CLI overrides (passed as kwargs)

User-facing preferences (theme, language, notifications, API URL) live in a
nested ``[settings]`` table and are validated the same way the settings form
validates them.

Example:
    >>> config = load_config(page_size=10)
    >>> config.page_size
    10
    >>> config.settings.api_url
    'https://api.dashboard.com/v1'
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

# Type aliases for clarity
Verbosity = Literal["quiet", "normal", "verbose"]
Theme = Literal["light", "dark", "system"]
Language = Literal["es", "en", "pt"]

_THEMES = ("light", "dark", "system")
_LANGUAGES = ("es", "en", "pt")
_VERBOSITIES = ("quiet", "normal", "verbose")


@dataclass(frozen=True)
class SettingsConfig:
    """General preferences edited through the settings form.

    Attributes:
        theme: Colour theme (light, dark or system)
        email_notifications: Send email notifications
        default_language: Interface language (es, en or pt)
        api_url: Backend API base URL; must use https
    """

    theme: Theme = "light"
    email_notifications: bool = True
    default_language: Language = "es"
    api_url: str = "https://api.dashboard.com/v1"

    def __post_init__(self) -> None:
        _check_type("theme", self.theme, str)
        _check_type("email_notifications", self.email_notifications, bool)
        _check_type("default_language", self.default_language, str)
        _check_type("api_url", self.api_url, str)

        if self.theme not in _THEMES:
            raise InvalidConfigError("theme", self.theme, f"must be one of {', '.join(_THEMES)}")
        if self.default_language not in _LANGUAGES:
            raise InvalidConfigError(
                "default_language", self.default_language, f"must be one of {', '.join(_LANGUAGES)}"
            )
        if not self.api_url.startswith("https://"):
            raise InvalidConfigError("api_url", self.api_url, "must start with https://")


@dataclass(frozen=True)
class DashboardConfig:
    """Configuration for the dashboard front end.

    Attributes:
        Task table:
            page_size: Tasks shown per page

        Simulated latency:
            mutation_delay_ms: Delay applied before each mutation is reflected

        Summary cards:
            hours_per_completed_task: Hours credited per completed task
            new_project_window_days: Look-back window for "new projects"

        Output control:
            verbosity: Logging verbosity level

        settings: User preferences (nested config)
    """

    # Task table
    page_size: int = 5

    # Simulated latency
    mutation_delay_ms: int = 500

    # Summary cards
    hours_per_completed_task: int = 4
    new_project_window_days: int = 30

    # Output control
    verbosity: Verbosity = "normal"

    # User preferences (nested config)
    settings: SettingsConfig = field(default_factory=SettingsConfig)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        for name in (
            "page_size",
            "mutation_delay_ms",
            "hours_per_completed_task",
            "new_project_window_days",
        ):
            _check_type(name, getattr(self, name), int)
        _check_type("verbosity", self.verbosity, str)
        _check_type("settings", self.settings, SettingsConfig)

        if self.page_size < 1:
            raise InvalidConfigError("page_size", self.page_size, "must be at least 1")
        if self.mutation_delay_ms < 0:
            raise InvalidConfigError("mutation_delay_ms", self.mutation_delay_ms, "must be non-negative")
        if self.hours_per_completed_task < 0:
            raise InvalidConfigError(
                "hours_per_completed_task", self.hours_per_completed_task, "must be non-negative"
            )
        if self.new_project_window_days < 0:
            raise InvalidConfigError(
                "new_project_window_days", self.new_project_window_days, "must be non-negative"
            )
        if self.verbosity not in _VERBOSITIES:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"must be one of {', '.join(_VERBOSITIES)}"
            )

    @property
    def mutation_delay_seconds(self) -> float:
        """Get mutation delay in seconds."""
        return self.mutation_delay_ms / 1000

    def with_settings(self, **changes: Any) -> "DashboardConfig":
        """Return a copy with updated (and re-validated) settings."""
        return replace(self, settings=replace(self.settings, **changes))


_TYPE_NAMES = {str: "a string", bool: "true or false", int: "an integer"}


def _check_type(key: str, value: Any, expected: type) -> None:
    """Reject values of the wrong type, e.g. ``api_url = 5`` in TOML.

    ``bool`` is a subclass of ``int``, so ``page_size = true`` is rejected
    explicitly.
    """
    if expected is int:
        ok = isinstance(value, int) and not isinstance(value, bool)
    else:
        ok = isinstance(value, expected)
    if not ok:
        expected_name = _TYPE_NAMES.get(expected, expected.__name__)
        raise InvalidConfigError(key, value, f"must be {expected_name}")


def load_config(config_file: Optional[Path] = None, **overrides) -> DashboardConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated DashboardConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
        InvalidConfigError: If a value fails validation
    """
    merged: dict = {}

    # 1. Global config
    global_config = Path.home() / ".projectdash.toml"
    if global_config.exists():
        try:
            _merge(merged, _load_toml_file(global_config))
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Invalid global config '{global_config}': {e}")

    # 2. Project config
    project_config = Path.cwd() / "projectdash.toml"
    if project_config.exists():
        try:
            _merge(merged, _load_toml_file(project_config))
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Invalid project config '{project_config}': {e}")

    # 3. Explicit config file (highest priority from files)
    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        try:
            _merge(merged, _load_toml_file(config_file))
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Invalid config file '{config_file}': {e}")

    # 4. Environment variables (PROJECTDASH_* prefix)
    _merge(merged, _load_env_vars())

    # 5. CLI overrides (highest priority)
    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]
    _merge(merged, overrides)

    # Handle [settings] section
    settings_dict = merged.pop("settings", None)
    if settings_dict is not None:
        if isinstance(settings_dict, dict):
            try:
                merged["settings"] = SettingsConfig(**settings_dict)
            except TypeError as e:
                raise ConfigurationError(f"Invalid [settings] config: {e}")
        elif isinstance(settings_dict, SettingsConfig):
            merged["settings"] = settings_dict
        else:
            raise InvalidConfigError("settings", settings_dict, "must be a table")

    try:
        return DashboardConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _merge(target: dict, source: dict) -> None:
    """Shallow-merge ``source`` into ``target``, merging the settings table."""
    for key, value in source.items():
        if key == "settings" and isinstance(value, dict) and isinstance(target.get(key), dict):
            target[key] = {**target[key], **value}
        else:
            target[key] = value


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from PROJECTDASH_* environment variables.

    Top-level fields use ``PROJECTDASH_<FIELD>`` (e.g. PROJECTDASH_PAGE_SIZE);
    settings fields use ``PROJECTDASH_SETTINGS_<FIELD>``
    (e.g. PROJECTDASH_SETTINGS_API_URL).

    Returns:
        Dict of field_name -> parsed_value for any PROJECTDASH_* vars found.
    """
    result: dict[str, Any] = _read_env(DashboardConfig, "PROJECTDASH_", skip={"settings"})
    settings = _read_env(SettingsConfig, "PROJECTDASH_SETTINGS_")
    if settings:
        result["settings"] = settings
    return result


def _read_env(cls: type, prefix: str, skip: frozenset | set = frozenset()) -> dict[str, Any]:
    type_hints = get_type_hints(cls)
    result: dict[str, Any] = {}

    for field_name in cls.__dataclass_fields__:
        if field_name in skip:
            continue
        env_key = f"{prefix}{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise ConfigurationError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Bool: accept true/false/1/0/yes/no
    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If no TOML parser is available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            # Fallback to tomli for Python 3.9-3.10
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
