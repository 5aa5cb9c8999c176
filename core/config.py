"""
Configuration loading, validation and CLI overrides.

The configuration lives in a YAML file (`.linecap.yml` by default). Loading
resolves the file, fills in defaults for missing keys, and validates every
field, collecting all failures into a single ValidationErrors. CLI flags are
applied on top through Overrides and validated again.
"""

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Any, Optional

import yaml

from constants import (
    CONFIG_ENV_VAR,
    CONFIG_FILE_NAMES,
    DEFAULT_COUNT_MODE,
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_LANGUAGE,
    DEFAULT_MAX_LINES_PER_DIRECTORY,
    DEFAULT_MAX_LINES_PER_FILE,
    DEFAULT_WARNING_THRESHOLD,
    IGNORE_FILE_NAME,
    SUPPORTED_LANGUAGES,
)
from core.exceptions import ConfigError, ValidationError, ValidationErrors
from models import CountMode
from utils import debug


@dataclass
class Rules:
    max_lines_per_file: int = DEFAULT_MAX_LINES_PER_FILE
    max_lines_per_directory: int = DEFAULT_MAX_LINES_PER_DIRECTORY
    warning_threshold: int = DEFAULT_WARNING_THRESHOLD


@dataclass
class Overrides:
    """
    Values given explicitly on the command line.

    None means "not given, keep the configured value". An empty ignore list
    is a real override that clears the configured patterns.
    """

    max_lines_per_file: Optional[int] = None
    max_lines_per_directory: Optional[int] = None
    warning_threshold: Optional[int] = None
    count_mode: Optional[str] = None
    ignore: Optional[list[str]] = None
    no_default_excludes: bool = False


@dataclass
class Config:
    """
    The validated linecap configuration.

    Attributes:
        rules: File and directory limits plus the warning threshold (percent).
        count_mode: "all" or "code_only". Stored as given so that invalid
            values can be reported by validate().
        ignore: Gitignore-style patterns from the config file.
        default_excludes: Whether DEFAULT_EXCLUDE_PATTERNS apply.
        language: Message language, "en" or "ja".
    """

    rules: Rules = field(default_factory=Rules)
    count_mode: str = DEFAULT_COUNT_MODE.value
    ignore: list[str] = field(default_factory=list)
    default_excludes: bool = True
    language: str = DEFAULT_LANGUAGE

    @property
    def mode(self) -> CountMode:
        return CountMode(self.count_mode)

    def apply_overrides(self, overrides: Optional[Overrides]) -> None:
        """
        Apply CLI overrides in place and validate the result.

        Raises:
            ValidationErrors: If the overridden configuration is invalid.
        """
        if overrides is None:
            return

        if overrides.max_lines_per_file is not None:
            self.rules.max_lines_per_file = overrides.max_lines_per_file
        if overrides.max_lines_per_directory is not None:
            self.rules.max_lines_per_directory = overrides.max_lines_per_directory
        if overrides.warning_threshold is not None:
            self.rules.warning_threshold = overrides.warning_threshold
        if overrides.count_mode is not None:
            self.count_mode = overrides.count_mode
        if overrides.ignore is not None:
            self.ignore = list(overrides.ignore)
        if overrides.no_default_excludes:
            self.default_excludes = False

        validate(self)

    def ignore_patterns(self, base_dir: Optional[Path] = None) -> tuple[list[str], list[str]]:
        """
        Resolve the user-defined exclude patterns.

        A `.linecapignore` file in base_dir (the current directory by default)
        takes precedence over the config's `ignore` list. When both exist the
        config list is dropped and a warning is returned.

        Returns:
            A (patterns, warnings) tuple. Warnings are translation keys.

        Raises:
            ConfigError: If the ignore file exists but cannot be read.
        """
        ignore_file = (base_dir if base_dir is not None else Path.cwd()) / IGNORE_FILE_NAME
        if not ignore_file.is_file():
            return list(self.ignore), []

        patterns = read_ignore_file(ignore_file)
        warnings = ["ignore.both_defined"] if self.ignore else []
        return patterns, warnings

    def exclude_patterns(self, base_dir: Optional[Path] = None) -> list[str]:
        """Default excludes (when enabled) followed by the user patterns."""
        patterns = list(DEFAULT_EXCLUDE_PATTERNS) if self.default_excludes else []
        user_patterns, _ = self.ignore_patterns(base_dir)
        return patterns + user_patterns


def read_ignore_file(path: Path) -> list[str]:
    """Read an ignore file, skipping blank lines and `#` comments."""
    try:
        with path.open("r", encoding="utf-8") as f:
            lines = [line.strip() for line in f]
    except OSError as e:
        raise ConfigError(
            code="err.ignore_read",
            message=f"Failed to read ignore file: {e}",
            detail=str(e),
        ) from e
    return [line for line in lines if line and not line.startswith("#")]


def find_config_file(config_path: Optional[str] = None) -> Path:
    """
    Locate the configuration file.

    Search order: the explicit path, the LINECAP_CONFIG environment variable,
    then `.linecap.yml` and `.linecap.yaml` in the current directory.

    Raises:
        ConfigError: If no configuration file can be found.
    """
    if config_path:
        candidate = Path(config_path)
    elif os.environ.get(CONFIG_ENV_VAR):
        candidate = Path(os.environ[CONFIG_ENV_VAR])
    else:
        candidate = next(
            (Path(name) for name in CONFIG_FILE_NAMES if Path(name).is_file()),
            Path(CONFIG_FILE_NAMES[0]),
        )

    if not candidate.is_file():
        raise ConfigError(
            code="err.config_not_found",
            message="Config file not found. Run 'linecap init' to create one.",
        )
    return candidate


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load, default and validate the configuration.

    Args:
        config_path: Explicit config file path. When empty or None the file is
            searched for (see find_config_file).

    Returns:
        The validated Config.

    Raises:
        ConfigError: If the file is missing, unreadable, not valid YAML, or
            has no `rules` section.
        ValidationErrors: If any value is out of range.
    """
    path = find_config_file(config_path)
    debug(f"Loading config from {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (yaml.YAMLError, OSError) as e:
        raise ConfigError(
            code="err.config_parse",
            message=f"Failed to parse config file: {e}",
            detail=str(e),
        ) from e

    cfg = config_from_dict(raw)
    validate(cfg)
    return cfg


def config_from_dict(raw: Any) -> Config:
    """
    Build a Config from parsed YAML, applying defaults for missing keys.

    Raises:
        ConfigError: If the document is not a mapping, the `rules` section is
            missing, or a list/boolean field has the wrong type.
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(
            code="err.config_parse",
            message="Failed to parse config file: top level must be a mapping",
            detail="top level must be a mapping",
        )

    rules_raw = raw.get("rules")
    if not isinstance(rules_raw, dict):
        raise ConfigError(
            code="validation.rules_required",
            message='"rules" section is required',
        )

    ignore = raw.get("ignore") or []
    if not isinstance(ignore, list) or not all(isinstance(p, str) for p in ignore):
        raise ConfigError(
            code="err.config_parse",
            message='Failed to parse config file: "ignore" must be a list of strings',
            detail='"ignore" must be a list of strings',
        )

    default_excludes = raw.get("default_excludes", True)
    if not isinstance(default_excludes, bool):
        raise ConfigError(
            code="err.config_parse",
            message='Failed to parse config file: "default_excludes" must be a boolean',
            detail='"default_excludes" must be a boolean',
        )

    return Config(
        rules=Rules(
            max_lines_per_file=rules_raw.get(
                "max_lines_per_file", DEFAULT_MAX_LINES_PER_FILE
            ),
            max_lines_per_directory=rules_raw.get(
                "max_lines_per_directory", DEFAULT_MAX_LINES_PER_DIRECTORY
            ),
            warning_threshold=rules_raw.get(
                "warning_threshold", DEFAULT_WARNING_THRESHOLD
            ),
        ),
        count_mode=raw.get("count_mode", DEFAULT_COUNT_MODE.value),
        ignore=list(ignore),
        default_excludes=default_excludes,
        language=raw.get("language", DEFAULT_LANGUAGE),
    )


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate(cfg: Config) -> None:
    """
    Check every field and raise all failures together.

    Raises:
        ValidationErrors: If at least one value is invalid.
    """
    errors: list[ValidationError] = []
    rules = cfg.rules

    if not _is_int(rules.max_lines_per_file) or rules.max_lines_per_file <= 0:
        errors.append(
            ValidationError(
                "validation.max_lines_per_file",
                '"max_lines_per_file" must be a positive integer',
            )
        )
    if not _is_int(rules.max_lines_per_directory) or rules.max_lines_per_directory <= 0:
        errors.append(
            ValidationError(
                "validation.max_lines_per_directory",
                '"max_lines_per_directory" must be a positive integer',
            )
        )
    if not _is_int(rules.warning_threshold) or not 0 <= rules.warning_threshold <= 100:
        errors.append(
            ValidationError(
                "validation.warning_threshold",
                '"warning_threshold" must be between 0 and 100',
            )
        )
    if cfg.count_mode not in (CountMode.ALL.value, CountMode.CODE_ONLY.value):
        errors.append(
            ValidationError(
                "validation.count_mode",
                '"count_mode" must be "all" or "code_only"',
            )
        )
    if cfg.language not in SUPPORTED_LANGUAGES:
        errors.append(
            ValidationError(
                "validation.language",
                '"language" must be "en" or "ja"',
            )
        )

    if errors:
        raise ValidationErrors(errors)
