"""
Comprehensive tests for the config module using pytest.

Tests cover:
- find_config_file: explicit path, LINECAP_CONFIG, default names, not found
- load_config: defaults, YAML errors, missing rules, every validation failure
- config_from_dict: type checks for ignore and default_excludes
- Config.apply_overrides: each override and re-validation
- Config.ignore_patterns / exclude_patterns: .linecapignore precedence
"""

import pytest

from constants import DEFAULT_EXCLUDE_PATTERNS
from core.config import (
    Config,
    Overrides,
    Rules,
    config_from_dict,
    find_config_file,
    load_config,
    read_ignore_file,
    validate,
)
from core.exceptions import ConfigError, ValidationErrors
from models import CountMode

VALID_CONFIG = """\
rules:
  max_lines_per_file: 200
  max_lines_per_directory: 1000
  warning_threshold: 20
count_mode: code_only
ignore:
  - "generated/**"
default_excludes: false
language: ja
"""


@pytest.fixture
def in_tmp(tmp_path, monkeypatch):
    """Run the test with tmp_path as the working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ============================================================================
# Tests for find_config_file
# ============================================================================


@pytest.mark.unit
def test_find_config_file_explicit_path(in_tmp):
    path = in_tmp / "custom.yml"
    path.write_text("rules: {}\n", encoding="utf-8")

    assert find_config_file(str(path)) == path


@pytest.mark.unit
def test_find_config_file_from_env(in_tmp, monkeypatch):
    path = in_tmp / "env.yml"
    path.write_text("rules: {}\n", encoding="utf-8")
    monkeypatch.setenv("LINECAP_CONFIG", str(path))

    assert find_config_file() == path


@pytest.mark.unit
def test_find_config_file_explicit_beats_env(in_tmp, monkeypatch):
    explicit = in_tmp / "explicit.yml"
    explicit.write_text("rules: {}\n", encoding="utf-8")
    monkeypatch.setenv("LINECAP_CONFIG", str(in_tmp / "env.yml"))

    assert find_config_file(str(explicit)) == explicit


@pytest.mark.unit
def test_find_config_file_default_names(in_tmp):
    (in_tmp / ".linecap.yaml").write_text("rules: {}\n", encoding="utf-8")

    assert find_config_file().name == ".linecap.yaml"

    (in_tmp / ".linecap.yml").write_text("rules: {}\n", encoding="utf-8")

    assert find_config_file().name == ".linecap.yml"


@pytest.mark.unit
def test_find_config_file_not_found(in_tmp):
    with pytest.raises(ConfigError) as exc_info:
        find_config_file()

    assert exc_info.value.code == "err.config_not_found"


@pytest.mark.unit
def test_find_config_file_explicit_missing(in_tmp):
    (in_tmp / ".linecap.yml").write_text("rules: {}\n", encoding="utf-8")

    with pytest.raises(ConfigError) as exc_info:
        find_config_file(str(in_tmp / "nope.yml"))

    assert exc_info.value.code == "err.config_not_found"


# ============================================================================
# Tests for load_config
# ============================================================================


@pytest.mark.unit
def test_load_config_reads_every_field(in_tmp):
    (in_tmp / ".linecap.yml").write_text(VALID_CONFIG, encoding="utf-8")

    cfg = load_config()

    assert cfg.rules == Rules(200, 1000, 20)
    assert cfg.mode == CountMode.CODE_ONLY
    assert cfg.ignore == ["generated/**"]
    assert cfg.default_excludes is False
    assert cfg.language == "ja"


@pytest.mark.unit
def test_load_config_applies_defaults(in_tmp):
    (in_tmp / ".linecap.yml").write_text("rules: {}\n", encoding="utf-8")

    cfg = load_config()

    assert cfg == Config()
    assert cfg.rules == Rules(300, 2000, 10)
    assert cfg.mode == CountMode.ALL
    assert cfg.default_excludes is True
    assert cfg.language == "en"


@pytest.mark.unit
def test_load_config_partial_rules(in_tmp):
    (in_tmp / ".linecap.yml").write_text(
        "rules:\n  max_lines_per_file: 50\n", encoding="utf-8"
    )

    cfg = load_config()

    assert cfg.rules == Rules(50, 2000, 10)


@pytest.mark.unit
def test_load_config_invalid_yaml(in_tmp):
    (in_tmp / ".linecap.yml").write_text("rules: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError) as exc_info:
        load_config()

    assert exc_info.value.code == "err.config_parse"
    assert exc_info.value.detail


@pytest.mark.unit
def test_load_config_missing_rules(in_tmp):
    (in_tmp / ".linecap.yml").write_text("count_mode: all\n", encoding="utf-8")

    with pytest.raises(ConfigError) as exc_info:
        load_config()

    assert exc_info.value.code == "validation.rules_required"


@pytest.mark.unit
def test_load_config_empty_file_has_no_rules(in_tmp):
    (in_tmp / ".linecap.yml").write_text("", encoding="utf-8")

    with pytest.raises(ConfigError) as exc_info:
        load_config()

    assert exc_info.value.code == "validation.rules_required"


@pytest.mark.unit
def test_load_config_collects_all_validation_errors(in_tmp):
    (in_tmp / ".linecap.yml").write_text(
        "rules:\n"
        "  max_lines_per_file: 0\n"
        "  max_lines_per_directory: -1\n"
        "  warning_threshold: 101\n"
        "count_mode: lines\n"
        "language: fr\n",
        encoding="utf-8",
    )

    with pytest.raises(ValidationErrors) as exc_info:
        load_config()

    assert exc_info.value.codes == [
        "validation.max_lines_per_file",
        "validation.max_lines_per_directory",
        "validation.warning_threshold",
        "validation.count_mode",
        "validation.language",
    ]


# ============================================================================
# Tests for config_from_dict and validate
# ============================================================================


@pytest.mark.unit
def test_config_from_dict_rejects_non_mapping():
    with pytest.raises(ConfigError) as exc_info:
        config_from_dict(["rules"])

    assert exc_info.value.code == "err.config_parse"


@pytest.mark.unit
@pytest.mark.parametrize("ignore", ["vendor/", [1, 2], {"a": "b"}])
def test_config_from_dict_rejects_bad_ignore(ignore):
    with pytest.raises(ConfigError) as exc_info:
        config_from_dict({"rules": {}, "ignore": ignore})

    assert exc_info.value.code == "err.config_parse"


@pytest.mark.unit
def test_config_from_dict_rejects_non_bool_default_excludes():
    with pytest.raises(ConfigError):
        config_from_dict({"rules": {}, "default_excludes": "no"})


@pytest.mark.unit
@pytest.mark.parametrize("threshold", [0, 100])
def test_validate_accepts_threshold_bounds(threshold):
    validate(Config(rules=Rules(warning_threshold=threshold)))


@pytest.mark.unit
@pytest.mark.parametrize("value", [True, "300", 1.5, None])
def test_validate_rejects_non_integer_limits(value):
    with pytest.raises(ValidationErrors) as exc_info:
        validate(Config(rules=Rules(max_lines_per_file=value)))  # type: ignore[arg-type]

    assert exc_info.value.codes == ["validation.max_lines_per_file"]


@pytest.mark.unit
def test_validation_errors_message_joins_all_messages():
    with pytest.raises(ValidationErrors) as exc_info:
        validate(Config(count_mode="x", language="de"))

    assert str(exc_info.value) == (
        '"count_mode" must be "all" or "code_only"; "language" must be "en" or "ja"'
    )


# ============================================================================
# Tests for Config.apply_overrides
# ============================================================================


@pytest.mark.unit
def test_apply_overrides_none_is_noop():
    cfg = Config()

    cfg.apply_overrides(None)

    assert cfg == Config()


@pytest.mark.unit
def test_apply_overrides_empty_overrides_keep_config():
    cfg = Config(ignore=["a/"])

    cfg.apply_overrides(Overrides())

    assert cfg == Config(ignore=["a/"])


@pytest.mark.unit
def test_apply_overrides_sets_given_values():
    cfg = Config(ignore=["a/"])

    cfg.apply_overrides(
        Overrides(
            max_lines_per_file=50,
            max_lines_per_directory=500,
            warning_threshold=0,
            count_mode="code_only",
            ignore=["b/", "c/"],
            no_default_excludes=True,
        )
    )

    assert cfg.rules == Rules(50, 500, 0)
    assert cfg.mode == CountMode.CODE_ONLY
    assert cfg.ignore == ["b/", "c/"]
    assert cfg.default_excludes is False


@pytest.mark.unit
def test_apply_overrides_empty_ignore_clears_patterns():
    cfg = Config(ignore=["a/"])

    cfg.apply_overrides(Overrides(ignore=[]))

    assert cfg.ignore == []


@pytest.mark.unit
def test_apply_overrides_revalidates():
    cfg = Config()

    with pytest.raises(ValidationErrors) as exc_info:
        cfg.apply_overrides(Overrides(max_lines_per_file=-5, warning_threshold=200))

    assert exc_info.value.codes == [
        "validation.max_lines_per_file",
        "validation.warning_threshold",
    ]


# ============================================================================
# Tests for ignore handling
# ============================================================================


@pytest.mark.unit
def test_read_ignore_file_skips_comments_and_blanks(tmp_path):
    path = tmp_path / ".linecapignore"
    path.write_text("# comment\n\nvendor/\n  *.gen.go  \n", encoding="utf-8")

    assert read_ignore_file(path) == ["vendor/", "*.gen.go"]


@pytest.mark.unit
def test_ignore_patterns_from_config_only(tmp_path):
    cfg = Config(ignore=["a/"])

    assert cfg.ignore_patterns(tmp_path) == (["a/"], [])


@pytest.mark.unit
def test_ignore_patterns_file_only(tmp_path):
    (tmp_path / ".linecapignore").write_text("b/\n", encoding="utf-8")

    assert Config().ignore_patterns(tmp_path) == (["b/"], [])


@pytest.mark.unit
def test_ignore_file_takes_precedence_with_warning(tmp_path):
    (tmp_path / ".linecapignore").write_text("b/\n", encoding="utf-8")
    cfg = Config(ignore=["a/"])

    patterns, warnings = cfg.ignore_patterns(tmp_path)

    assert patterns == ["b/"]
    assert warnings == ["ignore.both_defined"]


@pytest.mark.unit
def test_ignore_patterns_default_to_cwd(in_tmp):
    (in_tmp / ".linecapignore").write_text("c/\n", encoding="utf-8")

    assert Config().ignore_patterns() == (["c/"], [])


@pytest.mark.unit
def test_exclude_patterns_with_defaults(tmp_path):
    cfg = Config(ignore=["extra/"])

    patterns = cfg.exclude_patterns(tmp_path)

    assert patterns == list(DEFAULT_EXCLUDE_PATTERNS) + ["extra/"]


@pytest.mark.unit
def test_exclude_patterns_without_defaults(tmp_path):
    cfg = Config(ignore=["extra/"], default_excludes=False)

    assert cfg.exclude_patterns(tmp_path) == ["extra/"]
