"""
Application-wide constants and configuration mappings.

This module defines the static data used throughout the linecap CLI: the
comment grammar of each supported language, the default exclude patterns, the
configuration file names and defaults, and the template written by `init`.
"""

from typing import Final

from models import CountMode, LanguageGrammar


APP_NAME: Final[str] = "linecap"
VERSION: Final[str] = "0.1.0"

# Comment grammars per language. Each extension appears in exactly one entry;
# core.languages builds the extension lookup from this tuple once at import.
C_STYLE_LINE: Final[tuple[str, ...]] = ("//",)

LANGUAGE_GRAMMARS: Final[tuple[LanguageGrammar, ...]] = (
    LanguageGrammar(
        name="Go",
        extensions=frozenset({".go"}),
        line_comment_prefixes=C_STYLE_LINE,
        block_comment_start="/*",
        block_comment_end="*/",
    ),
    LanguageGrammar(
        name="Rust",
        extensions=frozenset({".rs"}),
        line_comment_prefixes=C_STYLE_LINE,
        block_comment_start="/*",
        block_comment_end="*/",
    ),
    LanguageGrammar(
        name="JavaScript",
        extensions=frozenset({".js", ".jsx", ".mjs"}),
        line_comment_prefixes=C_STYLE_LINE,
        block_comment_start="/*",
        block_comment_end="*/",
    ),
    LanguageGrammar(
        name="TypeScript",
        extensions=frozenset({".ts", ".tsx", ".mts"}),
        line_comment_prefixes=C_STYLE_LINE,
        block_comment_start="/*",
        block_comment_end="*/",
    ),
    LanguageGrammar(
        name="Python",
        extensions=frozenset({".py"}),
        line_comment_prefixes=("#",),
        block_comment_start='"""',
        block_comment_end='"""',
        docstring_delimiters=('"""', "'''"),
    ),
    LanguageGrammar(
        name="Ruby",
        extensions=frozenset({".rb"}),
        line_comment_prefixes=("#",),
        block_comment_start="=begin",
        block_comment_end="=end",
    ),
    LanguageGrammar(
        name="Java",
        extensions=frozenset({".java"}),
        line_comment_prefixes=C_STYLE_LINE,
        block_comment_start="/*",
        block_comment_end="*/",
    ),
    LanguageGrammar(
        name="Kotlin",
        extensions=frozenset({".kt", ".kts"}),
        line_comment_prefixes=C_STYLE_LINE,
        block_comment_start="/*",
        block_comment_end="*/",
    ),
    LanguageGrammar(
        name="C",
        extensions=frozenset({".c", ".h"}),
        line_comment_prefixes=C_STYLE_LINE,
        block_comment_start="/*",
        block_comment_end="*/",
    ),
    LanguageGrammar(
        name="C++",
        extensions=frozenset({".cpp", ".cc", ".hpp", ".hh"}),
        line_comment_prefixes=C_STYLE_LINE,
        block_comment_start="/*",
        block_comment_end="*/",
    ),
    LanguageGrammar(
        name="HTML",
        extensions=frozenset({".html", ".htm", ".xml", ".svg"}),
        block_comment_start="<!--",
        block_comment_end="-->",
    ),
    LanguageGrammar(
        name="CSS",
        extensions=frozenset({".css"}),
        line_comment_prefixes=C_STYLE_LINE,
        block_comment_start="/*",
        block_comment_end="*/",
    ),
    LanguageGrammar(
        name="SCSS",
        extensions=frozenset({".scss", ".sass"}),
        line_comment_prefixes=C_STYLE_LINE,
        block_comment_start="/*",
        block_comment_end="*/",
    ),
    LanguageGrammar(
        name="Shell",
        extensions=frozenset({".sh", ".bash", ".zsh"}),
        line_comment_prefixes=("#",),
    ),
)

# Longest physical line (in bytes, terminator excluded) the counter accepts.
# Longer lines fail the file with LineTooLongError.
MAX_LINE_BYTES: Final[int] = 64 * 1024

# Upper bound on files counted at once by `check`.
MAX_COUNT_WORKERS: Final[int] = 64

# Configuration discovery
CONFIG_ENV_VAR: Final[str] = "LINECAP_CONFIG"
LANG_ENV_VAR: Final[str] = "LINECAP_LANG"
CONFIG_FILE_NAMES: Final[tuple[str, ...]] = (".linecap.yml", ".linecap.yaml")
IGNORE_FILE_NAME: Final[str] = ".linecapignore"

DEFAULT_MAX_LINES_PER_FILE: Final[int] = 300
DEFAULT_MAX_LINES_PER_DIRECTORY: Final[int] = 2000
DEFAULT_WARNING_THRESHOLD: Final[int] = 10
DEFAULT_COUNT_MODE: Final[CountMode] = CountMode.ALL
DEFAULT_LANGUAGE: Final[str] = "en"
SUPPORTED_LANGUAGES: Final[tuple[str, ...]] = ("en", "ja")

# Gitignore-style patterns applied when `default_excludes` is enabled.
DEFAULT_EXCLUDE_PATTERNS: Final[tuple[str, ...]] = (
    # Common
    ".git/",
    "dist/",
    "build/",
    "out/",
    "*.min.js",
    "*.min.css",
    "*.lock",
    "*-lock.*",
    "*.gen.*",
    "*.generated.*",
    ".idea/",
    ".vscode/",
    ".claude/",
    ".cursor/",
    ".gemini/",
    ".cache/",
    # JavaScript/TypeScript
    "node_modules/",
    "bower_components/",
    ".next/",
    ".nuxt/",
    ".svelte-kit/",
    ".angular/",
    ".turbo/",
    ".parcel-cache/",
    ".vite/",
    "coverage/",
    # Go
    "vendor/",
    "ent/",
    # Rust
    "target/",
    # Python
    "__pycache__/",
    "*.pyc",
    "*.pyo",
    ".venv/",
    "venv/",
    "env/",
    "*.egg-info/",
    ".eggs/",
    ".mypy_cache/",
    ".pytest_cache/",
    ".tox/",
)

DEFAULT_CONFIG_TEMPLATE: Final[str] = """\
# linecap configuration file

rules:
  max_lines_per_file: 300
  max_lines_per_directory: 2000
  warning_threshold: 10

count_mode: all

# ignore:
#   - "vendor/**"
# default_excludes: true
# language: en
"""
