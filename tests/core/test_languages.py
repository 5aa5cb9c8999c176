"""
Tests for extension-to-grammar lookup.

Tests cover:
- file_extension: nested paths, dotfiles, names without an extension
- lookup/detect_language: every registered extension, case sensitivity
- The extension table: uniqueness and immutability
"""

import pytest

from constants import LANGUAGE_GRAMMARS
from core.languages import (
    EXTENSION_TO_GRAMMAR,
    _build_extension_table,
    detect_language,
    file_extension,
    lookup,
)
from models import LanguageGrammar


# ============================================================================
# Tests for file_extension
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "path, expected",
    [
        ("main.go", ".go"),
        ("src/pkg/main.go", ".go"),
        ("/abs/path/app.test.ts", ".ts"),
        ("Makefile", ""),
        (".bashrc", ".bashrc"),
        ("dir.d/file", ""),
    ],
)
def test_file_extension(path, expected):
    assert file_extension(path) == expected


# ============================================================================
# Tests for lookup and detect_language
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "extension, name",
    [
        (".go", "Go"),
        (".rs", "Rust"),
        (".js", "JavaScript"),
        (".jsx", "JavaScript"),
        (".mjs", "JavaScript"),
        (".ts", "TypeScript"),
        (".tsx", "TypeScript"),
        (".mts", "TypeScript"),
        (".py", "Python"),
        (".rb", "Ruby"),
        (".java", "Java"),
        (".kt", "Kotlin"),
        (".kts", "Kotlin"),
        (".c", "C"),
        (".h", "C"),
        (".cpp", "C++"),
        (".cc", "C++"),
        (".hpp", "C++"),
        (".hh", "C++"),
        (".html", "HTML"),
        (".htm", "HTML"),
        (".xml", "HTML"),
        (".svg", "HTML"),
        (".css", "CSS"),
        (".scss", "SCSS"),
        (".sass", "SCSS"),
        (".sh", "Shell"),
        (".bash", "Shell"),
        (".zsh", "Shell"),
    ],
)
def test_lookup_known_extensions(extension, name):
    grammar = lookup(extension)

    assert grammar is not None
    assert grammar.name == name


@pytest.mark.unit
def test_lookup_is_case_sensitive():
    assert lookup(".GO") is None
    assert lookup(".Py") is None


@pytest.mark.unit
def test_lookup_unknown_extension():
    assert lookup(".txt") is None
    assert lookup("") is None


@pytest.mark.unit
def test_detect_language_from_path():
    assert detect_language("pkg/server.go").name == "Go"
    assert detect_language("README") is None
    assert detect_language("notes.md") is None


@pytest.mark.unit
def test_python_grammar_uses_docstring_delimiters():
    grammar = lookup(".py")

    assert grammar.line_comment_prefixes == ("#",)
    assert grammar.docstring_delimiters == ('"""', "'''")
    assert grammar.has_block_comments


@pytest.mark.unit
def test_shell_grammar_has_no_block_comments():
    assert not lookup(".sh").has_block_comments


@pytest.mark.unit
def test_html_grammar_has_no_line_comments():
    grammar = lookup(".html")

    assert grammar.line_comment_prefixes == ()
    assert grammar.block_comment_start == "<!--"
    assert grammar.block_comment_end == "-->"


# ============================================================================
# Tests for the extension table
# ============================================================================


@pytest.mark.unit
def test_table_covers_every_grammar_extension():
    expected = {ext for grammar in LANGUAGE_GRAMMARS for ext in grammar.extensions}

    assert set(EXTENSION_TO_GRAMMAR) == expected


@pytest.mark.unit
def test_table_is_read_only():
    with pytest.raises(TypeError):
        EXTENSION_TO_GRAMMAR[".foo"] = LANGUAGE_GRAMMARS[0]  # type: ignore[index]


@pytest.mark.unit
def test_duplicate_extension_is_rejected():
    grammars = (
        LanguageGrammar(name="A", extensions=frozenset({".x"})),
        LanguageGrammar(name="B", extensions=frozenset({".x"})),
    )

    with pytest.raises(ValueError, match=r"\.x"):
        _build_extension_table(grammars)
