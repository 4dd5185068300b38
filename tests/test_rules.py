# tests/test_rules.py

import json

import pytest

from contexto.infrastructure.rules import (
    CONTEXTO_GEMINI_FILE_NAME,
    CURSOR_RULES_PATH,
    GEMINI_CONTEXT_FILE_NAME,
    create_cursor_rule,
    create_gemini_rule,
    normalize_context_file_names,
    tool_description,
)


def _settings_path(root):
    return root / ".gemini" / "settings.json"


def _write_settings(root, settings):
    path = _settings_path(root)
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps(settings), encoding="utf-8")


def _read_settings(root):
    return json.loads(_settings_path(root).read_text(encoding="utf-8"))


# ── contextFileName normalization ─────────────────────────────────────────────

@pytest.mark.parametrize("value, expected", [
    (None, []),
    ("file.md", ["file.md"]),
    (["a.md", "b.md"], ["a.md", "b.md"]),
])
def test_normalize_context_file_names(value, expected):
    assert normalize_context_file_names(value) == expected


@pytest.mark.parametrize("value", [42, {"a": 1}, ["ok.md", 3]])
def test_normalize_rejects_other_shapes(value):
    with pytest.raises(ValueError):
        normalize_context_file_names(value)


# ── Gemini ────────────────────────────────────────────────────────────────────

def test_gemini_rule_creates_default_settings(tmp_path):
    message = create_gemini_rule(tmp_path)

    assert _read_settings(tmp_path) == {
        "contextFileName": [GEMINI_CONTEXT_FILE_NAME, CONTEXTO_GEMINI_FILE_NAME],
    }
    rule_path = tmp_path / CONTEXTO_GEMINI_FILE_NAME
    assert rule_path.read_text(encoding="utf-8") == tool_description()
    assert message == f"Successfully created {rule_path}"


def test_gemini_rule_adds_list_when_key_absent(tmp_path):
    _write_settings(tmp_path, {"theme": "dark"})

    create_gemini_rule(tmp_path)

    assert _read_settings(tmp_path) == {
        "theme": "dark",
        "contextFileName": [CONTEXTO_GEMINI_FILE_NAME],
    }


def test_gemini_rule_extends_string_value(tmp_path):
    _write_settings(tmp_path, {"contextFileName": "file.md"})

    create_gemini_rule(tmp_path)

    assert _read_settings(tmp_path)["contextFileName"] == ["file.md", CONTEXTO_GEMINI_FILE_NAME]


def test_gemini_rule_does_not_duplicate(tmp_path):
    _write_settings(tmp_path, {"contextFileName": ["file.md", CONTEXTO_GEMINI_FILE_NAME]})

    create_gemini_rule(tmp_path)
    create_gemini_rule(tmp_path)

    assert _read_settings(tmp_path)["contextFileName"] == ["file.md", CONTEXTO_GEMINI_FILE_NAME]


def test_gemini_rule_rejects_non_object_settings(tmp_path):
    _write_settings(tmp_path, ["not", "an", "object"])

    with pytest.raises(ValueError):
        create_gemini_rule(tmp_path)


# ── Cursor ────────────────────────────────────────────────────────────────────

def test_cursor_rule_content(tmp_path):
    message = create_cursor_rule(tmp_path, docs_dir_name="handbook")

    rule_path = tmp_path / CURSOR_RULES_PATH
    content = rule_path.read_text(encoding="utf-8")
    assert content.startswith("---\nalwaysApply: true\n---\n")
    assert "Assume handbook is the folder" in content
    assert message == f"Successfully created {rule_path}"


def test_cursor_rule_never_overwrites(tmp_path):
    rule_path = tmp_path / CURSOR_RULES_PATH
    rule_path.parent.mkdir(parents=True)
    rule_path.write_text("custom rule", encoding="utf-8")

    create_cursor_rule(tmp_path)

    assert rule_path.read_text(encoding="utf-8") == "custom rule"
