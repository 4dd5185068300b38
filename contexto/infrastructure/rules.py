# contexto/infrastructure/rules.py

import json
import logging
from pathlib import Path
from typing import Any, List

from contexto.config import DEFAULT_DOCS_DIR_NAME
from contexto.infrastructure.filesystem import create_directory, create_file


logger = logging.getLogger(__name__)


GEMINI_DIR_NAME = ".gemini"
GEMINI_SETTINGS_FILE_NAME = "settings.json"
GEMINI_CONTEXT_FILE_NAME = "GEMINI.md"
CONTEXTO_GEMINI_FILE_NAME = "CONTEXTO_GEMINI.md"
CONTEXT_FILE_NAME_KEY = "contextFileName"

CURSOR_RULES_PATH = Path(".cursor") / "rules" / "mcp-contexto.mdc"


def tool_description(docs_dir_name: str = DEFAULT_DOCS_DIR_NAME) -> str:
    return f"""
# CONTEXTO

You MUST use the 'CONTEXTO' tool kit to retrieve the project's up-to-date documentation, best practices,
code examples, folder structure, project architecture,
and other relevant information that might be useful for fulfilling the user's request.

You should ALWAYS consult the 'CONTEXTO' documentation when you are unsure or have a question about the project's architecture, best practices, or other relevant information.

Assume {docs_dir_name} is the folder where the documentation is stored, unless the user specifies otherwise.
You MUST generate a new index of the documentation every time you create, modify, or delete a file in the {docs_dir_name} folder.
"""


def create_cursor_rule(project_root: Path, docs_dir_name: str = DEFAULT_DOCS_DIR_NAME) -> str:
    rule_path = Path(project_root) / CURSOR_RULES_PATH
    create_directory(rule_path.parent)
    content = f"---\nalwaysApply: true\n---\n{tool_description(docs_dir_name)}"
    create_file(rule_path, content)
    return f"Successfully created {rule_path}"


def normalize_context_file_names(value: Any) -> List[str]:
    """
    Collapse the accepted shapes of `contextFileName` into one list:
        absent (None)     -> []
        "file.md"         -> ["file.md"]
        ["a.md", "b.md"]  -> ["a.md", "b.md"]
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    raise ValueError(
        f"'{CONTEXT_FILE_NAME_KEY}' must be a string or a list of strings, got {value!r}."
    )


def create_gemini_rule(project_root: Path, docs_dir_name: str = DEFAULT_DOCS_DIR_NAME) -> str:
    project_root = Path(project_root)
    gemini_dir = project_root / GEMINI_DIR_NAME
    settings_path = gemini_dir / GEMINI_SETTINGS_FILE_NAME
    create_directory(gemini_dir)

    if not settings_path.is_file():
        settings = {
            CONTEXT_FILE_NAME_KEY: [GEMINI_CONTEXT_FILE_NAME, CONTEXTO_GEMINI_FILE_NAME],
        }
        create_file(settings_path, json.dumps(settings, indent=2))
    else:
        settings = json.loads(settings_path.read_text(encoding="utf-8"))
        if not isinstance(settings, dict):
            raise ValueError(f"Gemini settings at '{settings_path}' must be a JSON object.")

        file_names = normalize_context_file_names(settings.get(CONTEXT_FILE_NAME_KEY))
        if CONTEXTO_GEMINI_FILE_NAME not in file_names:
            file_names.append(CONTEXTO_GEMINI_FILE_NAME)
        settings[CONTEXT_FILE_NAME_KEY] = file_names
        settings_path.write_text(json.dumps(settings, indent=2), encoding="utf-8")
        logger.debug("Updated %s", settings_path)

    rule_path = project_root / CONTEXTO_GEMINI_FILE_NAME
    create_file(rule_path, tool_description(docs_dir_name))
    return f"Successfully created {rule_path}"
