# main.py

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from contexto.application.document_service import resolve_document_path
from contexto.application.documentation_index import DocumentationIndex
from contexto.config import load_settings
from contexto.domain.errors import ContextoError
from contexto.infrastructure.embedding_engine import SentenceTransformerEngine
from contexto.infrastructure.filesystem import read_text_file
from contexto.interface.cli import (
    configure_logging,
    display_welcome_banner,
    display_sync_report,
    display_messages,
    prompt_for_query,
    display_results,
    display_document,
    display_error,
    ask_continue,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contexto",
        description="Semantic search over a project's documentation folder.",
    )
    parser.add_argument(
        "--project-root",
        type=Path,
        default=Path.cwd(),
        help="Project root holding the docs/ and data/ folders (default: cwd).",
    )
    commands = parser.add_subparsers(dest="command")

    init = commands.add_parser("init", help="Create folders, the empty index and rule files, then index.")
    init.add_argument("--no-rules", action="store_true", help="Skip editor rule scaffolding.")

    commands.add_parser("index", help="Synchronize the index with the docs folder.")

    search = commands.add_parser("search", help="Rank documents against a query.")
    search.add_argument("query")
    search.add_argument("--top-k", type=int, default=None)

    read = commands.add_parser("read", help="Print a document's content.")
    read.add_argument("path")

    create = commands.add_parser("create", help="Write a document, then reindex.")
    create.add_argument("name")
    create.add_argument("content", nargs="?", help="Document text (default: read stdin).")

    delete = commands.add_parser("delete", help="Delete a document, then reindex.")
    delete.add_argument("name")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()
    configure_logging(settings.log_level)

    if args.command == "read":
        content = read_text_file(
            resolve_document_path(args.project_root.resolve() / settings.docs_dir_name, args.path)
        )
        if content is None:
            display_error(f"Could not read file: '{args.path}'.")
            return 1
        display_document(args.path, content)
        return 0

    # ── 1. Initialize infrastructure ─────────────────────────────────────────
    embedding_engine = SentenceTransformerEngine(settings.model_name)
    index = DocumentationIndex(args.project_root, embedding_engine, settings)

    try:
        if args.command == "init":
            display_messages(index.initialize(write_rules=not args.no_rules))
        elif args.command == "index":
            display_sync_report(index.generate_index())
        elif args.command == "search":
            display_results(args.query, index.search(args.query, top_k=args.top_k))
        elif args.command == "create":
            content = args.content if args.content is not None else sys.stdin.read()
            display_sync_report(index.create_document(args.name, content))
        elif args.command == "delete":
            display_sync_report(index.delete_document(args.name))
        else:
            _interactive(index)
    except (ContextoError, ValueError) as error:
        display_error(str(error))
        return 1

    return 0


def _interactive(index: DocumentationIndex) -> None:
    display_welcome_banner()

    # ── 2. Incremental indexing ──────────────────────────────────────────────
    display_sync_report(index.generate_index())

    # ── 3. Interactive search loop ────────────────────────────────────────────
    while True:
        query = prompt_for_query()
        try:
            display_results(query, index.search(query))
        except ValueError as error:
            display_error(str(error))

        if not ask_continue():
            break


if __name__ == "__main__":
    sys.exit(main())
