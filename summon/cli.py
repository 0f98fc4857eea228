"""Command-line front door for summon.

Parses CLI options, configures logging, builds the per-invocation context,
and dispatches into the command modules. Configuration errors end the
process with a one-line message.
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .commands.ide import open_project, refresh_repo_cache
from .commands.init import init_config
from .commands.urls import add_url, open_url_group, remove_url, search_and_open_url
from .config import ConfigError, SummonConfig, load_config
from .context import InvocationContext
from .picker import PromptError
from .ui_theme import UITheme, resolve_theme

REFRESH_WORD = "refresh"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _add_open_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "search",
        nargs="*",
        help=f"optional search keywords; '{REFRESH_WORD}' alone refreshes the repository cache",
    )
    parser.add_argument(
        "--refresh",
        action="store_true",
        help="rescan the working directory before picking",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="summon",
        description="Pick a local Git project and open it in an editor; manage URL bookmarks.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    commands = parser.add_subparsers(dest="command", metavar="<command>")
    commands.required = True

    init_parser = commands.add_parser("init", help="create the config file (prompts for workingDirectory)")
    init_parser.add_argument("-w", "--working-directory", help="set workingDirectory without prompting")
    init_parser.add_argument("-f", "--force", action="store_true", help="overwrite an existing config")

    for editor in ("cursor", "claude"):
        editor_parser = commands.add_parser(editor, help=f"open a project in {editor.capitalize()}")
        _add_open_arguments(editor_parser)
        editor_parser.set_defaults(editor=editor)

    open_parser = commands.add_parser("open", help="open a project with any editor command")
    open_parser.add_argument("editor", help="editor command, for example 'code' or 'subl -n'")
    _add_open_arguments(open_parser)

    commands.add_parser(REFRESH_WORD, help="refresh cached auto-discovered repositories")

    url_parser = commands.add_parser("url", help="URL bookmark management")
    url_commands = url_parser.add_subparsers(dest="url_command", metavar="<action>")
    url_commands.required = True
    add_parser = url_commands.add_parser("add", help="add a URL bookmark")
    add_parser.add_argument("name")
    add_parser.add_argument("url")
    remove_parser = url_commands.add_parser("remove", help="remove a URL bookmark (search when name is omitted)")
    remove_parser.add_argument("name", nargs="?")
    url_commands.add_parser("search", help="search and open a URL bookmark")
    url_commands.add_parser("group", help="open every URL of a URL group")
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)


def _dispatch(args: argparse.Namespace, theme: UITheme) -> str | None:
    if args.command == "init":
        context = InvocationContext(config=SummonConfig(), theme=theme)
        return init_config(context, args.working_directory, args.force)

    context = InvocationContext(config=load_config(), theme=theme)
    if args.command == REFRESH_WORD:
        refresh_repo_cache(context)
        return None

    if args.command in {"cursor", "claude", "open"}:
        if args.search == [REFRESH_WORD]:
            refresh_repo_cache(context)
            return None
        search = " ".join(args.search) if args.search else None
        error = open_project(context, args.editor, search, refresh=args.refresh)
        if error is not None:
            return f"Error opening project in {args.editor}: {error}"
        return None

    if args.url_command == "add":
        add_url(context, args.name, args.url)
        return None
    if args.url_command == "remove":
        remove_url(context, args.name)
        return None
    if args.url_command == "search":
        return search_and_open_url(context)
    return open_url_group(context)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run one command.

    ``argv`` is primarily for tests; when omitted ``sys.argv`` is used.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    theme = resolve_theme(args.no_color, sys.stdout.isatty())
    try:
        error = _dispatch(args, theme)
    except (ConfigError, PromptError, OSError) as exc:
        raise SystemExit(f"Error: {exc}") from exc
    if error is not None:
        raise SystemExit(error)


if __name__ == "__main__":
    main()
