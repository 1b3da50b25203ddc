"""Command-line front door for ponder.

Resolves the workspace root, loads its tree through the navigation
controller, applies an optional filter and prints the visible rows. With
``--open`` the selected file's numbered content view follows the tree.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .runtime import config
from .runtime.controller import NavigationController
from .runtime.requests import InlineRequestScheduler
from .source_pane.rendering import render_content_view, render_file_error
from .tree_model.rendering import format_tree_row
from .ui_theme import available_theme_names, resolve_theme


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _forget_root(_path: str) -> None:
    return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse a workspace tree, filter it by name and print file contents with line numbers."
    )
    parser.add_argument(
        "root",
        nargs="?",
        default=None,
        help="Workspace root. Defaults to the remembered root, then the current directory.",
    )
    parser.add_argument("--filter", default="", help="Show only entries whose names contain TEXT.")
    parser.add_argument("--open", metavar="REL_PATH", help="Print the content of REL_PATH (relative to root).")
    parser.add_argument("--max-bytes", type=_positive_int, default=None, help="Maximum file size to read.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--no-remember", action="store_true", help="Do not read or store the last workspace root.")
    parser.add_argument("--verbose", action="store_true", help="Log controller activity to stderr.")
    return parser


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and print the workspace tree (and optionally a file).

    ``default_path`` is primarily for tests; when omitted and no root is
    remembered the current working directory is used.
    """
    args = build_parser().parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    remember = not args.no_remember
    root = args.root
    if root is None and remember:
        root = config.load_last_root()
    if root is None:
        root = str(default_path if default_path is not None else Path.cwd())

    max_read_bytes = args.max_bytes if args.max_bytes is not None else config.load_max_read_bytes()
    controller = NavigationController(
        scheduler=InlineRequestScheduler(),
        save_last_root=config.save_last_root if remember else _forget_root,
        max_read_bytes=max_read_bytes,
    )
    theme = resolve_theme(args.theme, no_color=args.no_color)

    controller.load_root(root)
    controller.apply_pending_results()
    state = controller.state
    if state.tree_error is not None:
        sys.stderr.write(f"{state.tree_error}\n")
        raise SystemExit(1)

    controller.set_filter(args.filter)
    if args.open:
        try:
            controller.select_file(args.open)
        except ValueError as exc:
            raise SystemExit(f"Not in workspace: {args.open}") from exc
        controller.reveal(args.open)
        controller.apply_pending_results()

    show_size_labels = config.load_show_size_labels()
    out: list[str] = [f"{controller.workspace_label}\n"]
    for row in controller.visible_rows():
        out.append(format_tree_row(row, search_query=args.filter, show_size_labels=show_size_labels, theme=theme))
        out.append("\n")
    sys.stdout.write("".join(out))

    if state.selected_path is None:
        return
    if state.file_error is not None:
        sys.stderr.write(render_file_error(state.selected_path, state.file_error, theme=theme))
        raise SystemExit(1)
    if state.file_content is not None:
        sys.stdout.write("\n")
        sys.stdout.write(render_content_view(state.selected_path, state.file_content, theme=theme))


if __name__ == "__main__":
    main()
