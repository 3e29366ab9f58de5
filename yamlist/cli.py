"""Command-line front door for yamlist.

Parses CLI options, merges them over persisted preferences, loads the YAML
file and connects the optional editor cursor-sync socket. Then dispatches
into the interactive viewer.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from . import __version__
from .config import load_viewer_config
from .document import parse_file
from .errors import CursorSyncError, DocumentLoadError, DocumentParseError
from .logs import configure_logging
from .render.preview import DEFAULT_PREVIEW_STYLE
from .runtime import run_viewer
from .runtime.app import ViewerOptions
from .sync import CursorSyncClient
from .ui_theme import available_theme_names

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yamlist",
        description="Browse a YAML document as a collapsible tree or a flat list of paths.",
    )
    parser.add_argument("file", help="YAML file to browse.")
    parser.add_argument("--no-icons", action="store_true", help="Use ASCII icons instead of Nerd Font glyphs.")
    parser.add_argument(
        "--max-preview-lines",
        type=_positive_int,
        default=None,
        help="Maximum source lines shown in the preview pane.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        choices=available_theme_names(),
        help="UI theme name.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--style", default=DEFAULT_PREVIEW_STYLE, help="Pygments style for the preview pane.")
    parser.add_argument("--nvim-socket", metavar="PATH", default=None, help="Unix socket for editor cursor sync.")
    parser.add_argument("--path", metavar="DISPLAY_PATH", default=None, help="Select this node path on start.")
    parser.add_argument("--nopager", action="store_true", help="Print a flat path listing and exit.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write log records to this file.")
    parser.add_argument("--debug", action="store_true", help="Log debug records to --log-file.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def connect_sync(socket_path: str | None) -> CursorSyncClient | None:
    """Connect to the editor socket; failures fall back to standalone mode."""
    if not socket_path:
        return None
    try:
        return CursorSyncClient.connect(socket_path)
    except CursorSyncError as exc:
        logger.warning("%s; running without cursor sync", exc)
        return None


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the viewer on one YAML file."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.debug)

    path = Path(args.file)
    if not path.is_file():
        raise SystemExit(f"File not found: {path}")
    try:
        document = parse_file(path)
    except DocumentParseError as exc:
        raise SystemExit(f"{path}: {exc}") from exc
    except DocumentLoadError as exc:
        raise SystemExit(str(exc)) from exc

    config = load_viewer_config()
    options = ViewerOptions(
        theme=args.theme or config.theme,
        no_color=args.no_color,
        use_icons=config.use_icons and not args.no_icons,
        max_preview_lines=args.max_preview_lines or config.max_preview_lines,
        preview_style=args.style,
        show_preview=config.show_preview,
        initial_path=args.path,
        nopager=args.nopager,
    )
    sync = None if args.nopager else connect_sync(args.nvim_socket)
    run_viewer(document, options, sync)


if __name__ == "__main__":
    main()
