"""Command-line interface for worldfs."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from .adapters import WorldReader, open_world
from .exceptions import NavigationError, WorldFSError
from .listing import list_node
from .nodes import Root
from .path_utils import normalize_path, resolve
from .render import FILE_TYPES, render_file

logger = logging.getLogger(__name__)

COMMANDS = ("ls", "read", "edit")
USAGE = "%(prog)s <world file path> <ls|read|edit> <path>"


def _configure_logging(verbose: int, level: str | None) -> None:
    if level is None:
        level = {0: "WARNING", 1: "INFO"}.get(verbose, "DEBUG")
    logging.basicConfig(
        level=level.upper(),
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _write_text(text: str) -> None:
    sys.stdout.write(text if text.endswith("\n") else text + "\n")


def _run_ls(root: Root, path: str) -> int:
    target = normalize_path(path)
    try:
        node = root if target == "" else resolve(root, target)
    except NavigationError as exc:
        logger.debug("ls %r failed: %s", target, exc)
        _write_text(f"error: {exc}")
        return 0
    _write_text(list_node(node, target))
    return 0


def _run_read(reader: WorldReader, path: str) -> int:
    result = render_file(reader, path)
    if not result.raw:
        _write_text(result.text)
    return 0


def _run_edit(reader: WorldReader, path: str) -> int:
    # TODO: open the file in $EDITOR and store it back once the readers can write
    _write_text("edit is not implemented yet")
    return 0


def _dispatch(args: argparse.Namespace) -> int:
    path = args.path.lstrip("/")
    with open_world(args.world) as reader:
        root = reader.tree_root()
        logger.debug("Dispatching %s %r", args.command_name, path)
        if args.command_name == "ls":
            return _run_ls(root, path)
        if args.command_name == "read":
            return _run_read(reader, path)
        if args.command_name == "edit":
            return _run_edit(reader, path)
    _write_text(f"invalid command: {args.command_name}. use one of: <{'|'.join(COMMANDS)}>")
    return 0


def _file_types_epilog() -> str:
    lines = ["file types shown by read:"]
    lines.extend(f"  .{spec.suffix:<8} {spec.description}" for spec in FILE_TYPES.iter_types())
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="worldfs",
        usage=USAGE,
        description="Inspect the virtual directory tree stored in a world file.",
        epilog=_file_types_epilog(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("world", nargs="?", help="Path to the world container")
    parser.add_argument("command_name", nargs="?", metavar="command", help="One of ls, read, edit")
    parser.add_argument("path", nargs="?", help="Path inside the world")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (-vv for debug output).",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=os.environ.get("WORLDFS_LOG_LEVEL"),
        help="Explicit log level; overrides -v. Defaults to $WORLDFS_LOG_LEVEL.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args, extra = parser.parse_known_args(argv)
    _configure_logging(args.verbose, args.log_level)
    if extra:
        logger.info("Ignoring extra arguments: %s", " ".join(extra))
    if args.path is None:
        parser.print_usage(sys.stdout)
        raise SystemExit(0)
    try:
        exit_code = _dispatch(args)
    except WorldFSError as exc:
        logger.debug("%s failed", args.command_name, exc_info=True)
        sys.stderr.write(f"error: {exc}\n")
        exit_code = 1
    raise SystemExit(exit_code)


__all__ = ["main", "build_parser"]
