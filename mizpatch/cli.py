from __future__ import annotations

import sys
import argparse

from typing import List, Optional

from mizpatch import __version__
from mizpatch.config import resolve_replace_config
from mizpatch.constants import MARKER, TARGET_ENTRY
from mizpatch.errors import MizPatchError
from mizpatch.transcode import transcode


_STANDALONE_FLAGS = ("-h", "--help", "--version")


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit status 1."""

    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def cmd_patch(input_miz: str, output_miz: str, search: Optional[str] = None, replace: Optional[str] = None) -> bool:
    """Rewrite the requiredModules block of a mission archive into a new file.

    Args:
        input_miz: Source .miz archive.
        output_miz: Destination .miz archive (must differ from the source).
        search: Text to find; the built-in default is used when None.
        replace: Replacement text; the built-in default is used when None.

    Prints:
        Default notices when the search string is omitted, the replacement
        outcome and the output path.

    Returns:
        True when the block was modified.
    """
    cfg, defaulted = resolve_replace_config(search, replace)
    if "search" in defaulted:
        print(f"Using default search string: {cfg.search}")
        if "replace" in defaulted:
            print(f"Using default replace string: {cfg.replace}")

    result = transcode(
        input_miz,
        output_miz,
        find=cfg.search,
        replace=cfg.replace,
        target_entry=TARGET_ENTRY,
        marker=MARKER,
    )
    if result.changed:
        print(f"Replacement done in {MARKER}.")
    else:
        print(f"Warning: no replacement made ({MARKER} or search string not found).")
    print(f"Output written to: {result.output}")
    return result.changed


def main(argv: List[str] | None = None):
    ap = _ArgumentParser(
        prog="mizpatch",
        description=f"Replace text inside the {MARKER} block of a .miz mission archive",
        epilog=(
            f"Only the '{TARGET_ENTRY}' entry is edited; every entry is rewritten with deflate compression."
        ),
    )
    ap.add_argument("input", help="Input .miz path")
    ap.add_argument("output", help="Output .miz path (must differ from input)")
    ap.add_argument("search", nargs="?", help="Text to find (default: built-in asset pack name)")
    ap.add_argument("replace", nargs="?", help="Replacement text (default: built-in short name)")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)
    # Positionals may start with '-' (e.g. a search string like "-old").
    if not (len(argv) == 1 and argv[0] in _STANDALONE_FLAGS):
        argv = ["--", *argv]
    args = ap.parse_args(argv)
    try:
        cmd_patch(args.input, args.output, args.search, args.replace)
    except (MizPatchError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
