"""
mizpatch: scoped text replacement for DCS mission archives (.miz).

A .miz file is a zip archive whose ``mission`` entry holds the mission as a
Lua table. mizpatch copies every entry into a new archive and rewrites only
the ``requiredModules = { ... }`` block of that entry, which lets a mission
follow a renamed asset pack without touching unit names, briefings or
anything else that happens to contain the same text.

- Scoped Block Editor (mizpatch.blockedit): first brace block after a marker,
  literal substitution limited to that block.
- Archive Transcoder (mizpatch.transcode): entry-by-entry copy with deflate,
  staged output, per-entry error reporting.
- CLI (mizpatch.cli): ``mizpatch <input.miz> <output.miz> [search] [replace]``.
"""

__version__ = "0.1"

__all__ = [
    "constants",
    "errors",
    "config",
    "pathutil",
    "blockedit",
    "transcode",
    "cli",
]
