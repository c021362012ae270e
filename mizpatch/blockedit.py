"""
Scoped find/replace inside one brace block.

The block is the first balanced ``{ ... }`` that follows the first
occurrence of a marker keyword, e.g. ``requiredModules = { ... }`` in a
mission file. Substitution is literal (no patterns) and never touches
bytes outside the block.

Limitation: the scan is a plain brace counter over raw bytes. Braces inside
quoted Lua strings or comments are counted like structural ones, so a
string value such as ``"{"`` inside the block shifts the detected end.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .constants import BRACE_OPEN, BRACE_CLOSE, TEXT_ENCODING


BytesLike = Union[bytes, str]


@dataclass(frozen=True)
class BlockSpan:
    open: int   # offset of '{'
    close: int  # offset of the matching '}' (inclusive)


@dataclass(frozen=True)
class EditResult:
    data: bytes
    changed: bool


def _as_bytes(value: BytesLike) -> bytes:
    if isinstance(value, str):
        return value.encode(TEXT_ENCODING)
    return bytes(value)


def find_block(data: bytes, marker: BytesLike) -> Optional[BlockSpan]:
    """Locate the brace block following the first ``marker``.

    Returns None when the marker is absent, no ``{`` follows it, or the
    block is not closed before the end of ``data``.
    """
    idx = data.find(_as_bytes(marker))
    if idx == -1:
        return None
    open_pos = data.find(b"{", idx)
    if open_pos == -1:
        return None

    depth = 0
    for pos in range(open_pos, len(data)):
        b = data[pos]
        if b == BRACE_OPEN:
            depth += 1
        elif b == BRACE_CLOSE:
            depth -= 1
            if depth == 0:
                return BlockSpan(open_pos, pos)
    return None


def replace_in_block(data: bytes, marker: BytesLike, find: BytesLike, replace: BytesLike) -> EditResult:
    """Replace every ``find`` with ``replace`` inside the marker's block.

    Args:
        data: Entry content.
        marker: Keyword that precedes the block.
        find: Literal byte sequence to replace (non-empty).
        replace: Literal replacement.

    Returns:
        EditResult with the spliced content and ``changed=True``, or the
        original ``data`` and ``changed=False`` when there is no block or the
        substitution leaves it identical.

    Raises:
        ValueError: If ``find`` is empty.
    """
    find_b = _as_bytes(find)
    if not find_b:
        raise ValueError("search string must not be empty")
    replace_b = _as_bytes(replace)

    span = find_block(data, marker)
    if span is None:
        return EditResult(data, False)

    block = data[span.open:span.close + 1]
    new_block = block.replace(find_b, replace_b)
    if new_block == block:
        return EditResult(data, False)
    return EditResult(data[:span.open] + new_block + data[span.close + 1:], True)
