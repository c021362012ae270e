from __future__ import annotations

import os
import struct
import uuid
import zipfile
import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterable, Tuple

from .blockedit import replace_in_block, BytesLike
from .constants import TARGET_ENTRY, MARKER, EXTRA_ZIP64
from .errors import (
    ArchiveOpenError,
    OutputCreateError,
    EntryReadError,
    EntryWriteError,
)
from .pathutil import PathLike, check_distinct_paths


# Extra field record header: header_id u16, data_size u16
_EXTRA_HDR_STRUCT = struct.Struct("<HH")

# What zipfile can raise while inflating a member (CRC mismatch, truncated
# data, encrypted or unsupported compression)
_READ_ERRORS = (zipfile.BadZipFile, zlib.error, EOFError, OSError, RuntimeError, NotImplementedError)


@dataclass
class TranscodeResult:
    output: Path
    entries: int = 0
    target_found: bool = False
    changed: bool = False


def strip_extra(extra: bytes, drop_ids: Iterable[int]) -> bytes:
    """Remove extra field records whose header id is in ``drop_ids``.

    A truncated trailing record is dropped as well.
    """
    drop = set(drop_ids)
    out = bytearray()
    pos = 0
    while pos + _EXTRA_HDR_STRUCT.size <= len(extra):
        header_id, size = _EXTRA_HDR_STRUCT.unpack_from(extra, pos)
        end = pos + _EXTRA_HDR_STRUCT.size + size
        if end > len(extra):
            break
        if header_id not in drop:
            out += extra[pos:end]
        pos = end
    return bytes(out)


def _deflated_info(src: zipfile.ZipInfo) -> zipfile.ZipInfo:
    """Copy the header metadata of ``src`` into a fresh deflate ZipInfo."""
    info = zipfile.ZipInfo(src.filename, date_time=src.date_time)
    info.compress_type = zipfile.ZIP_DEFLATED
    info.comment = src.comment
    # zipfile emits its own zip64 record when sizes require it
    info.extra = strip_extra(src.extra, (EXTRA_ZIP64,))
    info.create_system = src.create_system
    info.external_attr = src.external_attr
    info.internal_attr = src.internal_attr
    return info


def _create_staging_file(dst_path: Path) -> Tuple[int, Path]:
    """Create an empty file next to ``dst_path`` for the new archive.

    Opened with mode 0o666 so the process umask applies as it would to a
    directly created output.
    """
    temp_path = dst_path.parent / f".mizpatch-{uuid.uuid4().hex}{dst_path.suffix or '.miz'}"
    fd = os.open(str(temp_path), os.O_WRONLY | os.O_CREAT | os.O_EXCL | getattr(os, "O_BINARY", 0), 0o666)
    return fd, temp_path


def _open_input(path: Path) -> zipfile.ZipFile:
    try:
        return zipfile.ZipFile(str(path), "r")
    except (OSError, zipfile.BadZipFile) as exc:
        raise ArchiveOpenError(f"cannot open input archive {path}: {exc}") from exc


def _copy_entries(
    src: zipfile.ZipFile,
    fh: BinaryIO,
    result: TranscodeResult,
    *,
    find: BytesLike,
    replace: BytesLike,
    target_entry: str,
    marker: BytesLike,
) -> None:
    with zipfile.ZipFile(fh, "w", compression=zipfile.ZIP_DEFLATED) as dst:
        dst.comment = src.comment
        for src_info in src.infolist():
            name = src_info.filename
            try:
                data = b"" if src_info.is_dir() else src.read(src_info)
            except _READ_ERRORS as exc:
                raise EntryReadError(name, f"read failed ({exc})") from exc

            if name == target_entry:
                result.target_found = True
                edit = replace_in_block(data, marker, find, replace)
                data = edit.data
                result.changed = edit.changed

            try:
                dst.writestr(_deflated_info(src_info), data)
            except (OSError, ValueError, zipfile.LargeZipFile) as exc:
                raise EntryWriteError(name, f"write failed ({exc})") from exc
            result.entries += 1


def transcode(
    input_path: PathLike,
    output_path: PathLike,
    *,
    find: BytesLike,
    replace: BytesLike,
    target_entry: str = TARGET_ENTRY,
    marker: BytesLike = MARKER,
) -> TranscodeResult:
    """Copy an archive, rewriting the marker block of ``target_entry``.

    Every entry is recompressed with deflate and keeps its name, timestamp,
    attributes and comment. The new archive is staged next to the output and
    moved into place only after it is complete, so a failure never leaves a
    partial file at ``output_path``.

    Args:
        input_path: Source .miz archive.
        output_path: Destination path; must not resolve to the input.
        find: Literal text to replace inside the block.
        replace: Replacement text.
        target_entry: Exact name of the entry eligible for editing.
        marker: Keyword that precedes the brace block.

    Returns:
        TranscodeResult; ``changed`` is True only when the target entry was
        found and its block was modified.

    Raises:
        PathCollisionError: Input and output are the same file.
        ArchiveOpenError: Input missing, unreadable or not a zip archive.
        OutputCreateError: Output cannot be created.
        EntryReadError / EntryWriteError: Failure on a specific entry.
        ValueError: ``find`` is empty.
    """
    if not find:
        raise ValueError("search string must not be empty")
    src_path, dst_path = check_distinct_paths(input_path, output_path)
    result = TranscodeResult(output=Path(output_path))

    with _open_input(src_path) as src:
        try:
            fd, temp_path = _create_staging_file(dst_path)
        except OSError as exc:
            raise OutputCreateError(f"cannot create output {dst_path}: {exc}") from exc

        try:
            with os.fdopen(fd, "wb") as fh:
                _copy_entries(
                    src,
                    fh,
                    result,
                    find=find,
                    replace=replace,
                    target_entry=target_entry,
                    marker=marker,
                )
            os.replace(str(temp_path), str(dst_path))
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise

    return result
