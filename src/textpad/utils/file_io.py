"""Plain-text file IO helpers used by the editor session."""

from __future__ import annotations

import locale
import os
from pathlib import Path

__all__ = [
    "TEXT_EXTENSION",
    "read_text",
    "write_text",
    "ensure_text_extension",
    "is_regular_file",
    "platform_encoding",
]

TEXT_EXTENSION = ".txt"


def platform_encoding() -> str:
    """Return the platform default text encoding."""

    return locale.getpreferredencoding(False) or "utf-8"


def read_text(path: Path | str, *, encoding: str | None = None) -> str:
    """Read ``path`` line by line, terminating every line with a single ``\\n``.

    ``\\r\\n`` and bare ``\\r`` terminators are folded into ``\\n`` and a final
    line without a terminator gains one, so the result is not a byte-exact copy
    of the file.
    """

    target = Path(path)
    lines: list[str] = []
    with target.open("r", encoding=encoding or platform_encoding(), newline=None) as handle:
        for line in handle:
            lines.append(line[:-1] if line.endswith("\n") else line)
    return "".join(f"{line}\n" for line in lines)


def write_text(path: Path | str, content: str, *, encoding: str | None = None) -> Path:
    """Write ``content`` verbatim to ``path``, truncating any existing content.

    The target is opened directly, so a symlink keeps pointing at the file it
    names and an existing file keeps its permission bits.
    """

    target = Path(path)
    with target.open("w", encoding=encoding or platform_encoding(), newline="") as handle:
        handle.write(content)
        handle.flush()
        os.fsync(handle.fileno())
    return target


def ensure_text_extension(path: Path | str) -> Path:
    """Append ``.txt`` to ``path`` unless its name already ends with it."""

    target = Path(path)
    if target.name.endswith(TEXT_EXTENSION):
        return target
    return target.with_name(f"{target.name}{TEXT_EXTENSION}")


def is_regular_file(path: Path | str | None) -> bool:
    """Return ``True`` when ``path`` names an existing regular file."""

    if path is None:
        return False
    try:
        return Path(path).is_file()
    except OSError:
        return False
