"""Shared helpers: warnings, bounded formatting and human-readable sizes."""

from __future__ import annotations

import sys

BUF_SIZE = 1024

_PREFIXES = {
    1000: ("", "k", "M", "G", "T", "P", "E", "Z", "Y"),
    1024: ("", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi"),
}


class TruncatedError(ValueError):
    """Raised when formatted output does not fit into the status buffer."""


def warn(fmt: str, *args: object) -> None:
    """Print a warning to stderr.

    A message ending in ':' is followed by the description of the
    OSError currently being handled, if any.
    """
    message = fmt % args if args else fmt
    if message.endswith(":"):
        exc = sys.exc_info()[1]
        if isinstance(exc, OSError) and exc.strerror:
            detail = exc.strerror
        elif exc is not None:
            detail = str(exc)
        else:
            detail = "Success"
        sys.stderr.write(f"{message} {detail}\n")
    else:
        sys.stderr.write(f"{message}\n")


def bprintf(fmt: str, *args: object) -> str:
    """Format with printf-style rules, refusing results that overflow the buffer."""
    result = fmt % args
    if len(result.encode("utf-8", errors="replace")) >= BUF_SIZE:
        warn("vsnprintf: Output truncated")
        raise TruncatedError("output truncated")
    return result


def fmt_human(num: int | float, base: int) -> str:
    """Scale ``num`` by ``base`` (1000 or 1024) and attach the unit prefix."""
    try:
        prefixes = _PREFIXES[base]
    except KeyError:
        warn("fmt_human: Invalid base")
        raise ValueError(f"invalid base: {base}") from None

    scaled = float(num)
    index = 0
    while index < len(prefixes) - 1 and scaled >= base:
        scaled /= base
        index += 1
    return bprintf("%.1f %s", scaled, prefixes[index])


def read_first_line(path) -> str | None:
    """Return the first line of a file without its newline, or None if unreadable."""
    try:
        with open(path, encoding="utf-8", errors="replace") as fp:
            line = fp.readline()
    except OSError:
        warn("fopen '%s':", str(path))
        return None
    return line[:-1] if line.endswith("\n") else line