"""Disk usage, directory entry counts and file contents."""

from __future__ import annotations

import os

from .util import bprintf, fmt_human, read_first_line, warn

_CAT_LIMIT = 1022


def _statvfs(path):
    try:
        return os.statvfs(path)
    except OSError:
        warn("statvfs '%s':", str(path))
        return None


def disk_free(path) -> str | None:
    """Space available to unprivileged users."""
    fs = _statvfs(path)
    if fs is None:
        return None
    return fmt_human(fs.f_frsize * fs.f_bavail, 1024)


def disk_perc(path) -> str | None:
    """Used space in percent."""
    fs = _statvfs(path)
    if fs is None or fs.f_blocks == 0:
        return None
    return bprintf("%d", int(100 * (1 - fs.f_bavail / fs.f_blocks)))


def disk_total(path) -> str | None:
    """Total size of the filesystem."""
    fs = _statvfs(path)
    if fs is None:
        return None
    return fmt_human(fs.f_frsize * fs.f_blocks, 1024)


def disk_used(path) -> str | None:
    """Space in use on the filesystem."""
    fs = _statvfs(path)
    if fs is None:
        return None
    return fmt_human(fs.f_frsize * (fs.f_blocks - fs.f_bfree), 1024)


def num_files(path) -> str | None:
    """Number of entries in a directory."""
    try:
        count = sum(1 for _ in os.scandir(path))
    except OSError:
        warn("opendir '%s':", str(path))
        return None
    return bprintf("%d", count)


def cat(path) -> str | None:
    """First line of a file, or None when it is missing or empty."""
    line = read_first_line(path)
    if not line:
        return None
    return line[:_CAT_LIMIT]