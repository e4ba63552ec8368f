"""Date and time, shell commands, mixer volume and keyboard state."""

from __future__ import annotations

import fcntl
import os
import struct
import subprocess
import time

from .util import BUF_SIZE, bprintf, warn

SOUND_MIXER_READ_DEVMASK = 0x80044DFE
SOUND_MIXER_VOLUME = 0

_LINE_LIMIT = BUF_SIZE - 2
_INVALID_SYMBOLS = ("evdev", "inet", "pc", "base")


def _mixer_read(device: int) -> int:
    return 0x80044D00 | device


def _ioctl_int(fd: int, request: int) -> int:
    reply = fcntl.ioctl(fd, request, struct.pack("i", 0))
    return struct.unpack("i", reply)[0]


def datetime(fmt: str) -> str | None:
    """Current local time formatted with strftime."""
    result = time.strftime(fmt, time.localtime())
    if not result or len(result.encode("utf-8", errors="replace")) >= BUF_SIZE:
        warn("strftime: Result string exceeds buffer size")
        return None
    return result


def run_command(cmd: str) -> str | None:
    """First line printed by a shell command, or None if it printed nothing."""
    try:
        proc = subprocess.Popen(cmd, shell=True, stdout=subprocess.PIPE)
    except OSError:
        warn("popen '%s':", cmd)
        return None
    with proc:
        line = proc.stdout.readline(_LINE_LIMIT)
    text = line.decode("utf-8", errors="replace")
    if text.endswith("\n"):
        text = text[:-1]
    return text or None


def vol_perc(card) -> str | None:
    """Master volume of an OSS mixer device in percent."""
    try:
        fd = os.open(card, os.O_RDONLY | os.O_NONBLOCK)
    except OSError:
        warn("open '%s':", str(card))
        return None
    try:
        try:
            devmask = _ioctl_int(fd, SOUND_MIXER_READ_DEVMASK)
        except OSError:
            warn("ioctl 'SOUND_MIXER_READ_DEVMASK':")
            return None
        if not devmask & (1 << SOUND_MIXER_VOLUME):
            return None
        try:
            value = _ioctl_int(fd, _mixer_read(SOUND_MIXER_VOLUME))
        except OSError:
            warn("ioctl 'MIXER_READ(%d)':", SOUND_MIXER_VOLUME)
            return None
    finally:
        os.close(fd)
    return bprintf("%d", value & 0xFF)


def format_indicators(fmt: str, led_mask: int) -> str:
    """Render caps/num lock state according to ``fmt``.

    ``fmt`` holds 'c' and/or 'n', each optionally followed by '?'. With '?'
    the letter appears, case kept, only while the indicator is on; without
    it the letter always appears, upper case when on and lower case when off.
    Only the first four characters of ``fmt`` are used.
    """
    fmt = fmt[:4]
    out = []
    for i, char in enumerate(fmt):
        key = char.lower()
        if key not in ("c", "n"):
            continue
        togglecase = i + 1 >= len(fmt) or fmt[i + 1] != "?"
        isset = bool(led_mask & (1 << (key == "n")))
        if togglecase:
            out.append(key.upper() if isset else key)
        elif isset:
            out.append(char)
    return "".join(out)


def _valid_layout_or_variant(sym: str) -> bool:
    return not sym.startswith(_INVALID_SYMBOLS)


def get_layout(symbols: str, group: int) -> str | None:
    """Pick the layout of keyboard group ``group`` from an xkb symbols string."""
    layout = None
    found = 0
    tokens = (tok for tok in symbols.replace(":", "+").split("+") if tok)
    for tok in tokens:
        if found > group:
            break
        if not _valid_layout_or_variant(tok):
            continue
        if len(tok) == 1 and tok.isdigit():
            # :2, :3, :4 name additional layout groups
            continue
        layout = tok
        found += 1
    return layout