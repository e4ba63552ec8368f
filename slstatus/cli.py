"""Command line entry point and the status update loop."""

from __future__ import annotations

import os
import signal
import subprocess
import sys
import threading
import time
from typing import Callable, Iterable, Optional, TextIO

from .config import ARGS, INTERVAL, MAXLEN, UNKNOWN_STR, StatusArg
from .util import warn

VERSION = "1.0"
PROGRAM = "slstatus"


def _die(fmt: str, *args: object) -> None:
    warn(fmt, *args)
    raise SystemExit(1)


def build_status(args: Iterable[StatusArg], unknown: str = UNKNOWN_STR,
                 maxlen: int = MAXLEN) -> str:
    """Render every component into one status line of fewer than ``maxlen`` bytes.

    A component that yields nothing shows ``unknown``. Rendering stops at the
    first piece that no longer fits.
    """
    pieces: list[str] = []
    used = 0
    for arg in args:
        try:
            res = arg.func(arg.args)
        except ValueError:
            res = None
        if res is None:
            res = unknown
        piece = arg.fmt % res
        size = len(piece.encode("utf-8", errors="replace"))
        if size >= maxlen - used:
            warn("vsnprintf: Output truncated")
            break
        pieces.append(piece)
        used += size
    return "".join(pieces)


def _stream_sink(out: TextIO) -> Callable[[str], None]:
    def write(status: str) -> None:
        try:
            out.write(status + "\n")
            out.flush()
        except OSError:
            _die("puts:")

    return write


def _set_root_name(name: str) -> None:
    try:
        subprocess.run(["xsetroot", "-name", name], check=True)
    except (OSError, subprocess.CalledProcessError):
        _die("XStoreName: Allocation failed")


def run(args: Iterable[StatusArg] = ARGS, once: bool = False,
        out: Optional[TextIO] = None) -> None:
    """Update the status until interrupted, or a single time if ``once``.

    With ``out`` the status is written there line by line; without it the
    status becomes the name of the X root window.
    """
    args = tuple(args)
    if out is None:
        if not os.environ.get("DISPLAY"):
            _die("XOpenDisplay: Failed to open display")
        sink = _set_root_name
    else:
        sink = _stream_sink(out)

    done = once
    wake = threading.Event()

    def terminate(signo, _frame) -> None:
        nonlocal done
        if signo != signal.SIGUSR1:
            done = True
        wake.set()

    previous: dict[int, object] = {}
    if threading.current_thread() is threading.main_thread():
        for signo in (signal.SIGINT, signal.SIGTERM, signal.SIGUSR1):
            previous[signo] = signal.signal(signo, terminate)

    try:
        while True:
            start = time.monotonic()
            sink(build_status(args, UNKNOWN_STR, MAXLEN))
            if done:
                break
            remaining = INTERVAL / 1000 - (time.monotonic() - start)
            if remaining >= 0:
                wake.wait(remaining)
                wake.clear()
            if done:
                break
    finally:
        for signo, handler in previous.items():
            signal.signal(signo, handler)

    if out is None:
        _set_root_name("")


def _usage() -> None:
    _die("usage: %s [-v] [-s] [-1]", PROGRAM)


def main(argv: Optional[list[str]] = None) -> int:
    """Parse the command line and run the status loop."""
    if argv is None:
        argv = sys.argv[1:]
    rest = list(argv)
    sflag = False
    once = False

    while rest and rest[0].startswith("-") and len(rest[0]) > 1:
        option = rest.pop(0)
        if option == "--":
            break
        for flag in option[1:]:
            if flag == "v":
                _die("slstatus-%s", VERSION)
            elif flag == "1":
                once = True
                sflag = True
            elif flag == "s":
                sflag = True
            else:
                _usage()

    if rest:
        _usage()

    run(ARGS, once, sys.stdout if sflag else None)
    return 0