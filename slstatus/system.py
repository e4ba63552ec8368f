"""CPU, memory, swap, load, uptime and user/host information."""

from __future__ import annotations

import os
import pwd
import re
import socket
import sys
import time

from .util import bprintf, fmt_human, read_first_line, warn

CPU_FREQ = "/sys/devices/system/cpu/cpu0/cpufreq/scaling_cur_freq"
PROC_STAT = "/proc/stat"
MEMINFO = "/proc/meminfo"
ENTROPY_AVAIL = "/proc/sys/kernel/random/entropy_avail"

_UINT_RE = re.compile(r"\s*(\d+)")
_SWAP_RE = re.compile(r"\s*([+-]?\d+)")

# Previous /proc/stat sample per stat file, used to compute deltas.
_cpu_previous: dict[str, tuple[float, ...]] = {}


def _trunc_div(num: int, den: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(num) // abs(den)
    return quotient if (num >= 0) == (den >= 0) else -quotient


def _scan_uint(path) -> int | None:
    line = read_first_line(path)
    if line is None:
        return None
    match = _UINT_RE.match(line)
    return int(match.group(1)) if match else None


def _read_lines(path) -> list[str] | None:
    try:
        with open(path, encoding="utf-8", errors="replace") as fp:
            return fp.read().splitlines()
    except OSError:
        warn("fopen '%s':", str(path))
        return None


def _scan_meminfo(*labels: str) -> list[int] | None:
    """Read the leading meminfo lines, which must carry ``labels`` in order."""
    lines = _read_lines(MEMINFO)
    if lines is None or len(lines) < len(labels):
        return None
    values = []
    for label, line in zip(labels, lines):
        match = re.match(rf"\s*{re.escape(label)}:\s*(\d+)\s*kB", line)
        if match is None:
            return None
        values.append(int(match.group(1)))
    return values


def _swap_info(*wanted: str) -> dict[str, int] | None:
    """Find the requested Swap* fields in meminfo, in any order."""
    lines = _read_lines(MEMINFO)
    if lines is None:
        return None
    found: dict[str, int] = {}
    for line in lines:
        if len(found) == len(wanted):
            break
        for name in wanted:
            if name not in found and line.startswith(name):
                match = _SWAP_RE.match(line[len(name) + 1:])
                if match:
                    found[name] = int(match.group(1))
                break
    if len(found) != len(wanted):
        return None
    return found


def cpu_freq(unused=None) -> str | None:
    """Current frequency of the first CPU."""
    freq = _scan_uint(CPU_FREQ)
    if freq is None:
        return None
    return fmt_human(freq * 1000, 1000)


def cpu_perc(unused=None) -> str | None:
    """CPU usage in percent since the previous call."""
    key = str(PROC_STAT)
    previous = _cpu_previous.get(key, (0.0,) * 7)

    line = read_first_line(PROC_STAT)
    if line is None:
        return None
    fields = line.split()[1:8]
    if len(fields) != 7:
        return None
    try:
        current = tuple(float(field) for field in fields)
    except ValueError:
        return None
    _cpu_previous[key] = current

    if previous[0] == 0:
        return None

    total = sum(previous) - sum(current)
    if total == 0:
        return None

    busy = (0, 1, 2, 5, 6)
    used = sum(previous[i] for i in busy) - sum(current[i] for i in busy)
    return bprintf("%d", int(100 * used / total))


def ram_free(unused=None) -> str | None:
    """Available memory."""
    values = _scan_meminfo("MemTotal", "MemFree", "MemAvailable")
    if values is None:
        return None
    return fmt_human(values[2] * 1024, 1024)


def ram_perc(unused=None) -> str | None:
    """Memory usage in percent, not counting buffers and cache."""
    values = _scan_meminfo("MemTotal", "MemFree", "MemAvailable", "Buffers", "Cached")
    if values is None:
        return None
    total, free, _available, buffers, cached = values
    if total == 0:
        return None
    return bprintf("%d", _trunc_div(100 * ((total - free) - (buffers + cached)), total))


def ram_total(unused=None) -> str | None:
    """Total memory."""
    values = _scan_meminfo("MemTotal")
    if values is None:
        return None
    return fmt_human(values[0] * 1024, 1024)


def ram_used(unused=None) -> str | None:
    """Used memory, not counting buffers and cache."""
    values = _scan_meminfo("MemTotal", "MemFree", "MemAvailable", "Buffers", "Cached")
    if values is None:
        return None
    total, free, _available, buffers, cached = values
    return fmt_human((total - free - buffers - cached) * 1024, 1024)


def swap_free(unused=None) -> str | None:
    """Free swap space."""
    info = _swap_info("SwapFree")
    if info is None:
        return None
    return fmt_human(info["SwapFree"] * 1024, 1024)


def swap_perc(unused=None) -> str | None:
    """Swap usage in percent."""
    info = _swap_info("SwapTotal", "SwapFree", "SwapCached")
    if info is None or info["SwapTotal"] == 0:
        return None
    total = info["SwapTotal"]
    used = total - info["SwapFree"] - info["SwapCached"]
    return bprintf("%d", _trunc_div(100 * used, total))


def swap_total(unused=None) -> str | None:
    """Total swap space."""
    info = _swap_info("SwapTotal")
    if info is None:
        return None
    return fmt_human(info["SwapTotal"] * 1024, 1024)


def swap_used(unused=None) -> str | None:
    """Used swap space."""
    info = _swap_info("SwapTotal", "SwapFree", "SwapCached")
    if info is None:
        return None
    used = info["SwapTotal"] - info["SwapFree"] - info["SwapCached"]
    return fmt_human(used * 1024, 1024)


def load_avg(unused=None) -> str | None:
    """The 1, 5 and 15 minute load averages."""
    try:
        one, five, fifteen = os.getloadavg()
    except OSError:
        warn("getloadavg: Failed to obtain load average")
        return None
    return bprintf("%.2f %.2f %.2f", one, five, fifteen)


def _uptime_clock() -> int:
    for name in ("CLOCK_BOOTTIME", "CLOCK_UPTIME"):
        if hasattr(time, name):
            return getattr(time, name)
    return time.CLOCK_MONOTONIC


def uptime(unused=None) -> str | None:
    """System uptime as 'Hh Mm'."""
    clock = _uptime_clock()
    try:
        seconds = int(time.clock_gettime(clock))
    except OSError:
        warn("clock_gettime %d" % clock)
        return None
    return bprintf("%dh %dm", seconds // 3600, seconds % 3600 // 60)


def entropy(unused=None) -> str | None:
    """Available kernel entropy; infinite on the BSDs."""
    if not sys.platform.startswith("linux"):
        return "\u221e"
    value = _scan_uint(ENTROPY_AVAIL)
    if value is None:
        return None
    return bprintf("%d", value)


def kernel_release(unused=None) -> str | None:
    """Release of the running kernel."""
    try:
        release = os.uname().release
    except OSError:
        warn("uname:")
        return None
    return bprintf("%s", release)


def hostname(unused=None) -> str | None:
    """Host name of the machine."""
    try:
        name = socket.gethostname()
    except OSError:
        warn("gethostbyname:")
        return None
    return bprintf("%s", name)


def gid(unused=None) -> str:
    """Real group id of the current process."""
    return bprintf("%d", os.getgid())


def uid(unused=None) -> str:
    """Effective user id of the current process."""
    return bprintf("%d", os.geteuid())


def username(unused=None) -> str | None:
    """Name of the effective user."""
    euid = os.geteuid()
    try:
        entry = pwd.getpwuid(euid)
    except KeyError:
        warn("getpwuid '%d': no such user", euid)
        return None
    return bprintf("%s", entry.pw_name)