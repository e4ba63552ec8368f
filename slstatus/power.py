"""Battery and temperature readings from sysfs."""

from __future__ import annotations

import os
import re
from pathlib import Path

from .util import bprintf, read_first_line

POWER_SUPPLY_DIR = Path("/sys/class/power_supply")

_STATE_SYMBOLS = {
    "Charging": "󰚥",
    "Discharging": "󰚦",
    "Full": "󰚥",
    "Not charging": "󰚥",
}

_INT_RE = re.compile(r"\s*([+-]?\d+)")
_STATE_RE = re.compile(r"[a-zA-Z ]{1,12}")


def _scan_int(path) -> int | None:
    line = read_first_line(path)
    if line is None:
        return None
    match = _INT_RE.match(line)
    return int(match.group(1)) if match else None


def _read_state(bat: str) -> str | None:
    line = read_first_line(POWER_SUPPLY_DIR / bat / "status")
    if line is None:
        return None
    match = _STATE_RE.match(line)
    return match.group(0) if match else None


def _pick(bat: str, first: str, second: str) -> Path | None:
    for name in (first, second):
        path = POWER_SUPPLY_DIR / bat / name
        if os.access(path, os.R_OK):
            return path
    return None


def battery_perc(bat: str) -> str | None:
    """Battery capacity in percent."""
    capacity = _scan_int(POWER_SUPPLY_DIR / bat / "capacity")
    if capacity is None:
        return None
    return bprintf("%d", capacity)


def battery_state(bat: str) -> str | None:
    """Symbol for the charging state; '?' for an unknown state."""
    state = _read_state(bat)
    if state is None:
        return None
    return _STATE_SYMBOLS.get(state, "?")


def battery_remaining(bat: str) -> str | None:
    """Remaining time as 'Hh Mm' while discharging, empty string otherwise."""
    state = _read_state(bat)
    if state is None:
        return None

    charge_path = _pick(bat, "charge_now", "energy_now")
    if charge_path is None:
        return None
    charge_now = _scan_int(charge_path)
    if charge_now is None:
        return None

    if state != "Discharging":
        return ""

    current_path = _pick(bat, "current_now", "power_now")
    if current_path is None:
        return None
    current_now = _scan_int(current_path)
    if not current_now:
        return None

    timeleft = charge_now / current_now
    hours = int(timeleft)
    minutes = int((timeleft - hours) * 60)
    return bprintf("%dh %dm", hours, minutes)


def temp(file) -> str | None:
    """Temperature in degrees Celsius from a millidegree sensor file."""
    value = _scan_int(file)
    if value is None:
        return None
    return bprintf("%d", value // 1000)