"""Status bar layout and timing settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .desktop import run_command
from .network import wifi_essid
from .storage import disk_perc
from .system import cpu_perc, ram_perc

# Interval between updates in milliseconds.
INTERVAL = 1000

# Text shown when a component cannot provide a value.
UNKNOWN_STR = "n/a"

# Maximum length of the status line in bytes.
MAXLEN = 2048


@dataclass(frozen=True)
class StatusArg:
    """One status component: a reading function, its format and its argument."""

    func: Callable[[Optional[str]], Optional[str]]
    fmt: str
    args: Optional[str] = None


_BATTERY_COMMAND = (
    "AC=$(cat /sys/class/power_supply/AC/online 2>/dev/null); "
    "BAT=$(cat /sys/class/power_supply/BAT0/capacity 2>/dev/null); "
    "if [ \"$AC\" = \"1\" ]; then ICON=''; "
    "elif [ \"$BAT\" -ge 90 ]; then ICON=''; "
    "elif [ \"$BAT\" -ge 70 ]; then ICON=''; "
    "elif [ \"$BAT\" -ge 50 ]; then ICON=''; "
    "elif [ \"$BAT\" -ge 30 ]; then ICON=''; "
    "else ICON=''; fi; echo \"$ICON $BAT%\";"
)

ARGS: tuple[StatusArg, ...] = (
    StatusArg(run_command, "   %s%% |",
              "brightnessctl -m | awk -F, '{print $4}' | tr -d '%'"),
    StatusArg(run_command, "   %s%% |", "pamixer --get-volume"),
    StatusArg(cpu_perc, "  %s%% /", None),
    StatusArg(ram_perc, "   %s%% |", None),
    StatusArg(disk_perc, "   %s%% |", "/"),
    StatusArg(wifi_essid, "   %s |", "wlan0"),
    StatusArg(run_command, " %s |", _BATTERY_COMMAND),
    StatusArg(run_command, " 󱑃 %s ", "date +%H:%M"),
)