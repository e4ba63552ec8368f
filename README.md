# slstatus

A small status monitor for Linux. At a fixed interval (one second) it
collects pieces of system information, formats them into one line, and
either writes that line to standard output or sets it as the name of the X
root window, where a window manager can show it as a status bar.

## Installation

```
pip install .
```

## Usage

```
slstatus [-v] [-s] [-1]
```

- `-v` prints `slstatus-1.0` to standard error and exits with status 1.
- `-s` writes the status line to standard output on every update.
- `-1` writes the status line to standard output once and exits.
- Options may be combined (`-s1`); `--` ends the options. Any other option
  or any leftover argument prints the usage line and exits with status 1.

Without `-s` or `-1`, the line is set as the X root window name by running
`xsetroot -name <line>` on every update, so `DISPLAY` must be set and
`xsetroot` must be installed. When the program stops, the name is reset to
an empty string.

The program stops on `SIGINT` or `SIGTERM`. `SIGUSR1` wakes it up early
for an immediate refresh.

## The default status line

The layout lives in `slstatus.config.ARGS`, together with `INTERVAL`
(milliseconds between updates), `UNKNOWN_STR` (`"n/a"`) and `MAXLEN`
(2048 bytes). The default line shows screen brightness (through
`brightnessctl`), volume (through `pamixer`), CPU usage, memory usage, usage
of `/`, the ESSID of `wlan0`, a battery icon and capacity computed by a
shell snippet, and the time (through `date`). Those external commands have
to be installed for their fields to show a value; a field that yields
nothing shows `n/a`.

## Components

Each component is a function that takes a single argument and returns a
string, or `None` when no value could be read. Problems are reported as
warnings on standard error.

| Module             | Functions                                                                 |
|--------------------|---------------------------------------------------------------------------|
| `slstatus.power`   | `battery_perc`, `battery_state`, `battery_remaining`, `temp`              |
| `slstatus.storage` | `disk_free`, `disk_perc`, `disk_total`, `disk_used`, `num_files`, `cat`   |
| `slstatus.system`  | `cpu_freq`, `cpu_perc`, `ram_free`, `ram_perc`, `ram_total`, `ram_used`, `swap_free`, `swap_perc`, `swap_total`, `swap_used`, `load_avg`, `uptime`, `entropy`, `kernel_release`, `hostname`, `gid`, `uid`, `username` |
| `slstatus.network` | `ipv4`, `ipv6`, `netspeed_rx`, `netspeed_tx`, `wifi_perc`, `wifi_essid`, `rssi_to_perc` |
| `slstatus.desktop` | `datetime`, `run_command`, `vol_perc`, `format_indicators`, `get_layout`  |

Battery, temperature, CPU, memory, swap, entropy and network readings come
from `/sys` and `/proc`. `cpu_perc`, `netspeed_rx` and `netspeed_tx` report
the change since their previous call, so the first call returns `None`.
`vol_perc` reads the volume of an OSS mixer device such as `/dev/mixer`.

Sizes are shown with `slstatus.util.fmt_human`, which scales a number by
1000 or 1024 and appends an SI or IEC prefix; any other base raises
`ValueError`:

```python
from slstatus.util import fmt_human

fmt_human(1536, 1024)   # '1.5 Ki'
```

`slstatus.util.bprintf` formats with `%` rules and raises
`slstatus.util.TruncatedError` when the result would not fit into 1024
bytes.

## Building your own status line

A layout is a sequence of `slstatus.config.StatusArg` entries, each holding
a component function, a `%`-style format with one `%s`, and the argument
the function is called with. `slstatus.cli.build_status` turns such a
sequence into one line, stopping at the first piece that no longer fits
into `maxlen` bytes; `slstatus.cli.run` repeats that in a loop, writing to
a given stream or to the root window name:

```python
import sys

from slstatus.cli import build_status, run
from slstatus.config import StatusArg
from slstatus.desktop import datetime
from slstatus.system import load_avg

layout = [StatusArg(load_avg, "load %s | ", None), StatusArg(datetime, "%s", "%F %T")]

line = build_status(layout, "n/a", 2048)
run(layout, once=True, out=sys.stdout)
```

## Keyboard helpers

`slstatus.desktop.format_indicators(fmt, led_mask)` renders caps lock and
num lock state from an LED mask (bit 0 caps, bit 1 num) according to a
format such as `"c?n"`, and `slstatus.desktop.get_layout(symbols, group)`
picks the layout name of a keyboard group out of an xkb symbols string such
as `"pc+us+de:2+inet(evdev)"`.

## What the package does not do

It does not talk to the X server itself: it cannot read the keyboard LED
state or the current keymap, so there are no ready-made keyboard indicator
or keymap components, only the two helpers above that work on values you
supply. The root window name is set only through the `xsetroot` command.
Readings are implemented for Linux only.

## Box drawing

`slstatus.boxdraw` and `slstatus.boxdraw_data` describe how to draw the
Unicode box-drawing and block characters (U+2500–U+259F) and braille
patterns (U+2800–U+28FF) as plain rectangles.

- `slstatus.boxdraw_data.shape_for(codepoint)` returns the 16-bit shape of
  a U+25XX codepoint, or 0 when it is not supported.
- `is_boxdraw` and `boxdraw_index` tell whether a codepoint is drawn from
  the table and give its full shape, with optional bold and braille.
- `box_rects(x, y, w, h, bd)` returns the `Rect`s that make up one cell.
- `shade_color(fg, bg, level)` blends two RGB colours in quarter steps.
- `draw_boxes(x, y, cw, ch, indices, fg, bg)` lays out a run of shapes and
  returns each rectangle with its colour.

## Tests

```
pip install .[test]
pytest
```