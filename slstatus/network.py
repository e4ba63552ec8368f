"""Network addresses, throughput and wireless link information."""

from __future__ import annotations

import array
import fcntl
import ipaddress
import re
import socket
import struct
from pathlib import Path

from .util import bprintf, fmt_human, read_first_line, warn

NET_DIR = Path("/sys/class/net")
WIRELESS = Path("/proc/net/wireless")
IF_INET6 = Path("/proc/net/if_inet6")

# Update interval of the status loop in milliseconds.
INTERVAL_MS = 1000

IFNAMSIZ = 16
IW_ESSID_MAX_SIZE = 32
IWREQ_SIZE = 32
SIOCGIFADDR = 0x8915
SIOCGIWESSID = 0x8B1B
_IPV6_SCOPE_LINK = 0x20
_UINT64 = (1 << 64) - 1

_UINT_RE = re.compile(r"\s*(\d+)")
_LINK_RE = re.compile(r"\s*[+-]?\d+\s*([+-]?\d+)")

# Byte counters seen on the previous call, per direction.
_last_bytes: dict[str, int] = {"rx": 0, "tx": 0}


def _scan_uint(path) -> int | None:
    line = read_first_line(path)
    if line is None:
        return None
    match = _UINT_RE.match(line)
    return int(match.group(1)) if match else None


def ipv4(interface: str) -> str | None:
    """IPv4 address of an interface."""
    name = interface.encode()
    if not name or len(name) >= IFNAMSIZ:
        return None
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        try:
            reply = fcntl.ioctl(sock.fileno(), SIOCGIFADDR, struct.pack("256s", name))
        except OSError:
            return None
    return bprintf("%s", socket.inet_ntoa(reply[20:24]))


def ipv6(interface: str) -> str | None:
    """First IPv6 address of an interface."""
    try:
        with open(IF_INET6, encoding="ascii", errors="replace") as fp:
            lines = fp.read().splitlines()
    except OSError:
        warn("getifaddrs:")
        return None
    for line in lines:
        parts = line.split()
        if len(parts) < 6 or parts[5] != interface:
            continue
        try:
            address = ipaddress.IPv6Address(bytes.fromhex(parts[0]))
            scope = int(parts[3], 16)
        except ValueError:
            warn("getnameinfo: Invalid address")
            return None
        text = str(address)
        if scope == _IPV6_SCOPE_LINK:
            text += "%" + interface
        return bprintf("%s", text)
    return None


def _netspeed(interface: str, direction: str) -> str | None:
    old = _last_bytes[direction]
    value = _scan_uint(NET_DIR / interface / "statistics" / f"{direction}_bytes")
    if value is None:
        return None
    _last_bytes[direction] = value
    if old == 0:
        return None
    rate = (((value - old) * 1000) & _UINT64) // INTERVAL_MS
    return fmt_human(rate, 1024)


def netspeed_rx(interface: str) -> str | None:
    """Receive rate per second since the previous call."""
    return _netspeed(interface, "rx")


def netspeed_tx(interface: str) -> str | None:
    """Transmit rate per second since the previous call."""
    return _netspeed(interface, "tx")


def rssi_to_perc(rssi: int) -> int:
    """Map a signal strength in dBm onto 0..100."""
    if rssi >= -50:
        return 100
    if rssi <= -100:
        return 0
    return 2 * (rssi + 100)


def wifi_perc(interface: str) -> str | None:
    """Wireless link quality in percent."""
    operstate = NET_DIR / interface / "operstate"
    try:
        with open(operstate, encoding="ascii", errors="replace") as fp:
            status = fp.readline(4)
    except OSError:
        warn("fopen '%s':", str(operstate))
        return None
    if status != "up\n":
        return None

    try:
        with open(WIRELESS, encoding="utf-8", errors="replace") as fp:
            lines = [fp.readline() for _ in range(3)]
    except OSError:
        warn("fopen '%s':", str(WIRELESS))
        return None
    if not all(lines):
        return None

    data = lines[2]
    start = data.find(interface)
    if start < 0:
        return None
    match = _LINK_RE.match(data[start + len(interface) + 2:])
    if match is None:
        return None
    link = int(match.group(1))
    # 70 is the maximum link quality reported by the kernel
    return bprintf("%d", int(link / 70 * 100))


def wifi_essid(interface: str) -> str | None:
    """ESSID of the network a wireless interface is associated with."""
    name = interface.encode()
    if len(name) >= IFNAMSIZ:
        warn("vsnprintf: Output truncated")
        return None

    essid = array.array("B", bytes(IW_ESSID_MAX_SIZE + 1))
    address, length = essid.buffer_info()
    request = struct.pack("16sPH", name, address, length).ljust(IWREQ_SIZE, b"\0")

    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    except OSError:
        warn("socket 'AF_INET':")
        return None
    with sock:
        try:
            fcntl.ioctl(sock.fileno(), SIOCGIWESSID, request)
        except OSError:
            warn("ioctl 'SIOCGIWESSID':")
            return None

    value = essid.tobytes().split(b"\0", 1)[0]
    if not value:
        return None
    return value.decode("utf-8", errors="replace")