import os
import pwd
import re
import socket

import pytest

from slstatus import system
from slstatus.util import fmt_human

MEMINFO_TEXT = (
    "MemTotal:        4000 kB\n"
    "MemFree:         1000 kB\n"
    "MemAvailable:    2500 kB\n"
    "Buffers:          500 kB\n"
    "Cached:           500 kB\n"
    "SwapCached:         0 kB\n"
    "SwapTotal:       2048 kB\n"
    "SwapFree:        1024 kB\n"
)


@pytest.fixture
def meminfo(tmp_path, monkeypatch):
    path = tmp_path / "meminfo"
    path.write_text(MEMINFO_TEXT)
    monkeypatch.setattr(system, "MEMINFO", str(path))
    return path


@pytest.fixture
def stat_file(tmp_path, monkeypatch):
    path = tmp_path / "stat"
    monkeypatch.setattr(system, "PROC_STAT", str(path))
    return path


def test_cpu_freq_scales_khz(tmp_path, monkeypatch):
    path = tmp_path / "freq"
    path.write_text("1800000\n")
    monkeypatch.setattr(system, "CPU_FREQ", str(path))
    assert system.cpu_freq(None) == fmt_human(1800000 * 1000, 1000)


def test_cpu_freq_missing_file(tmp_path, monkeypatch):
    monkeypatch.setattr(system, "CPU_FREQ", str(tmp_path / "absent"))
    assert system.cpu_freq(None) is None


def test_cpu_perc_first_sample_is_none(stat_file):
    stat_file.write_text("cpu 100 0 100 800 0 0 0 0 0 0\n")
    assert system.cpu_perc(None) is None


def test_cpu_perc_between_samples(stat_file):
    stat_file.write_text("cpu 100 0 100 800 0 0 0 0 0 0\n")
    system.cpu_perc(None)
    stat_file.write_text("cpu 200 0 200 1600 0 0 0 0 0 0\n")
    assert system.cpu_perc(None) == "20"


def test_cpu_perc_unchanged_sample_is_none(stat_file):
    stat_file.write_text("cpu 100 0 100 800 0 0 0\n")
    system.cpu_perc(None)
    assert system.cpu_perc(None) is None


def test_cpu_perc_short_line(stat_file):
    stat_file.write_text("cpu 1 2 3\n")
    assert system.cpu_perc(None) is None


def test_ram_total(meminfo):
    assert system.ram_total(None) == fmt_human(4000 * 1024, 1024)


def test_ram_free_uses_available(meminfo):
    assert system.ram_free(None) == fmt_human(2500 * 1024, 1024)


def test_ram_used(meminfo):
    assert system.ram_used(None) == fmt_human((4000 - 1000 - 500 - 500) * 1024, 1024)


def test_ram_perc(meminfo):
    assert system.ram_perc(None) == "50"


def test_ram_perc_zero_total(tmp_path, monkeypatch):
    path = tmp_path / "meminfo"
    path.write_text(MEMINFO_TEXT.replace("MemTotal:        4000", "MemTotal:        0"))
    monkeypatch.setattr(system, "MEMINFO", str(path))
    assert system.ram_perc(None) is None


def test_ram_truncated_meminfo(tmp_path, monkeypatch):
    path = tmp_path / "meminfo"
    path.write_text("MemTotal:        4000 kB\nMemFree:         1000 kB\n")
    monkeypatch.setattr(system, "MEMINFO", str(path))
    assert system.ram_free(None) is None
    assert system.ram_used(None) is None
    assert system.ram_total(None) == fmt_human(4000 * 1024, 1024)


def test_swap_values(meminfo):
    assert system.swap_total(None) == fmt_human(2048 * 1024, 1024)
    assert system.swap_free(None) == fmt_human(1024 * 1024, 1024)
    assert system.swap_used(None) == fmt_human(1024 * 1024, 1024)


def test_swap_perc(meminfo):
    assert system.swap_perc(None) == "50"


def test_swap_perc_no_swap(tmp_path, monkeypatch):
    path = tmp_path / "meminfo"
    path.write_text("SwapCached: 0 kB\nSwapTotal: 0 kB\nSwapFree: 0 kB\n")
    monkeypatch.setattr(system, "MEMINFO", str(path))
    assert system.swap_perc(None) is None


def test_swap_missing_file(tmp_path, monkeypatch):
    monkeypatch.setattr(system, "MEMINFO", str(tmp_path / "absent"))
    assert system.swap_total(None) is None
    assert system.swap_used(None) is None


def test_entropy_reads_file(tmp_path, monkeypatch):
    path = tmp_path / "entropy_avail"
    path.write_text("256\n")
    monkeypatch.setattr(system, "ENTROPY_AVAIL", str(path))
    assert system.entropy(None) == "256"


def test_load_avg_format():
    result = system.load_avg(None)
    fields = result.split(" ")
    assert len(fields) == 3
    for field in fields:
        whole, _, frac = field.partition(".")
        assert whole.isdigit()
        assert len(frac) == 2
        assert frac.isdigit()


def test_uptime_format():
    result = system.uptime(None)
    match = re.fullmatch(r"(\d+)h (\d+)m", result)
    assert match
    assert int(match.group(2)) < 60


def test_kernel_release():
    assert system.kernel_release(None) == os.uname().release


def test_hostname():
    assert system.hostname(None) == socket.gethostname()


def test_ids():
    assert system.uid(None) == str(os.geteuid())
    assert system.gid(None) == str(os.getgid())


def test_username():
    assert system.username(None) == pwd.getpwuid(os.geteuid()).pw_name