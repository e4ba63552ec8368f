import pytest

from slstatus import power


@pytest.fixture
def supply(tmp_path, monkeypatch):
    monkeypatch.setattr(power, "POWER_SUPPLY_DIR", tmp_path)
    bat = tmp_path / "BAT0"
    bat.mkdir()
    return bat


def test_battery_perc(supply):
    (supply / "capacity").write_text("87\n")
    assert power.battery_perc("BAT0") == "87"


def test_battery_perc_missing(supply):
    assert power.battery_perc("BAT0") is None


def test_battery_perc_garbage(supply):
    (supply / "capacity").write_text("abc\n")
    assert power.battery_perc("BAT0") is None


@pytest.mark.parametrize(
    "state, symbol",
    [
        ("Charging", "󰚥"),
        ("Discharging", "󰚦"),
        ("Full", "󰚥"),
        ("Not charging", "󰚥"),
        ("Unknown", "?"),
    ],
)
def test_battery_state(supply, state, symbol):
    (supply / "status").write_text(state + "\n")
    assert power.battery_state("BAT0") == symbol


def test_battery_state_missing(supply):
    assert power.battery_state("BAT0") is None


def test_battery_remaining_not_discharging(supply):
    (supply / "status").write_text("Full\n")
    (supply / "charge_now").write_text("5000\n")
    assert power.battery_remaining("BAT0") == ""


def test_battery_remaining_discharging(supply):
    (supply / "status").write_text("Discharging\n")
    (supply / "charge_now").write_text("5000\n")
    (supply / "current_now").write_text("2000\n")
    assert power.battery_remaining("BAT0") == "2h 30m"


def test_battery_remaining_energy_fallback(supply):
    (supply / "status").write_text("Discharging\n")
    (supply / "energy_now").write_text("3000\n")
    (supply / "power_now").write_text("3000\n")
    assert power.battery_remaining("BAT0") == "1h 0m"


def test_battery_remaining_zero_current(supply):
    (supply / "status").write_text("Discharging\n")
    (supply / "charge_now").write_text("5000\n")
    (supply / "current_now").write_text("0\n")
    assert power.battery_remaining("BAT0") is None


def test_battery_remaining_no_charge_file(supply):
    (supply / "status").write_text("Discharging\n")
    assert power.battery_remaining("BAT0") is None


def test_temp(tmp_path):
    sensor = tmp_path / "temp"
    sensor.write_text("45000\n")
    assert power.temp(sensor) == "45"


def test_temp_missing(tmp_path):
    assert power.temp(tmp_path / "nope") is None