"""
Tests for the command line entry point.
"""
from homesim.__main__ import main


def test_list(capsys):
    assert main(["--list"]) == 0
    out = capsys.readouterr().out
    assert "morning_routine: Morning Routine" in out
    assert "energy_saving_mode: Energy Saving Mode" in out


def test_unknown_scenario():
    assert main(["--scenario", "nope"]) == 2


def test_short_run(capsys):
    assert main(["--scenario", "morning_routine", "--duration", "5", "--start", "05:58"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Scenario: Morning Routine")
    assert "==== Simulation Completed ====" in out
    assert "Device: Bedroom Light (ID: L2, Type: LIGHT)\nState: ON" in out


def test_bad_start_time():
    assert main(["--start", "breakfast"]) == 2


def test_missing_config_file(tmp_path):
    assert main(["--config", str(tmp_path / "missing.yaml")]) == 1
