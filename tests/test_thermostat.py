"""
Tests for the thermostat device: transitions, modes, energy and temperature control.
"""
import pytest

from homesim.models.device import DeviceEvent, DeviceState, ThermostatMode


def power_up(thermostat):
    thermostat.process_event(DeviceEvent.POWER_ON)
    thermostat.process_event(DeviceEvent.ACTIVATE)


class TestTransitions:

    def test_defaults(self, thermostat):
        assert thermostat.current_state == DeviceState.OFF
        assert not thermostat.is_on
        assert thermostat.mode == ThermostatMode.OFF
        assert thermostat.current_temperature == 22.0
        assert thermostat.target_temperature == 22.0
        assert thermostat.energy_consumption == 0.0

    def test_power_on_then_activate_defaults_to_auto(self, thermostat):
        assert thermostat.process_event(DeviceEvent.POWER_ON)
        assert thermostat.current_state == DeviceState.STARTING
        assert thermostat.is_on
        assert thermostat.mode == ThermostatMode.OFF

        assert thermostat.process_event(DeviceEvent.ACTIVATE)
        assert thermostat.current_state == DeviceState.ON
        assert thermostat.mode == ThermostatMode.AUTO

    def test_activate_from_off_is_no_op(self, thermostat):
        assert thermostat.process_event(DeviceEvent.ACTIVATE) is False
        assert thermostat.current_state == DeviceState.OFF
        assert not thermostat.is_on

    def test_shutdown_cycle_forces_mode_off(self, thermostat):
        power_up(thermostat)
        assert thermostat.process_event(DeviceEvent.POWER_OFF)
        assert thermostat.current_state == DeviceState.STOPPING
        assert thermostat.is_on

        assert thermostat.process_event(DeviceEvent.DEACTIVATE)
        assert thermostat.current_state == DeviceState.OFF
        assert not thermostat.is_on
        assert thermostat.mode == ThermostatMode.OFF

    @pytest.mark.parametrize("enter, leave, state", [
        (DeviceEvent.ENTER_STANDBY, DeviceEvent.EXIT_STANDBY, DeviceState.STANDBY),
        (DeviceEvent.ERROR_DETECTED, DeviceEvent.ERROR_RESOLVED, DeviceState.ERROR),
        (DeviceEvent.ENTER_LOW_POWER, DeviceEvent.EXIT_LOW_POWER, DeviceState.LOW_POWER),
    ])
    def test_symmetric_pairs_from_on(self, thermostat, enter, leave, state):
        power_up(thermostat)
        thermostat.set_mode(ThermostatMode.HEAT)

        assert thermostat.process_event(enter)
        assert thermostat.current_state == state
        assert thermostat.process_event(leave)
        assert thermostat.current_state == DeviceState.ON
        # Only the STARTING -> ON edge resets the mode
        assert thermostat.mode == ThermostatMode.HEAT

    def test_reset_goes_back_to_off(self, thermostat):
        power_up(thermostat)
        thermostat.reset()
        assert thermostat.current_state == DeviceState.OFF
        assert not thermostat.is_on
        assert thermostat.energy_consumption == 0.0
        assert thermostat.mode == ThermostatMode.OFF

    def test_set_mode_after_reset_powers_on(self, thermostat):
        power_up(thermostat)
        thermostat.reset()
        thermostat.set_mode(ThermostatMode.AUTO)
        assert thermostat.current_state == DeviceState.STARTING
        assert thermostat.mode == ThermostatMode.AUTO


class TestModeAndTarget:

    def test_set_mode_powers_on(self, thermostat):
        thermostat.set_mode(ThermostatMode.HEAT)
        assert thermostat.mode == ThermostatMode.HEAT
        assert thermostat.current_state == DeviceState.STARTING

    def test_startup_path_overrides_requested_mode(self, thermostat):
        thermostat.set_mode(ThermostatMode.COOL)
        thermostat.process_event(DeviceEvent.ACTIVATE)
        assert thermostat.mode == ThermostatMode.AUTO

    def test_set_mode_off_powers_down(self, thermostat):
        power_up(thermostat)
        thermostat.set_mode(ThermostatMode.OFF)
        assert thermostat.mode == ThermostatMode.OFF
        assert thermostat.current_state == DeviceState.STOPPING

    def test_set_same_mode_does_nothing(self, thermostat):
        thermostat.set_mode(ThermostatMode.OFF)
        assert thermostat.current_state == DeviceState.OFF

    def test_switching_between_active_modes_keeps_state(self, thermostat):
        power_up(thermostat)
        thermostat.set_mode(ThermostatMode.FAN_ONLY)
        assert thermostat.current_state == DeviceState.ON
        assert thermostat.mode == ThermostatMode.FAN_ONLY

    def test_target_temperature_while_off(self, thermostat):
        thermostat.set_target_temperature(25)
        assert thermostat.target_temperature == 25.0
        assert thermostat.current_state == DeviceState.OFF

    def test_target_temperature_while_on_is_a_no_op_event(self, thermostat):
        power_up(thermostat)
        thermostat.set_target_temperature(19.5)
        assert thermostat.target_temperature == 19.5
        assert thermostat.current_state == DeviceState.ON
        assert not thermostat.fsm.has_transition(DeviceState.ON, DeviceEvent.TEMPERATURE_CHANGE)


class TestEnergy:

    def test_off_is_always_zero(self, thermostat):
        for mode in ThermostatMode:
            thermostat.mode = mode
            thermostat.target_temperature = 30.0
            thermostat.current_temperature = 10.0
            assert thermostat.calculate_energy_consumption() == 0.0

    def test_auto_within_deadband_is_baseline(self, thermostat):
        power_up(thermostat)
        thermostat.set_target_temperature(22.5)
        assert thermostat.calculate_energy_consumption() == pytest.approx(0.1)
        thermostat.set_target_temperature(21.6)
        assert thermostat.calculate_energy_consumption() == pytest.approx(0.1)

    def test_auto_outside_deadband(self, thermostat):
        power_up(thermostat)
        thermostat.set_target_temperature(25.0)
        assert thermostat.calculate_energy_consumption() == pytest.approx(0.1 + 3.0 * 0.25)
        assert thermostat.energy_consumption == pytest.approx(0.85)

    def test_heat(self, thermostat):
        power_up(thermostat)
        thermostat.set_mode(ThermostatMode.HEAT)
        thermostat.set_target_temperature(25.0)
        assert thermostat.calculate_energy_consumption() == pytest.approx(0.1 + 3.0 * 0.2)
        thermostat.set_target_temperature(20.0)
        assert thermostat.calculate_energy_consumption() == pytest.approx(0.1)

    def test_cool(self, thermostat):
        power_up(thermostat)
        thermostat.set_mode(ThermostatMode.COOL)
        thermostat.set_target_temperature(20.0)
        assert thermostat.calculate_energy_consumption() == pytest.approx(0.1 + 2.0 * 0.3)
        thermostat.set_target_temperature(24.0)
        assert thermostat.calculate_energy_consumption() == pytest.approx(0.1)

    def test_fan_only(self, thermostat):
        power_up(thermostat)
        thermostat.set_mode(ThermostatMode.FAN_ONLY)
        assert thermostat.calculate_energy_consumption() == pytest.approx(0.2)

    def test_switching_active_modes_refreshes_energy(self, thermostat):
        power_up(thermostat)
        thermostat.set_target_temperature(26.0)
        assert thermostat.energy_consumption == pytest.approx(0.1 + 4.0 * 0.25)

        thermostat.set_mode(ThermostatMode.FAN_ONLY)

        assert thermostat.current_state == DeviceState.ON
        assert thermostat.energy_consumption == pytest.approx(0.2)

    def test_mode_off_while_stopping(self, thermostat):
        power_up(thermostat)
        thermostat.set_mode(ThermostatMode.OFF)
        assert thermostat.is_on
        assert thermostat.energy_consumption == 0.0


class TestTemperatureControl:

    def test_heat_steps_and_clamps(self, thermostat):
        power_up(thermostat)
        thermostat.set_mode(ThermostatMode.HEAT)
        thermostat.set_target_temperature(23.2)

        thermostat.tick()
        assert thermostat.current_temperature == pytest.approx(22.5)
        thermostat.tick()
        assert thermostat.current_temperature == pytest.approx(23.0)
        thermostat.tick()
        assert thermostat.current_temperature == pytest.approx(23.2)
        thermostat.tick()
        assert thermostat.current_temperature == pytest.approx(23.2)

    def test_cool_clamps_to_remaining_gap(self, thermostat):
        power_up(thermostat)
        thermostat.set_mode(ThermostatMode.COOL)
        thermostat.set_target_temperature(21.8)
        thermostat.tick()
        assert thermostat.current_temperature == pytest.approx(21.8)

    def test_heat_does_not_cool(self, thermostat):
        power_up(thermostat)
        thermostat.set_mode(ThermostatMode.HEAT)
        thermostat.set_target_temperature(18.0)
        thermostat.tick()
        assert thermostat.current_temperature == pytest.approx(22.0)

    def test_auto_fixed_steps_until_deadband(self, thermostat):
        power_up(thermostat)
        thermostat.set_target_temperature(20.2)

        thermostat.tick()
        assert thermostat.current_temperature == pytest.approx(21.5)
        thermostat.tick()
        assert thermostat.current_temperature == pytest.approx(21.0)
        thermostat.tick()
        assert thermostat.current_temperature == pytest.approx(20.5)
        thermostat.tick()
        assert thermostat.current_temperature == pytest.approx(20.5)

    def test_tick_refreshes_energy(self, thermostat):
        power_up(thermostat)
        thermostat.set_target_temperature(24.0)
        assert thermostat.energy_consumption == pytest.approx(0.1 + 2.0 * 0.25)
        thermostat.tick()
        assert thermostat.energy_consumption == pytest.approx(0.1 + 1.5 * 0.25)

    def test_fan_only_holds_temperature(self, thermostat):
        power_up(thermostat)
        thermostat.set_mode(ThermostatMode.FAN_ONLY)
        thermostat.set_target_temperature(30.0)
        thermostat.tick()
        assert thermostat.current_temperature == pytest.approx(22.0)

    def test_mode_off_drifts_toward_ambient(self, thermostat):
        thermostat.adjust_temperature()
        assert thermostat.current_temperature == pytest.approx(21.8)

    def test_tick_skipped_when_off(self, thermostat):
        thermostat.mode = ThermostatMode.HEAT
        thermostat.target_temperature = 30.0
        thermostat.tick()
        assert thermostat.current_temperature == pytest.approx(22.0)


class TestReporting:

    def test_status_report(self, thermostat):
        power_up(thermostat)
        report = thermostat.get_status_report()
        assert report.splitlines() == [
            "Device: Main Thermostat (ID: T1, Type: THERMOSTAT)",
            "State: ON",
            "Power: ON",
            "Energy Consumption: 0.10 kWh",
            "Mode: AUTO",
            "Current Temperature: 22.0°C",
            "Target Temperature: 22.0°C",
        ]

    def test_snapshot(self, thermostat):
        power_up(thermostat)
        snap = thermostat.snapshot()
        assert snap.state == DeviceState.ON
        assert snap.is_on
        assert snap.properties["mode"] == "auto"
        assert snap.to_dict()["device_type"] == "thermostat"
