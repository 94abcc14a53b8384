"""Tests for the PanelController facade and its notifications."""

from unittest.mock import MagicMock, call

import pytest

from homepanel.config import PanelConfig
from homepanel.core.actions import MSG_DEVICES_LOCKED, MSG_MAIN_INTERLOCK, MSG_MAIN_LOCKED
from homepanel.core.controller import FailureKind, PanelController
from homepanel.core.entities import DeviceKind, RoomId
from homepanel.presentation import LoggingListener


@pytest.fixture
def controller():
    """Create a controller with the default catalog."""
    return PanelController()


@pytest.fixture
def listener(controller):
    """Subscribe a mock listener to the controller."""
    mock = MagicMock()
    controller.subscribe(mock)
    return mock


class TestInstances:
    """Tests for controller construction."""

    def test_instances_are_independent(self):
        """Test two controllers never share state."""
        first = PanelController()
        second = PanelController()

        first.unlock(RoomId.STUDY, "smart")

        assert first.snapshot(RoomId.STUDY).unlocked
        assert not second.snapshot(RoomId.STUDY).unlocked

    def test_from_config(self):
        """Test a controller built from PanelConfig uses its settings."""
        config = PanelConfig(master_password="open", energy={"max_watts": 1000})
        controller = PanelController.from_config(config)

        controller.unlock(RoomId.STUDY, "open")
        controller.set_main(RoomId.STUDY, True)

        assert controller.room_reading(RoomId.STUDY).percentage == 100

    def test_start_locks_and_publishes(self, controller, listener):
        """Test start locks every room and publishes the initial state."""
        result = controller.start()

        assert result.success
        assert listener.on_room_changed.call_count == len(RoomId)
        assert listener.on_room_energy_changed.call_count == len(RoomId)
        listener.on_system_energy_changed.assert_called_once_with(0, 0)


class TestNotifications:
    """Tests for listener notifications."""

    def test_unlock_failure(self, controller, listener):
        """Test a wrong password only triggers on_unlock_failed."""
        result = controller.unlock(RoomId.STUDY, "nope")

        assert result.failure is FailureKind.AUTHENTICATION
        listener.on_unlock_failed.assert_called_once_with(RoomId.STUDY)
        listener.on_room_changed.assert_not_called()
        listener.on_system_energy_changed.assert_not_called()

    def test_master_unlock_publishes_every_room(self, controller, listener):
        """Test the master credential re-renders every room."""
        controller.unlock(RoomId.KITCHEN, "smart")

        rooms = [c.args[0] for c in listener.on_room_changed.call_args_list]
        assert rooms == list(RoomId)
        listener.on_system_energy_changed.assert_called_once_with(0, 0)

    def test_room_transition_notifies_energy(self, controller, listener):
        """Test device toggles publish room and system energy."""
        controller.unlock(RoomId.SITTING, "sit2025")
        listener.reset_mock()

        controller.set_device(RoomId.SITTING, DeviceKind.LIGHT, True)
        controller.set_device(RoomId.SITTING, "fan", True)

        listener.on_room_energy_changed.assert_has_calls(
            [call(RoomId.SITTING, 20, 1), call(RoomId.SITTING, 80, 4)]
        )
        assert listener.on_system_energy_changed.call_args == call(80, 4)
        snapshot = listener.on_room_changed.call_args.args[1]
        assert snapshot.device_on[DeviceKind.FAN]
        assert not snapshot.main_on

    def test_snapshots_are_copies(self, controller, listener):
        """Test listeners cannot mutate the live state through snapshots."""
        controller.unlock(RoomId.SITTING, "sit2025")
        snapshot = listener.on_room_changed.call_args.args[1]

        snapshot.device_on[DeviceKind.AC] = True
        snapshot.unlocked = False

        live = controller.snapshot(RoomId.SITTING)
        assert live.unlocked
        assert not live.device_on[DeviceKind.AC]

    def test_blocked_main_on_locked_room(self, controller, listener):
        """Test main on a locked room sends a notice and a re-render."""
        result = controller.set_main(RoomId.STUDY, True)

        assert not result.success
        listener.on_operation_blocked.assert_called_once_with(RoomId.STUDY, MSG_MAIN_LOCKED)
        # Re-render so the presentation reverts its switch
        room, snapshot = listener.on_room_changed.call_args.args
        assert room is RoomId.STUDY
        assert not snapshot.main_on
        listener.on_system_energy_changed.assert_not_called()

    def test_blocked_device_on_locked_room(self, controller, listener):
        """Test device toggles on a locked room send a notice."""
        controller.set_device(RoomId.DINING, DeviceKind.FAN, True)

        listener.on_operation_blocked.assert_called_once_with(RoomId.DINING, MSG_DEVICES_LOCKED)

    def test_blocked_by_interlock(self, controller, listener):
        """Test the interlock notice."""
        controller.unlock(RoomId.DINING, "din2025")
        controller.set_device(RoomId.DINING, DeviceKind.AC, True)

        result = controller.set_main(RoomId.DINING, True)

        assert result.failure is FailureKind.INTERLOCK
        listener.on_operation_blocked.assert_called_once_with(RoomId.DINING, MSG_MAIN_INTERLOCK)

    def test_quick_toggle_on_locked_room_is_silent(self, controller, listener):
        """Test the light shortcut on a locked room sends no notice."""
        result = controller.quick_toggle_light(RoomId.HALLWAY)

        assert not result.success
        listener.on_operation_blocked.assert_not_called()

    def test_security_toggle(self, controller, listener):
        """Test security toggles publish the security flag and system energy."""
        controller.set_security(True)

        listener.on_security_changed.assert_called_once_with(True)
        listener.on_system_energy_changed.assert_called_once_with(40, 2)
        listener.on_room_changed.assert_not_called()

        controller.toggle_security()
        assert not controller.status().security_on
        assert listener.on_system_energy_changed.call_args == call(0, 0)

    def test_security_independent_of_locks(self, controller):
        """Test locking rooms leaves the security light on."""
        controller.set_security(True)
        controller.lock_all()

        assert controller.status().security_on
        assert controller.system_reading().watts == 40

    def test_failing_listener_does_not_break_others(self, controller, listener):
        """Test a raising listener neither changes state nor blocks others."""
        broken = MagicMock()
        broken.on_room_changed.side_effect = RuntimeError("render failed")
        controller.unsubscribe(listener)
        controller.subscribe(broken)
        controller.subscribe(listener)

        result = controller.unlock(RoomId.STUDY, "std2025")

        assert result.success
        assert controller.snapshot(RoomId.STUDY).unlocked
        listener.on_room_changed.assert_called_once()

    def test_partial_listener(self, controller):
        """Test listeners may implement only some callbacks."""

        class EnergyOnly:
            def __init__(self):
                self.readings = []

            def on_system_energy_changed(self, watts, percentage):
                self.readings.append((watts, percentage))

        energy_only = EnergyOnly()
        controller.subscribe(energy_only)

        controller.unlock(RoomId.STUDY, "std2025")
        controller.set_main(RoomId.STUDY, True)

        assert energy_only.readings == [(0, 0), (1280, 64)]

    def test_unsubscribe(self, controller, listener):
        """Test unsubscribed listeners receive nothing."""
        controller.unsubscribe(listener)
        controller.set_security(True)

        listener.on_security_changed.assert_not_called()

    def test_logging_listener(self, controller, caplog):
        """Test LoggingListener writes notifications to the log."""
        controller.subscribe(LoggingListener())

        with caplog.at_level("INFO", logger="homepanel.presentation"):
            controller.unlock(RoomId.KITCHEN, "kit2025")
            controller.set_device(RoomId.KITCHEN, DeviceKind.LIGHT, True)
            controller.unlock(RoomId.STUDY, "bad")

        assert "[kitchen] unlocked, main=off, light=off" in caplog.text
        assert "[kitchen] 20W (1%)" in caplog.text
        assert "System total 20W (1%)" in caplog.text
        assert "[study] Incorrect password." in caplog.text


class TestStudyScenario:
    """Walk the study room through a full unlock / main / device cycle."""

    def test_scenario(self, controller):
        """Test wrong password, unlock, main on, light off and main off in the study."""
        controller.start()

        result = controller.unlock(RoomId.STUDY, "wrong")
        assert not result.success
        assert not controller.snapshot(RoomId.STUDY).unlocked
        assert not controller.snapshot(RoomId.STUDY).any_device_on

        assert controller.unlock(RoomId.STUDY, "std2025").success
        study = controller.snapshot(RoomId.STUDY)
        assert study.unlocked
        assert not study.any_device_on

        assert controller.set_main(RoomId.STUDY, True).success
        study = controller.snapshot(RoomId.STUDY)
        assert study.main_on
        assert all(study.device_on.values())
        assert controller.room_reading(RoomId.STUDY).watts == 1280

        assert controller.set_device(RoomId.STUDY, DeviceKind.LIGHT, False).success
        study = controller.snapshot(RoomId.STUDY)
        assert study.main_on
        assert controller.room_reading(RoomId.STUDY).watts == 1260

        assert controller.set_main(RoomId.STUDY, False).success
        study = controller.snapshot(RoomId.STUDY)
        assert not study.main_on
        assert not study.any_device_on
        assert controller.room_reading(RoomId.STUDY).watts == 0

    def test_lock_resets_energy(self, controller, check_invariants):
        """Test locking a busy room drops its energy to zero."""
        controller.unlock(RoomId.STUDY, "std2025")
        controller.set_main(RoomId.STUDY, True)

        controller.lock(RoomId.STUDY)

        assert controller.room_reading(RoomId.STUDY).watts == 0
        assert controller.system_reading().watts == 0
        check_invariants(controller.state)


class TestDashboard:
    """Tests for statistics and dashboard data."""

    def test_stats_and_history(self, controller):
        """Test stats count each outcome and history keeps the last actions."""
        controller.unlock(RoomId.STUDY, "bad")
        controller.unlock(RoomId.STUDY, "std2025")
        controller.set_main(RoomId.STUDY, True)
        controller.set_main(RoomId.STUDY, True)
        controller.lock(RoomId.STUDY)

        data = controller.get_dashboard_data()

        assert data["stats"] == {
            "unlocks": 1,
            "failed_unlocks": 1,
            "locks": 1,
            "transitions": 1,
            "blocked_operations": 1,
        }
        assert data["last_action"] == "lock"
        assert [h["action"] for h in data["history"]] == [
            "unlock",
            "unlock",
            "set_main",
            "set_main",
            "lock",
        ]
        assert data["history"][3]["failure"] == "interlock"
        assert data["energy"]["peak_power"] == 1280
        assert data["energy"]["power"] == 0
        assert data["energy"]["unlocked_rooms"] == 0
