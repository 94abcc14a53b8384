"""Shared fixtures for the panel tests."""

import pytest

from homepanel.core.catalog import Catalog
from homepanel.core.state import PanelState


@pytest.fixture
def catalog():
    """Create the default room catalog."""
    return Catalog.default()


@pytest.fixture
def state(catalog):
    """Create a fresh, fully locked panel state."""
    return PanelState(catalog)


@pytest.fixture
def check_invariants():
    """Return a checker for the locked-room and catalog-key invariants."""

    def _check(state: PanelState):
        for room in state.rooms():
            if not room.unlocked:
                assert not room.main_on, f"{room.room.value}: locked with main on"
                assert not room.any_device_on, f"{room.room.value}: locked with device on"
            assert set(room.device_on) == set(state.catalog.devices(room.room))

    return _check
