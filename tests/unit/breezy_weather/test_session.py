"""Unit tests for the location-permission session gate."""

import pytest

from breezy_weather.session import (
    Authorization,
    LocationPermission,
    SessionGate,
    SessionState,
    authorization_from_signal,
)


@pytest.mark.parametrize(
    ("signal", "expected"),
    [
        (LocationPermission.AUTHORIZED_ALWAYS, Authorization.AUTHORIZED),
        (LocationPermission.AUTHORIZED_WHEN_IN_USE, Authorization.AUTHORIZED),
        ("authorized_when_in_use", Authorization.AUTHORIZED),
        (" Authorized_Always ", Authorization.AUTHORIZED),
        (LocationPermission.NOT_DETERMINED, Authorization.NOT_AUTHORIZED),
        (LocationPermission.RESTRICTED, Authorization.NOT_AUTHORIZED),
        ("denied", Authorization.NOT_AUTHORIZED),
        ("provisional", Authorization.NOT_AUTHORIZED),
        ("", Authorization.NOT_AUTHORIZED),
    ],
)
def test_authorization_from_signal(signal, expected):
    """Test every permission value maps onto the two-valued authorization."""
    assert authorization_from_signal(signal) is expected


def test_gate_starts_in_permission_required():
    """Test a fresh gate asks for permission."""
    gate = SessionGate()

    assert gate.state is SessionState.PERMISSION_REQUIRED
    assert gate.authorization is Authorization.NOT_AUTHORIZED
    assert gate.user_city is None


def test_authorized_signal_makes_session_ready():
    """Test authorizing moves the gate to READY and stores the city."""
    gate = SessionGate()

    state = gate.update("authorized_when_in_use", " Tokyo ")

    assert state is SessionState.READY
    assert gate.user_city == "Tokyo"


def test_state_follows_latest_signal():
    """Test revoking permission returns to PERMISSION_REQUIRED and forgets the city."""
    gate = SessionGate()
    gate.update("authorized_always", "Tokyo")

    assert gate.update("denied", "Paris") is SessionState.PERMISSION_REQUIRED
    assert gate.user_city is None
    assert gate.update("authorized_always") is SessionState.READY


def test_blank_city_keeps_previous_user_city():
    """Test an authorized signal without a city keeps the known city."""
    gate = SessionGate()
    gate.update("authorized_always", "Tokyo")

    gate.update("authorized_always", "   ")

    assert gate.user_city == "Tokyo"
