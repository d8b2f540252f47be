"""Session gate driven by the device's location permission.

The raw permission status is mapped once, at ingestion, onto
:class:`Authorization`; the session state is a projection of that value.
"""

from enum import Enum

from breezy_weather.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


class LocationPermission(str, Enum):
    """Location permission values reported by the device."""

    NOT_DETERMINED = "not_determined"
    RESTRICTED = "restricted"
    DENIED = "denied"
    AUTHORIZED_ALWAYS = "authorized_always"
    AUTHORIZED_WHEN_IN_USE = "authorized_when_in_use"


class Authorization(str, Enum):
    AUTHORIZED = "authorized"
    NOT_AUTHORIZED = "not_authorized"


class SessionState(str, Enum):
    PERMISSION_REQUIRED = "permission_required"
    READY = "ready"


_AUTHORIZED_PERMISSIONS = {LocationPermission.AUTHORIZED_ALWAYS, LocationPermission.AUTHORIZED_WHEN_IN_USE}


def authorization_from_signal(signal: LocationPermission | str) -> Authorization:
    """Collapse a raw permission value into Authorization.

    Unknown values (e.g. added by a future OS release) are not authorized.
    """
    try:
        permission = LocationPermission(signal.strip().lower() if isinstance(signal, str) else signal)
    except ValueError:
        return Authorization.NOT_AUTHORIZED
    return Authorization.AUTHORIZED if permission in _AUTHORIZED_PERMISSIONS else Authorization.NOT_AUTHORIZED


class SessionGate:
    """Selects between the onboarding flow and the main flow."""

    def __init__(self):
        self._authorization = Authorization.NOT_AUTHORIZED
        self._user_city: str | None = None

    @property
    def authorization(self) -> Authorization:
        return self._authorization

    @property
    def state(self) -> SessionState:
        if self._authorization is Authorization.AUTHORIZED:
            return SessionState.READY
        return SessionState.PERMISSION_REQUIRED

    @property
    def user_city(self) -> str | None:
        """City resolved from the device location, if reported."""
        return self._user_city

    def update(self, signal: LocationPermission | str, city: str | None = None) -> SessionState:
        """Ingest a permission signal and, when authorized, the resolved city.

        Args:
            signal: Raw permission value
            city: City resolved from the device location

        Returns:
            Session state after the update
        """
        previous = self.state
        self._authorization = authorization_from_signal(signal)

        if self._authorization is Authorization.AUTHORIZED:
            if city and city.strip():
                self._user_city = city.strip()
        else:
            self._user_city = None

        if self.state is not previous:
            log_with_context(
                logger,
                "info",
                "Session state changed",
                previous_state=previous.value,
                state=self.state.value,
                event_type="session_state_changed",
            )
        return self.state
