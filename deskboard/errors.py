"""Error taxonomy shared by the API server and the desktop client."""

from __future__ import annotations


class DashboardError(Exception):
    """Base class.  ``status_code`` is the HTTP status the API responds with."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(DashboardError):
    """A required field is missing or a value is malformed."""

    status_code = 400


class NotFoundError(DashboardError):
    """The referenced id does not exist."""

    status_code = 404

    def __init__(self, resource: str) -> None:
        super().__init__(f"{resource} not found")
        self.resource = resource


class PersistenceError(DashboardError):
    """Storage failed for a reason other than validation or a missing id.

    Raised by the server for database failures and by the client for
    unreachable servers, non-2xx responses and malformed payloads.
    """

    status_code = 500


class WeatherError(DashboardError):
    """The weather service could not be reached or returned garbage."""

    status_code = 502
