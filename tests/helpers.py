"""Shared test helpers for Deskboard."""

import requests

from deskboard.timer.engine import PomodoroTimer


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


def finish_interval(timer: PomodoroTimer) -> None:
    """Run the current interval down to zero with a single tick."""
    if not timer.is_running:
        timer.start()
    timer._remaining = 1
    timer._on_tick()


class SwitchableSession:
    """Forwards HTTP calls to *target* while ``online``; otherwise fails
    like an unreachable server."""

    def __init__(self, target, online: bool = True):
        self._target = target
        self.online = online
        self.calls: list[tuple[str, str]] = []

    def _send(self, method: str, url: str, **kwargs):
        self.calls.append((method, url))
        if not self.online:
            raise requests.ConnectionError(f"connection refused: {url}")
        return getattr(self._target, method)(url, **kwargs)

    def get(self, url, **kwargs):
        return self._send("get", url, **kwargs)

    def post(self, url, **kwargs):
        return self._send("post", url, **kwargs)

    def put(self, url, **kwargs):
        return self._send("put", url, **kwargs)

    def patch(self, url, **kwargs):
        return self._send("patch", url, **kwargs)

    def delete(self, url, **kwargs):
        return self._send("delete", url, **kwargs)


class FakeResponse:

    def __init__(self, status_code: int = 200, payload=None, text: str | None = None):
        self.status_code = status_code
        self._payload = payload
        self._text = text

    def json(self):
        if self._text is not None:
            raise ValueError("not JSON")
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    """Returns one canned response for every call and records the calls."""

    def __init__(self, response: FakeResponse):
        self.response = response
        self.calls: list[tuple[str, str, dict]] = []

    def _record(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        return self.response

    def get(self, url, **kwargs):
        return self._record("get", url, **kwargs)

    def post(self, url, **kwargs):
        return self._record("post", url, **kwargs)

    def put(self, url, **kwargs):
        return self._record("put", url, **kwargs)

    def delete(self, url, **kwargs):
        return self._record("delete", url, **kwargs)
