"""Weather card: temperature, conditions and humidity for one location."""

from __future__ import annotations

import logging

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QFrame, QLabel, QPushButton, QVBoxLayout, QWidget

from ..errors import WeatherError
from ..weather import DEFAULT_LOCATION, Location, WeatherClient, WeatherReport

logger = logging.getLogger(__name__)


class WeatherWidget(QWidget):

    notice = pyqtSignal(str)

    def __init__(
        self,
        client: WeatherClient,
        location: Location = DEFAULT_LOCATION,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._client = client
        self._location = location
        self._report: WeatherReport | None = None

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(20, 16, 20, 16)
        title = QLabel("Weather", card)
        title.setObjectName("cardTitle")
        layout.addWidget(title)
        self._summary = QLabel("Loading…", card)
        self._summary.setStyleSheet("font-size: 22px; font-weight: 600;")
        layout.addWidget(self._summary)
        self._details = QLabel(card)
        self._details.setObjectName("mutedLabel")
        layout.addWidget(self._details)
        refresh_btn = QPushButton("Refresh", card)
        refresh_btn.clicked.connect(self.refresh)
        layout.addWidget(refresh_btn)

    @property
    def report(self) -> WeatherReport | None:
        return self._report

    @property
    def summary_text(self) -> str:
        return self._summary.text()

    def refresh(self) -> None:
        try:
            report = self._client.fetch(self._location)
        except WeatherError as exc:
            logger.warning("Weather refresh failed: %s", exc)
            self._summary.setText("Unable to fetch weather data")
            self._details.setText(self._location.name)
            self.notice.emit(exc.message)
            return
        self._report = report
        self._summary.setText(f"{report.temperature}°C  {report.conditions}")
        self._details.setText(f"{report.location} · humidity {report.humidity}%")
