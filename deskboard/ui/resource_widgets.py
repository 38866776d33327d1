"""Notes, tasks and quick-links cards.

Each card talks to one resource store.  A failed mutation leaves the list
as it was and is reported through ``notice`` so the window can show it.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, QUrl, pyqtSignal
from PyQt6.QtGui import QDesktopServices
from PyQt6.QtWidgets import (
    QComboBox, QFrame, QHBoxLayout, QLabel, QLineEdit,
    QListWidget, QListWidgetItem, QPushButton, QVBoxLayout, QWidget,
)

from ..client.records import LinkUpdate, NoteUpdate
from ..client.store import LinkStore, NoteStore, ResourceStore, StorageMode, TaskStore
from ..errors import DashboardError
from ..validation import PRIORITIES

logger = logging.getLogger(__name__)

_ID_ROLE = Qt.ItemDataRole.UserRole

TASK_FILTERS = ("all", "active", "completed")


class ResourceListWidget(QWidget):
    """Shared layout: title, list, input row, action buttons."""

    notice = pyqtSignal(str)

    title = ""

    def __init__(self, store: ResourceStore, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._store = store
        self._build_ui()

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        self._layout = QVBoxLayout(card)
        self._layout.setContentsMargins(20, 16, 20, 16)
        self._layout.setSpacing(8)

        header = QHBoxLayout()
        title = QLabel(self.title, card)
        title.setObjectName("cardTitle")
        self._mode_label = QLabel(card)
        self._mode_label.setObjectName("mutedLabel")
        header.addWidget(title)
        header.addStretch()
        header.addWidget(self._mode_label)
        self._layout.addLayout(header)

        self._list = QListWidget(card)
        self._layout.addWidget(self._list)

        self._inputs = QHBoxLayout()
        self._build_inputs(card, self._inputs)
        self._layout.addLayout(self._inputs)

        self._buttons = QHBoxLayout()
        add_btn = QPushButton("Add", card)
        add_btn.setObjectName("primaryButton")
        add_btn.clicked.connect(self.add_from_inputs)
        delete_btn = QPushButton("Delete", card)
        delete_btn.clicked.connect(self.delete_selected)
        self._buttons.addWidget(add_btn)
        self._build_extra_buttons(card, self._buttons)
        self._buttons.addStretch()
        self._buttons.addWidget(delete_btn)
        self._layout.addLayout(self._buttons)

    def _build_inputs(self, parent: QWidget, row: QHBoxLayout) -> None:
        raise NotImplementedError

    def _build_extra_buttons(self, parent: QWidget, row: QHBoxLayout) -> None:
        pass

    # ── data ──────────────────────────────────────────────────────────────

    def load(self) -> None:
        self._store.load()
        if self._store.mode == StorageMode.LOCAL:
            self.notice.emit(f"{self.title}: server unreachable, saving on this device")
        self.refresh()

    def refresh(self) -> None:
        mode = self._store.mode
        self._mode_label.setText(mode.value if mode else "")
        self._list.clear()
        for record in self._visible_records():
            item = QListWidgetItem(self._describe(record))
            item.setData(_ID_ROLE, record.id)
            self._decorate(item, record)
            self._list.addItem(item)

    def _visible_records(self) -> list:
        return self._store.records

    def _describe(self, record) -> str:
        return record.title

    def _decorate(self, item: QListWidgetItem, record) -> None:
        pass

    def selected_id(self):
        item = self._list.currentItem()
        return item.data(_ID_ROLE) if item is not None else None

    def _run(self, action: str, operation, *args) -> bool:
        """Call a store operation; report failures instead of raising."""
        try:
            operation(*args)
        except DashboardError as exc:
            logger.warning("Could not %s %s: %s", action, self._store.resource, exc)
            self.notice.emit(f"Could not {action} {self._store.resource.lower()}: {exc.message}")
            return False
        self.refresh()
        return True

    def add_from_inputs(self) -> bool:
        raise NotImplementedError

    def delete_selected(self) -> bool:
        record_id = self.selected_id()
        if record_id is None:
            return False
        return self._run("delete", self._store.delete, record_id)

    @property
    def item_texts(self) -> list[str]:
        return [self._list.item(i).text() for i in range(self._list.count())]


class NotesWidget(ResourceListWidget):
    title = "Notes"

    def _build_inputs(self, parent: QWidget, row: QHBoxLayout) -> None:
        self.title_input = QLineEdit(parent)
        self.title_input.setPlaceholderText("Title")
        self.content_input = QLineEdit(parent)
        self.content_input.setPlaceholderText("Note")
        row.addWidget(self.title_input, 1)
        row.addWidget(self.content_input, 2)

    def _build_extra_buttons(self, parent: QWidget, row: QHBoxLayout) -> None:
        save_btn = QPushButton("Save edit", parent)
        save_btn.clicked.connect(self.update_selected)
        row.addWidget(save_btn)
        self._list.currentItemChanged.connect(self._load_selected)

    def _describe(self, note) -> str:
        return f"{note.title}: {note.content or ''}"

    def _load_selected(self, current, _previous) -> None:
        if current is None:
            return
        note = self._store.get(current.data(_ID_ROLE))
        self.title_input.setText(note.title)
        self.content_input.setText(note.content or "")

    def add_from_inputs(self) -> bool:
        store: NoteStore = self._store
        if self._run("add", store.create, self.title_input.text(), self.content_input.text()):
            self.title_input.clear()
            self.content_input.clear()
            return True
        return False

    def update_selected(self) -> bool:
        record_id = self.selected_id()
        if record_id is None:
            return False
        changes = NoteUpdate(title=self.title_input.text(), content=self.content_input.text())
        return self._run("update", self._store.update, record_id, changes)


class TasksWidget(ResourceListWidget):
    title = "Tasks"

    def _build_inputs(self, parent: QWidget, row: QHBoxLayout) -> None:
        self.title_input = QLineEdit(parent)
        self.title_input.setPlaceholderText("What needs doing?")
        self.priority_combo = QComboBox(parent)
        self.priority_combo.addItems(PRIORITIES)
        self.priority_combo.setCurrentText("medium")
        self.due_input = QLineEdit(parent)
        self.due_input.setPlaceholderText("Due (YYYY-MM-DD)")
        row.addWidget(self.title_input, 2)
        row.addWidget(self.priority_combo)
        row.addWidget(self.due_input, 1)

    def _build_extra_buttons(self, parent: QWidget, row: QHBoxLayout) -> None:
        toggle_btn = QPushButton("Done / undo", parent)
        toggle_btn.clicked.connect(self.toggle_selected)
        row.addWidget(toggle_btn)
        self.filter_combo = QComboBox(parent)
        self.filter_combo.addItems(TASK_FILTERS)
        self.filter_combo.currentTextChanged.connect(lambda _text: self.refresh())
        row.addWidget(self.filter_combo)
        self._list.itemDoubleClicked.connect(lambda _item: self.toggle_selected())

    def _visible_records(self) -> list:
        status = self.filter_combo.currentText()
        tasks = self._store.records
        if status == "active":
            return [t for t in tasks if not t.completed]
        if status == "completed":
            return [t for t in tasks if t.completed]
        return tasks

    def _describe(self, task) -> str:
        mark = "✓" if task.completed else "○"
        due = f"  (due {task.due_date})" if task.due_date else ""
        return f"{mark} [{task.priority}] {task.title}{due}"

    def _decorate(self, item: QListWidgetItem, task) -> None:
        font = item.font()
        font.setStrikeOut(task.completed)
        item.setFont(font)

    def add_from_inputs(self) -> bool:
        store: TaskStore = self._store
        due = self.due_input.text().strip() or None
        if self._run("add", store.create, self.title_input.text(),
                     self.priority_combo.currentText(), due):
            self.title_input.clear()
            self.due_input.clear()
            return True
        return False

    def toggle_selected(self) -> bool:
        record_id = self.selected_id()
        if record_id is None:
            return False
        store: TaskStore = self._store
        return self._run("update", store.toggle, record_id)


class QuickLinksWidget(ResourceListWidget):
    title = "Quick Links"

    def _build_inputs(self, parent: QWidget, row: QHBoxLayout) -> None:
        self.icon_input = QLineEdit(parent)
        self.icon_input.setPlaceholderText("🔗")
        self.icon_input.setMaximumWidth(48)
        self.title_input = QLineEdit(parent)
        self.title_input.setPlaceholderText("e.g., GitHub")
        self.url_input = QLineEdit(parent)
        self.url_input.setPlaceholderText("github.com")
        row.addWidget(self.icon_input)
        row.addWidget(self.title_input, 1)
        row.addWidget(self.url_input, 2)

    def _build_extra_buttons(self, parent: QWidget, row: QHBoxLayout) -> None:
        save_btn = QPushButton("Save edit", parent)
        save_btn.clicked.connect(self.update_selected)
        up_btn = QPushButton("Move up", parent)
        up_btn.clicked.connect(self.move_selected_up)
        row.addWidget(save_btn)
        row.addWidget(up_btn)
        self._list.itemDoubleClicked.connect(self._open_link)

    def _describe(self, link) -> str:
        return f"{link.icon or ''} {link.title}".strip()

    def _decorate(self, item: QListWidgetItem, link) -> None:
        item.setToolTip(link.url)

    def _open_link(self, item: QListWidgetItem) -> None:
        link = self._store.get(item.data(_ID_ROLE))
        QDesktopServices.openUrl(QUrl(link.url))

    def add_from_inputs(self) -> bool:
        store: LinkStore = self._store
        icon = self.icon_input.text().strip() or None
        if self._run("add", store.create, self.title_input.text(), self.url_input.text(), icon):
            for field in (self.icon_input, self.title_input, self.url_input):
                field.clear()
            return True
        return False

    def update_selected(self) -> bool:
        record_id = self.selected_id()
        if record_id is None:
            return False
        changes = LinkUpdate(title=self.title_input.text(), url=self.url_input.text())
        icon = self.icon_input.text().strip()
        if icon:
            changes.icon = icon
        return self._run("update", self._store.update, record_id, changes)

    def move_selected_up(self) -> bool:
        row = self._list.currentRow()
        if row <= 0:
            return False
        ids = [link.id for link in self._store.records]
        ids[row - 1], ids[row] = ids[row], ids[row - 1]
        store: LinkStore = self._store
        if self._run("reorder", store.reorder, ids):
            self._list.setCurrentRow(row - 1)
            return True
        return False
