"""Reusable custom widgets for the desktop app."""

from typing import List, Optional

from PySide6.QtCore import QPropertyAnimation, Qt, Signal
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsOpacityEffect,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from .models import IdentifierKind, ServerHealth, WatchedIdentifier
from .state import DetailState, DetailView, StatusMessage


class StatusLabel(QLabel):
    """Status text that fades to 40% opacity once the status is marked faded."""

    FADED_OPACITY = 0.4
    FADE_DURATION_MS = 400

    def __init__(self, parent=None):
        super().__init__("", parent)
        self.setWordWrap(True)
        self._effect = QGraphicsOpacityEffect(self)
        self._effect.setOpacity(1.0)
        self.setGraphicsEffect(self._effect)
        self._animation = QPropertyAnimation(self._effect, b"opacity", self)
        self._animation.setDuration(self.FADE_DURATION_MS)

    def show_status(self, status: Optional[StatusMessage]):
        """Display a status, fading it if it is marked faded."""
        if status is None:
            self.clear_status()
            return

        color = "#27ae60" if status.success else "#e74c3c"
        self.setStyleSheet(f"color: {color};")
        self.setText(status.text)

        self._animation.stop()
        if status.faded:
            self._animation.setStartValue(self._effect.opacity())
            self._animation.setEndValue(self.FADED_OPACITY)
            self._animation.start()
        else:
            self._effect.setOpacity(1.0)

    def clear_status(self):
        self._animation.stop()
        self._effect.setOpacity(1.0)
        self.setText("")


class _EntryList(QListWidget):
    """List widget that also reports clicks on empty space."""

    container_clicked = Signal()

    def mousePressEvent(self, event):
        """Handle mouse press."""
        super().mousePressEvent(event)
        if self.itemAt(event.position().toPoint()) is None:
            self.container_clicked.emit()


class WatchlistPanel(QGroupBox):
    """Selectable list of watched identifiers."""

    entry_clicked = Signal(str)
    container_clicked = Signal()

    def __init__(self, parent=None):
        super().__init__("Watchlist", parent)
        layout = QVBoxLayout(self)

        self.entry_list = _EntryList()
        self.entry_list.setAlternatingRowColors(True)
        self.entry_list.setSelectionMode(QListWidget.SelectionMode.SingleSelection)
        self.entry_list.itemClicked.connect(self._on_item_clicked)
        self.entry_list.container_clicked.connect(self.container_clicked.emit)
        layout.addWidget(self.entry_list)

        self.count_label = QLabel("")
        self.count_label.setStyleSheet("color: #666; font-style: italic;")
        layout.addWidget(self.count_label)

    def set_entries(self, watchlist: List[WatchedIdentifier], selected: Optional[str] = None):
        """Rebuild the list from scratch."""
        self.entry_list.blockSignals(True)
        self.entry_list.clear()
        for entry in watchlist:
            item = QListWidgetItem(entry.display_name)
            item.setData(Qt.ItemDataRole.UserRole, entry.identifier)
            item.setToolTip(entry.identifier)
            self.entry_list.addItem(item)
        self.entry_list.blockSignals(False)
        self.count_label.setText(f"{len(watchlist)} watched")
        self.set_selected(selected)

    def set_selected(self, identifier: Optional[str]):
        """Highlight the entry for ``identifier``, or nothing."""
        self.entry_list.blockSignals(True)
        self.entry_list.clearSelection()
        if identifier is not None:
            for row in range(self.entry_list.count()):
                item = self.entry_list.item(row)
                if item.data(Qt.ItemDataRole.UserRole) == identifier:
                    item.setSelected(True)
                    break
        self.entry_list.blockSignals(False)

    def _on_item_clicked(self, item: QListWidgetItem):
        self.entry_clicked.emit(item.data(Qt.ItemDataRole.UserRole))


class BalanceDetailPanel(QGroupBox):
    """Balance snapshot of the selected identifier."""

    remove_requested = Signal()
    retry_requested = Signal()

    def __init__(self, parent=None):
        super().__init__("Details", parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 10, 10, 10)

        self.state_label = QLabel("Select an entry to view its balance.")
        self.state_label.setWordWrap(True)
        self.state_label.setStyleSheet("color: #666;")
        layout.addWidget(self.state_label)

        # Content area (hidden until a snapshot is displayed)
        self.content = QWidget()
        self.content_layout = QGridLayout(self.content)
        self.content_layout.setColumnStretch(1, 1)

        self._labels = {}
        self._names = {}
        fields = [
            ("Address", "identifier"),
            ("Nickname", "nickname"),
            ("Balance", "balance"),
            ("Previous Balance", "previous_balance"),
            ("Change", "change"),
            ("Value", "value"),
            ("Previous Value", "previous_value"),
            ("Transactions", "tx_count"),
        ]

        for i, (label, field) in enumerate(fields):
            name_label = QLabel(f"{label}:")
            name_label.setStyleSheet("font-weight: bold;")
            value_label = QLabel("-")
            value_label.setTextInteractionFlags(
                Qt.TextInteractionFlag.TextSelectableByMouse
            )
            self._names[field] = name_label
            self._labels[field] = value_label
            self.content_layout.addWidget(name_label, i, 0)
            self.content_layout.addWidget(value_label, i, 1)

        self.content.hide()
        layout.addWidget(self.content)

        button_row = QHBoxLayout()
        self.retry_btn = QPushButton("Retry")
        self.retry_btn.clicked.connect(self.retry_requested.emit)
        self.retry_btn.hide()
        button_row.addWidget(self.retry_btn)

        self.remove_btn = QPushButton("Remove this address")
        self.remove_btn.clicked.connect(self.remove_requested.emit)
        self.remove_btn.hide()
        button_row.addWidget(self.remove_btn)
        button_row.addStretch()
        layout.addLayout(button_row)

        self.remove_status = StatusLabel()
        layout.addWidget(self.remove_status)
        layout.addStretch()

    def show_detail(self, detail: DetailView, entry: Optional[WatchedIdentifier] = None):
        """Render the detail view for its current state."""
        self.retry_btn.hide()

        if detail.state == DetailState.IDLE:
            self.clear()
            return

        kind = entry.kind if entry else IdentifierKind.detect(detail.identifier)
        self.remove_btn.setText(f"Remove this {kind.value}")
        self.remove_btn.show()

        if detail.state == DetailState.LOADING:
            self.state_label.setStyleSheet("color: #666;")
            self.state_label.setText(f"Loading balance for {detail.identifier}...")
            self.content.hide()
        elif detail.state == DetailState.ERROR:
            self.state_label.setStyleSheet("color: #e74c3c;")
            self.state_label.setText(f"Error: {detail.error}")
            self.content.hide()
            self.retry_btn.show()
        else:
            snapshot = detail.snapshot
            self.state_label.setText("")
            self._names["identifier"].setText(f"{snapshot.kind.display_name}:")
            self._labels["identifier"].setText(snapshot.identifier)
            self._labels["nickname"].setText(entry.nickname if entry else "-")
            self._labels["balance"].setText(snapshot.balance_text)
            self._labels["previous_balance"].setText(snapshot.previous_balance_text)
            self._labels["change"].setText(f"{snapshot.balance_change_sat:+d} satoshis")
            self._labels["value"].setText(snapshot.value_text)
            self._labels["previous_value"].setText(snapshot.previous_value_text)
            self._labels["tx_count"].setText(str(snapshot.tx_count))
            self.content.show()

    def clear(self):
        """Clear the displayed details."""
        self.state_label.setStyleSheet("color: #666;")
        self.state_label.setText("Select an entry to view its balance.")
        for label in self._labels.values():
            label.setText("-")
        self.content.hide()
        self.remove_btn.hide()
        self.retry_btn.hide()


class AddWatchForm(QGroupBox):
    """Form for adding an identifier to the watchlist."""

    add_requested = Signal(str, str)

    def __init__(self, parent=None):
        super().__init__("Add Identifier", parent)
        layout = QVBoxLayout(self)

        self.identifier_edit = QLineEdit()
        self.identifier_edit.setPlaceholderText("Address or xpub/ypub/zpub")
        self.identifier_edit.textChanged.connect(self._on_identifier_changed)
        layout.addWidget(self.identifier_edit)

        self.kind_label = QLabel("")
        self.kind_label.setStyleSheet("color: #999; font-size: 10px;")
        layout.addWidget(self.kind_label)

        self.nickname_edit = QLineEdit()
        self.nickname_edit.setPlaceholderText("Nickname")
        self.nickname_edit.returnPressed.connect(self._on_add_clicked)
        layout.addWidget(self.nickname_edit)

        self.add_btn = QPushButton("Add")
        self.add_btn.clicked.connect(self._on_add_clicked)
        layout.addWidget(self.add_btn)

        self.status = StatusLabel()
        layout.addWidget(self.status)

    def _on_identifier_changed(self, text: str):
        text = text.strip()
        if not text:
            self.kind_label.setText("")
            return
        self.kind_label.setText(f"Detected: {IdentifierKind.detect(text).value}")

    def _on_add_clicked(self):
        self.add_requested.emit(self.identifier_edit.text(), self.nickname_edit.text())

    def reset(self):
        """Clear the input fields."""
        self.identifier_edit.clear()
        self.nickname_edit.clear()


class ServerHealthPanel(QGroupBox):
    """Panel showing server health status with test button."""

    test_requested = Signal()

    def __init__(self, parent=None):
        super().__init__("Server Connection", parent)
        layout = QVBoxLayout(self)

        # Status indicator
        status_row = QHBoxLayout()
        self.status_icon = QLabel("●")
        self.status_icon.setStyleSheet("color: gray; font-size: 16px;")
        status_row.addWidget(self.status_icon)

        self.status_text = QLabel("Not checked")
        status_row.addWidget(self.status_text)
        status_row.addStretch()
        layout.addLayout(status_row)

        self.url_label = QLabel("URL: -")
        self.url_label.setStyleSheet("color: #666; font-size: 10px;")
        layout.addWidget(self.url_label)

        self.message_label = QLabel("")
        self.message_label.setWordWrap(True)
        self.message_label.setStyleSheet("font-size: 10px;")
        layout.addWidget(self.message_label)

        self.test_btn = QPushButton("Test Connection")
        self.test_btn.clicked.connect(self.test_requested.emit)
        layout.addWidget(self.test_btn)

    def update_health(self, health: ServerHealth):
        """Update the panel with health check results."""
        self.url_label.setText(f"URL: {health.base_url} ({health.response_time_ms:.0f}ms)")
        color = "#27ae60" if health.is_healthy else "#e74c3c"
        self.status_icon.setStyleSheet(f"color: {color}; font-size: 16px;")
        self.status_text.setText("Connected" if health.is_healthy else "Disconnected")
        self.status_text.setStyleSheet(f"color: {color};")
        self.message_label.setText(health.message)
        self.message_label.setStyleSheet(f"color: {color}; font-size: 10px;")

    def set_checking(self):
        """Show checking state."""
        self.status_icon.setStyleSheet("color: #f39c12; font-size: 16px;")
        self.status_text.setText("Checking...")
        self.status_text.setStyleSheet("color: #f39c12;")
        self.test_btn.setEnabled(False)

    def set_ready(self):
        """Re-enable the test button."""
        self.test_btn.setEnabled(True)


class NoticeBanner(QFrame):
    """Banner showing one-line explanation of current application state."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setFrameStyle(QFrame.Shape.Box | QFrame.Shadow.Plain)
        self.setMinimumHeight(40)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(15, 8, 15, 8)

        self.icon_label = QLabel("ℹ")
        layout.addWidget(self.icon_label)

        self.message_label = QLabel("Loading watchlist...")
        self.message_label.setWordWrap(True)
        layout.addWidget(self.message_label, stretch=1)

        self._set_style("info")

    def _set_style(self, style: str):
        """Set the banner style (info, warning, error, success)."""
        styles = {
            "info": ("#3498db", "#ebf5fb", "ℹ"),
            "warning": ("#f39c12", "#fef9e7", "⚠"),
            "error": ("#e74c3c", "#fdedec", "✗"),
            "success": ("#27ae60", "#eafaf1", "✓"),
        }
        color, bg_color, icon = styles.get(style, styles["info"])

        self.setStyleSheet(
            f"background-color: {bg_color}; "
            f"border: 1px solid {color}; "
            f"border-radius: 4px;"
        )
        self.icon_label.setStyleSheet(f"font-size: 16px; color: {color};")
        self.icon_label.setText(icon)
        self.message_label.setStyleSheet(f"color: {color};")

    def show_watchlist(self, count: int):
        if count == 0:
            self._set_style("info")
            self.message_label.setText("Nothing watched yet. Add an address or pubkey.")
        else:
            self._set_style("success")
            self.message_label.setText(f"Watching {count} identifier(s).")

    def show_notice(self, message: str):
        """Non-blocking warning; the current list stays on screen."""
        self._set_style("warning")
        self.message_label.setText(message)

    def show_server_disconnected(self, message: str = ""):
        self._set_style("error")
        msg = "Server disconnected"
        if message:
            msg += f": {message}"
        self.message_label.setText(msg)
