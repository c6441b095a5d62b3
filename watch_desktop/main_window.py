"""Main PySide6 window for the balance watch desktop app."""

from typing import List, Optional

from PySide6.QtCore import Qt, QThread, Signal
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QSplitter,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from .client import WatchClient
from .config import Settings
from .dashboard import Dashboard
from .models import WatchedIdentifier
from .state import DashboardListener, DetailView, StatusMessage
from .widgets import (
    AddWatchForm,
    BalanceDetailPanel,
    NoticeBanner,
    ServerHealthPanel,
    WatchlistPanel,
)
from .workers import QtRequestRunner, qt_scheduler


class HealthCheckWorker(QThread):
    """Background worker for health checks."""

    completed = Signal(object)  # ServerHealth

    def __init__(self, client: WatchClient):
        super().__init__()
        self.client = client

    def run(self):
        health = self.client.check_health()
        self.completed.emit(health)


class MainWindow(QMainWindow, DashboardListener):
    """Main application window."""

    def __init__(self, settings: Optional[Settings] = None):
        super().__init__()
        self.settings = settings or Settings.from_env()
        self.client = WatchClient(
            base_url=self.settings.server_url,
            timeout=self.settings.request_timeout,
        )
        self.runner = QtRequestRunner(self)
        self.health_worker: Optional[HealthCheckWorker] = None

        self.setup_ui()

        self.dashboard = Dashboard(
            self.client,
            self.runner,
            qt_scheduler,
            listener=self,
            fade_delay_ms=self.settings.status_fade_ms,
            remove_refresh_policy=self.settings.remove_refresh_policy,
            validate_input=self.settings.validate_input,
        )
        self.connect_signals()
        self.check_server_health()
        self.dashboard.start()

    def setup_ui(self):
        """Initialize the UI components."""
        self.setWindowTitle("Bitcoin Balance Watch")
        self.setMinimumSize(800, 500)
        self.resize(1100, 700)

        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QHBoxLayout(central)
        main_layout.setContentsMargins(0, 0, 0, 0)

        self.main_splitter = QSplitter(Qt.Orientation.Horizontal)
        self.main_splitter.setHandleWidth(5)
        self.main_splitter.setChildrenCollapsible(False)
        main_layout.addWidget(self.main_splitter)

        # Left sidebar: list, add form, server panel
        sidebar = QWidget()
        sidebar.setMinimumWidth(260)
        sidebar_layout = QVBoxLayout(sidebar)
        sidebar_layout.setContentsMargins(12, 12, 12, 12)

        self.watchlist_panel = WatchlistPanel()
        sidebar_layout.addWidget(self.watchlist_panel, stretch=1)

        self.refresh_btn = QPushButton("Refresh Watchlist")
        sidebar_layout.addWidget(self.refresh_btn)

        self.add_form = AddWatchForm()
        sidebar_layout.addWidget(self.add_form)

        self.health_panel = ServerHealthPanel()
        sidebar_layout.addWidget(self.health_panel)
        self.main_splitter.addWidget(sidebar)

        # Right: notice banner and detail panel
        content = QWidget()
        content_layout = QVBoxLayout(content)
        content_layout.setContentsMargins(12, 12, 12, 12)
        self.notice_banner = NoticeBanner()
        content_layout.addWidget(self.notice_banner)
        self.detail_panel = BalanceDetailPanel()
        content_layout.addWidget(self.detail_panel, stretch=1)
        self.main_splitter.addWidget(content)
        self.main_splitter.setSizes([320, 780])

        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)
        self.connection_label = QLabel("Server: Checking...")
        self.entries_label = QLabel("Entries: -")
        self.timestamp_label = QLabel("Last refresh: -")
        self.status_bar.addWidget(self.connection_label)
        self.status_bar.addWidget(self.entries_label)
        self.status_bar.addPermanentWidget(self.timestamp_label)

    def connect_signals(self):
        self.watchlist_panel.entry_clicked.connect(self.dashboard.click_entry)
        self.watchlist_panel.container_clicked.connect(self.dashboard.click_container)
        self.refresh_btn.clicked.connect(self.dashboard.refresh)
        self.add_form.add_requested.connect(self.on_add_requested)
        self.detail_panel.remove_requested.connect(self.dashboard.remove_selected)
        self.detail_panel.retry_requested.connect(self.dashboard.retry_detail)
        self.health_panel.test_requested.connect(self.check_server_health)

    def check_server_health(self):
        """Check if the backend server is reachable."""
        if self.health_worker is not None and self.health_worker.isRunning():
            return

        self.health_panel.set_checking()
        self.health_worker = HealthCheckWorker(self.client)
        self.health_worker.completed.connect(self.on_health_check_finished)
        self.health_worker.start()

    def on_health_check_finished(self, health):
        """Handle health check completion."""
        self.health_panel.update_health(health)
        self.health_panel.set_ready()

        if health.is_healthy:
            self.connection_label.setText("Server: OK")
            self.connection_label.setStyleSheet("color: green;")
        else:
            self.connection_label.setText(f"Server: {health.message[:30]}")
            self.connection_label.setStyleSheet("color: red;")
            self.notice_banner.show_server_disconnected(health.message)

    def on_add_requested(self, identifier: str, nickname: str):
        self.dashboard.add(identifier, nickname)

    # DashboardListener

    def watchlist_changed(self, watchlist: List[WatchedIdentifier]):
        state = self.dashboard.state
        self.watchlist_panel.set_entries(watchlist, state.selection.current)
        self.entries_label.setText(f"Entries: {len(watchlist)}")
        self.timestamp_label.setText(
            f"Last refresh: {state.last_refreshed:%Y-%m-%d %H:%M:%S}"
        )
        self.notice_banner.show_watchlist(len(watchlist))

    def selection_changed(self, identifier: Optional[str]):
        self.watchlist_panel.set_selected(identifier)

    def detail_changed(self, detail: DetailView):
        entry = self.dashboard.state.find(detail.identifier) if detail.identifier else None
        self.detail_panel.show_detail(detail, entry)

    def add_status_changed(self, status: StatusMessage):
        self.add_form.status.show_status(status)
        if status.success and not status.faded:
            self.add_form.reset()

    def remove_status_changed(self, status: StatusMessage):
        self.detail_panel.remove_status.show_status(status)

    def notice_raised(self, message: str):
        self.notice_banner.show_notice(message)
