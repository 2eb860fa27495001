"""
WorksDesk Qt GUI Entry Point

Launches a small desk window over the in-memory record store: inline select
editors for organizations and works, and the free-text book panels.

Environment (optionally from a .env file in the project root or the user
data directory):
    WORKSDESK_FILE_LOGGING=0     disable the rotating log file
    WORKSDESK_LATENCY_MS=400     simulated backend latency per save
"""
import os
import sys
from pathlib import Path

# Add project root to path so src is importable
sys.path.insert(0, str(Path(__file__).resolve().parent))

from dotenv import load_dotenv

from src.utils.paths import get_user_data_dir

# Highest priority last: project .env, then the user's .env
_project_env = Path(__file__).resolve().parent / ".env"
if _project_env.exists():
    load_dotenv(_project_env)
_user_env = get_user_data_dir() / ".env"
if _user_env.exists():
    load_dotenv(_user_env, override=True)

from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QGroupBox, QFormLayout, QLabel, QTabWidget, QScrollArea,
)

from src.application.settings import FieldSyncSettingsManager
from src.features.field_sync.application import (
    LEVEL_ERROR,
    OptionCache,
    RecordBinding,
    ThreadedUpdateDispatcher,
    ValidationPresenter,
)
from src.features.records.domain import Book, Organization, Work
from src.features.records.infrastructure import InMemoryRecordStore
from src.infrastructure.persistence.file import JsonPreferencesStore
from src.utils.message import Log
from src.utils.paths import get_preferences_path
from ui.qt_gui.design_system import Spacing
from ui.qt_gui.widgets.field_select import FieldSelect
from ui.qt_gui.widgets.field_text_panel import build_book_panels


def _sample_records():
    return [
        Organization(org_id=1, name="The Paris Review", status="Open", type="Journal", my_interest="High"),
        Organization(org_id=2, name="Graywolf Press", status="Closed", type="Press", my_interest="Medium"),
        Organization(org_id=3, name="Ploughshares", status="Open", type="Journal", my_interest="Low"),
        Work(work_id=7, title="Salt Year", type="novel", status="Working", quality="Good", doc_type="docx"),
        Work(work_id=8, title="Night Ferry", type="poem", status="Out", quality="Best", doc_type="docx"),
        Book(book_id=1, coll_id=1, title="Night Ferry and Other Poems", author="A. Writer"),
    ]


class DeskWindow(QMainWindow):
    """Main window: organizations, works and book matter, all edited inline."""

    def __init__(self, store: InMemoryRecordStore, settings: FieldSyncSettingsManager, parent=None):
        super().__init__(parent)
        self.setWindowTitle("WorksDesk")
        self.resize(900, 640)

        self._store = store
        self._settings = settings
        self._dispatcher = ThreadedUpdateDispatcher(self)
        self._presenter = ValidationPresenter(self)
        self._presenter.message_posted.connect(self._on_message)
        settings.settings_changed.connect(self._on_setting_changed)
        provider = store if settings.option_suggestions_enabled else None
        self._option_cache = OptionCache(provider, self)
        self._bindings = []

        tabs = QTabWidget()
        tabs.addTab(self._build_select_tab("Organizations", ("status", "type", "my_interest"), "name"), "Organizations")
        tabs.addTab(self._build_select_tab("Works", ("status", "type", "quality", "doc_type"), "title"), "Works")
        tabs.addTab(self._build_book_tab(), "Book")
        self.setCentralWidget(tabs)
        self.statusBar().showMessage("Ready")

    def _binding(self, entity) -> RecordBinding:
        binding = RecordBinding(
            entity,
            self._store,
            dispatcher=self._dispatcher,
            presenter=self._presenter,
            option_cache=self._option_cache,
            debounce_ms=self._settings.text_debounce_ms,
            parent=self,
        )
        self._bindings.append(binding)
        return binding

    def _build_select_tab(self, table: str, field_names, label_attr: str) -> QWidget:
        container = QWidget()
        layout = QFormLayout(container)
        layout.setContentsMargins(Spacing.MD, Spacing.MD, Spacing.MD, Spacing.MD)
        layout.setSpacing(Spacing.SM)

        for record in self._store.list_records(table):
            binding = self._binding(record)
            row = QWidget()
            row_layout = QHBoxLayout(row)
            row_layout.setContentsMargins(0, 0, 0, 0)
            row_layout.setSpacing(Spacing.XS)
            for field_name in field_names:
                row_layout.addWidget(FieldSelect(
                    binding.controller(field_name),
                    self._option_cache,
                    width=self._settings.select_width,
                ))
            row_layout.addStretch()
            layout.addRow(QLabel(getattr(record, label_attr)), row)

        return container

    def _build_book_tab(self) -> QWidget:
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        content = QWidget()
        layout = QVBoxLayout(content)
        layout.setSpacing(Spacing.SM)

        for book in self._store.list_records("Books"):
            group = QGroupBox(book.title)
            group_layout = QVBoxLayout(group)
            for panel in build_book_panels(self._binding(book), group).values():
                group_layout.addWidget(panel)
            layout.addWidget(group)

        layout.addStretch()
        scroll.setWidget(content)
        return scroll

    def _on_message(self, level: str, title: str, text: str) -> None:
        self.statusBar().showMessage(f"{title}: {text}", 6000 if level == LEVEL_ERROR else 4000)

    def _on_setting_changed(self, name: str) -> None:
        if name == "text_debounce_ms":
            for binding in self._bindings:
                binding.set_debounce_ms(self._settings.text_debounce_ms)
        elif name == "log_level":
            Log.set_level(self._settings.log_level)

    def closeEvent(self, event):
        for binding in self._bindings:
            binding.dispose()
        self._dispatcher.wait_all()
        self._settings.force_save()
        super().closeEvent(event)


def main() -> int:
    app = QApplication(sys.argv)
    app.setApplicationName("WorksDesk")

    settings = FieldSyncSettingsManager(JsonPreferencesStore(get_preferences_path()))
    Log.set_level(settings.log_level)

    latency_ms = int(os.environ.get("WORKSDESK_LATENCY_MS", "400"))
    store = InMemoryRecordStore(_sample_records(), latency_s=latency_ms / 1000.0)

    window = DeskWindow(store, settings)
    window.show()
    Log.info("WorksDesk: Started")
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
