"""
Field Text Panel widget.

Titled multi-line editor bound to a text-mode FieldSyncController. Every
keystroke updates the draft; the controller coalesces writes and the panel
commits immediately when it loses focus.
"""
from dataclasses import dataclass
from typing import Dict, Optional

from PyQt6.QtCore import QEvent, QObject
from PyQt6.QtGui import QTextCursor
from PyQt6.QtWidgets import QLabel, QPlainTextEdit, QVBoxLayout, QWidget

from src.features.field_sync.application.field_sync_controller import FieldSyncController
from src.features.field_sync.application.record_binding import RecordBinding
from ui.qt_gui.design_system import Colors, Spacing


@dataclass(frozen=True)
class BookPanelSpec:
    """One front/back matter panel of a book."""
    field_name: str
    title: str
    placeholder: str = ""


BOOK_PANELS = (
    BookPanelSpec("dedication", "Dedication", "For..."),
    BookPanelSpec("copyright", "Copyright", "© Publisher Name\nAll rights reserved.\n\nISBN: 000-0-0000-0000-0"),
    BookPanelSpec("acknowledgements", "Acknowledgements", "I would like to thank..."),
    BookPanelSpec("about_author", "About the Author", "The author is..."),
    BookPanelSpec("afterword", "Afterword", "In writing this book..."),
)


class FieldTextPanel(QWidget):
    """Inline free-text editor for one field of one record."""

    def __init__(self, controller: FieldSyncController, title: str, placeholder: str = "", parent=None):
        super().__init__(parent)
        self._controller = controller

        layout = QVBoxLayout(self)
        layout.setContentsMargins(Spacing.SM, Spacing.SM, Spacing.SM, Spacing.SM)
        layout.setSpacing(Spacing.XS)

        self.title_label = QLabel(title)
        self.title_label.setStyleSheet(f"font-weight: 600; color: {Colors.TEXT_PRIMARY.name()};")
        layout.addWidget(self.title_label)

        self.editor = QPlainTextEdit()
        self.editor.setPlaceholderText(placeholder)
        self.editor.setPlainText(controller.current_value or "")
        self.editor.installEventFilter(self)
        layout.addWidget(self.editor)

        self.editor.textChanged.connect(self._on_text_changed)
        controller.value_changed.connect(self._show_value)

    @property
    def controller(self) -> FieldSyncController:
        return self._controller

    def text(self) -> str:
        return self.editor.toPlainText()

    def eventFilter(self, obj: QObject, event: QEvent) -> bool:
        if obj is self.editor and event.type() == QEvent.Type.FocusOut:
            self._controller.commit_text()
        return super().eventFilter(obj, event)

    def _on_text_changed(self) -> None:
        self._controller.edit_text(self.editor.toPlainText())

    def _show_value(self, value) -> None:
        text = value or ""
        if text == self.editor.toPlainText():
            return
        self.editor.blockSignals(True)
        self.editor.setPlainText(text)
        self.editor.moveCursor(QTextCursor.MoveOperation.End)
        self.editor.blockSignals(False)


def build_book_panels(binding: RecordBinding, parent: Optional[QWidget] = None) -> Dict[str, FieldTextPanel]:
    """Create one FieldTextPanel per standard book panel, keyed by field name."""
    return {
        panel.field_name: FieldTextPanel(
            binding.controller(panel.field_name), panel.title, panel.placeholder, parent
        )
        for panel in BOOK_PANELS
    }
