"""
Field Select widget.

Editable combo box bound to a select-mode FieldSyncController. Suggestions
come from the shared OptionCache; free-form values are accepted. The widget
is disabled while a save is in flight and tinted with a color derived from
its value.
"""
from typing import Optional

from PyQt6.QtWidgets import QComboBox

from src.features.field_sync.application.field_sync_controller import FieldSyncController
from src.features.field_sync.application.option_cache import OptionCache
from ui.qt_gui.design_system import badge_style, hash_color


DEFAULT_SELECT_WIDTH = 120


class FieldSelect(QComboBox):
    """Inline select editor for one field of one record."""

    def __init__(
        self,
        controller: FieldSyncController,
        option_cache: Optional[OptionCache] = None,
        width: int = DEFAULT_SELECT_WIDTH,
        color_map: Optional[dict] = None,
        parent=None,
    ):
        super().__init__(parent)
        self._controller = controller
        self._option_cache = option_cache
        self._color_map = color_map or {}

        self.setEditable(True)
        self.setInsertPolicy(QComboBox.InsertPolicy.NoInsert)
        self.setFixedWidth(width)

        self._load_options()
        self._show_value(controller.current_value)
        self.setEnabled(controller.affordance_enabled)

        controller.value_changed.connect(self._show_value)
        controller.pending_changed.connect(self._on_pending_changed)
        self.activated.connect(self._on_activated)
        self.lineEdit().returnPressed.connect(self._on_return_pressed)
        if option_cache is not None:
            option_cache.options_changed.connect(self._on_options_changed)

    @property
    def controller(self) -> FieldSyncController:
        return self._controller

    @property
    def color_name(self) -> str:
        value = self.currentText()
        return self._color_map.get(value) or hash_color(value)

    def commit(self, text: str) -> bool:
        """Submit text as the field's new value."""
        issued = self._controller.submit_edit(text.strip())
        if not issued:
            self._show_value(self._controller.current_value)
        return issued

    def _load_options(self) -> None:
        if self._option_cache is None:
            return
        accessor = self._controller.accessor
        options = self._option_cache.options_for(accessor.kind.table, accessor.field_name)

        self.blockSignals(True)
        self.clear()
        self.addItems(options)
        self.blockSignals(False)
        self._show_value(self._controller.current_value)

    def _show_value(self, value) -> None:
        text = value or ""
        self.blockSignals(True)
        index = self.findText(text)
        if index >= 0:
            self.setCurrentIndex(index)
        else:
            self.setCurrentIndex(-1)
            self.setEditText(text)
        self.blockSignals(False)
        self.setStyleSheet(f"QComboBox {{ {badge_style(self.color_name)} }}")

    def _on_activated(self, index: int) -> None:
        self.commit(self.itemText(index))

    def _on_return_pressed(self) -> None:
        self.commit(self.currentText())

    def _on_pending_changed(self, pending: bool) -> None:
        self.setEnabled(self._controller.affordance_enabled)

    def _on_options_changed(self, table: str, column: str) -> None:
        accessor = self._controller.accessor
        if table == accessor.kind.table and column == accessor.field_name:
            self._load_options()
