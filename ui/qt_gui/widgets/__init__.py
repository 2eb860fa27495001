"""
Custom widgets for the WorksDesk Qt GUI.

Inline editors bound to field controllers.
"""

from ui.qt_gui.widgets.field_select import FieldSelect, DEFAULT_SELECT_WIDTH
from ui.qt_gui.widgets.field_text_panel import (
    FieldTextPanel,
    BookPanelSpec,
    BOOK_PANELS,
    build_book_panels,
)

__all__ = [
    'FieldSelect',
    'DEFAULT_SELECT_WIDTH',
    'FieldTextPanel',
    'BookPanelSpec',
    'BOOK_PANELS',
    'build_book_panels',
]
