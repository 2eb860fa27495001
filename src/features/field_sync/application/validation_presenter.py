"""
Validation Presenter

Decides whether an outcome is a rejection and turns its issues into
user-facing messages. Views connect message_posted to whatever toast or
status-bar widget they use.
"""
from PyQt6.QtCore import QObject, pyqtSignal

from src.features.field_sync.domain.validation_outcome import ValidationOutcome
from src.utils.message import Log


LEVEL_ERROR = "error"
LEVEL_WARNING = "warning"


class ValidationPresenter(QObject):
    """
    Presents validation outcomes.

    Signals:
        message_posted(level, title, text): one per error or warning
    """

    message_posted = pyqtSignal(str, str, str)

    def present(self, outcome: ValidationOutcome) -> bool:
        """
        Post the outcome's messages.

        Returns:
            True if the outcome is a rejection (validation errors or transport
            failure), False if the update was accepted
        """
        if outcome.is_transport_error:
            for text in outcome.messages():
                self.message_posted.emit(LEVEL_ERROR, "Save Failed", text)
            return True

        for issue in outcome.errors:
            self.message_posted.emit(LEVEL_ERROR, "Validation Error", str(issue))

        for issue in outcome.warnings:
            Log.warning(f"ValidationPresenter: {issue}")
            self.message_posted.emit(LEVEL_WARNING, "Warning", str(issue))

        return not outcome.is_accepted
