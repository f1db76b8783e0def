from pathlib import Path
from typing import List

from PySide6 import QtCore

from ai_module.summary import ChapterAI
from models.member import Member
from services.pdf_service import export_roster_pdf


class WorkerSignals(QtCore.QObject):
    """
    Signals shared by the export and summary workers.

    Attributes:
        finished (str): PDF path or summary text.
        error (str): Failure message.
    """
    finished = QtCore.Signal(str)
    error = QtCore.Signal(str)


class ExportWorker(QtCore.QRunnable):
    """
    Background worker that renders the roster PDF.
    Prevents the UI from freezing while the document is built.
    """
    def __init__(self, members: List[Member], chapter_name: str, folder: Path):
        super().__init__()
        self.members = members
        self.chapter_name = chapter_name
        self.folder = folder
        self.signals = WorkerSignals()

    @QtCore.Slot()
    def run(self) -> None:
        try:
            path = export_roster_pdf(self.members, self.chapter_name, self.folder)
            self.signals.finished.emit(str(path))
        except Exception as e:
            self.signals.error.emit(str(e))


class SummaryWorker(QtCore.QRunnable):
    """
    Background worker that asks the AI module for a roster summary.
    The AI module already degrades to a fallback line, so `error` only
    fires on unexpected failures.
    """
    def __init__(self, members: List[Member], ai: ChapterAI):
        super().__init__()
        self.members = members
        self.ai = ai
        self.signals = WorkerSignals()

    @QtCore.Slot()
    def run(self) -> None:
        try:
            self.signals.finished.emit(self.ai.generate_chapter_summary(self.members))
        except Exception as e:
            self.signals.error.emit(str(e))
