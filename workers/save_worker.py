from typing import List

from PySide6 import QtCore

from models.member import Member
from models.settings import ChapterSettings
from services.storage_service import save_members, save_settings


class WorkerSignals(QtCore.QObject):
    """
    Signals emitted by the storage workers.

    Attributes:
        finished (bool): Emitted with True if the write went through.
        error (str): Failure message from the storage layer.
    """
    finished = QtCore.Signal(bool)
    error = QtCore.Signal(str)


class SaveMembersWorker(QtCore.QRunnable):
    """
    Background worker that mirrors a roster snapshot to local storage.
    Fire-and-forget: a failed save is reported but never retried.
    """
    def __init__(self, members: List[Member]):
        super().__init__()
        self.members = members
        self.signals = WorkerSignals()

    @QtCore.Slot()
    def run(self) -> None:
        try:
            self.signals.finished.emit(save_members(self.members))
        except Exception as e:
            self.signals.error.emit(str(e))


class SaveSettingsWorker(QtCore.QRunnable):
    """Background worker that writes the chapter settings."""
    def __init__(self, settings: ChapterSettings):
        super().__init__()
        self.settings = settings
        self.signals = WorkerSignals()

    @QtCore.Slot()
    def run(self) -> None:
        try:
            self.signals.finished.emit(save_settings(self.settings))
        except Exception as e:
            self.signals.error.emit(str(e))
