import logging
from typing import List, Optional

from PySide6 import QtWidgets, QtCore

import config
from core.database import init_db
from core.errors import ValidationError
from models.member import Member
from models.settings import ChapterSettings
from services.file_manager import load_or_setup_paths
from services.member_service import MemberRegistry
from services.storage_service import load_members, load_settings
from ui.dashboards.chapter_dashboard import ChapterDashboard
from workers.save_worker import SaveMembersWorker

logger = logging.getLogger(__name__)


class ChapterRosterApp(QtWidgets.QApplication):
    """
    The main Application class that manages the application lifecycle.
    1. Sets up the data folder and database.
    2. Loads the stored roster and chapter settings.
    3. Mirrors every roster change back to storage.
    4. Launches the Dashboard.
    """
    def __init__(self, args: List[str]):
        super().__init__(args)
        self.setApplicationName(config.APP_NAME)
        self.main_window: Optional[QtWidgets.QMainWindow] = None
        self.registry: Optional[MemberRegistry] = None
        self.settings: Optional[ChapterSettings] = None

        # One writer thread so roster snapshots land in the order they were taken
        self.pool = QtCore.QThreadPool()
        self.pool.setMaxThreadCount(1)

    def start(self) -> None:
        """Initializes the environment and shows the first screen."""
        # 1. Setup File System
        load_or_setup_paths()

        # 2. Initialize Database
        init_db()

        # 3. Load State
        self.settings = load_settings()
        members = load_members()
        try:
            self.registry = MemberRegistry(members)
            persist = True
        except ValidationError as e:
            # Leave the stored roster untouched; changes this session are not saved
            QtWidgets.QMessageBox.critical(
                None, "Error", f"Stored roster is invalid, changes will not be saved: {e}"
            )
            self.registry = MemberRegistry()
            persist = False
        logger.info("Loaded %d members", len(self.registry))

        # 4. Persist on every change
        if persist:
            self.registry.subscribe(self.persist_members)

        self.main_window = ChapterDashboard(self.registry, self.settings)
        self.main_window.show()

    def persist_members(self, snapshot: List[Member]) -> None:
        """Fire-and-forget save of the roster; failures are only logged."""
        w = SaveMembersWorker(snapshot)
        w.signals.finished.connect(
            lambda ok: None if ok else logger.warning("Roster changes were not saved")
        )
        w.signals.error.connect(lambda msg: logger.error("Roster save failed: %s", msg))
        self.pool.start(w)
