import logging
import sys

import config
from ui.main_window import ChapterRosterApp

"""
Entry point for the Chapter Roster application.
Run this file to start the application.
"""


def main() -> int:
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Create the Application instance
    app = ChapterRosterApp(sys.argv)

    # Custom start method (handles data folder, DB init and state loading)
    app.start()

    # Start the event loop
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
