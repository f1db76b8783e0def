import logging
import os
from pathlib import Path
from typing import Optional

import config

logger = logging.getLogger(__name__)


def ensure_folder(p: Path) -> None:
    """Creates the folder if it does not exist."""
    p.mkdir(parents=True, exist_ok=True)


def init_paths(base_path: Path) -> None:
    """
    Initialize all global paths based on the selected base path.
    Sets up the database file and the Exports folder.
    """
    ensure_folder(base_path)
    config.BASE_FOLDER = base_path
    config.DB_FILE = base_path / "chapter_roster.db"

    config.EXPORT_FOLDER = base_path / "Exports"
    ensure_folder(config.EXPORT_FOLDER)


def _path_from_config_file(config_file: Path) -> Optional[Path]:
    if not config_file.exists():
        return None
    try:
        content = config_file.read_text(encoding="utf-8").strip()
    except OSError as e:
        logger.warning("Could not read %s: %s", config_file, e)
        return None
    return Path(content) if content else None


def resolve_data_folder() -> Path:
    """
    Picks the data folder in order of precedence:
    1. The CHAPTER_ROSTER_HOME environment variable.
    2. The path saved in the hidden config file in the user's home directory.
    3. The default folder (~/ChapterRoster).
    """
    env_path = os.environ.get(config.HOME_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()

    saved = _path_from_config_file(config.CONFIG_FILE)
    if saved is not None:
        return saved

    return config.DEFAULT_DATA_FOLDER


def load_or_setup_paths() -> Path:
    """
    Resolves the data folder, remembers it for next time and initializes
    the global paths.

    Returns:
        Path: The data folder in use.
    """
    data_path = resolve_data_folder()
    init_paths(data_path)

    if not os.environ.get(config.HOME_ENV_VAR) and not config.CONFIG_FILE.exists():
        try:
            config.CONFIG_FILE.write_text(str(data_path), encoding="utf-8")
        except OSError as e:
            # Not fatal: the default folder is picked again next time
            logger.warning("Failed to save configuration: %s", e)

    logger.info("Using data folder %s", data_path)
    return data_path
