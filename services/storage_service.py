import json
import logging
import sqlite3
from typing import List, Sequence

import config
from core.database import delete_value, get_value, set_value
from models.member import Member
from models.settings import ChapterSettings

logger = logging.getLogger(__name__)

KEYS = config.STORAGE_KEYS


# --- MEMBERS ---

def _backup_members(raw: str) -> None:
    """Keeps an unreadable roster under its own key so a later save cannot destroy it."""
    try:
        set_value(KEYS["members_backup"], raw)
        logger.warning("Unreadable roster copied to '%s'", KEYS["members_backup"])
    except sqlite3.Error as e:
        logger.error("Failed to back up unreadable roster: %s", e)


def load_members() -> List[Member]:
    """
    Reads the stored roster in its saved order. A record whose id was already
    seen is dropped with a warning; the first occurrence wins.

    Returns:
        List[Member]: The members, or an empty list when nothing is stored
        or the stored data cannot be decoded (the raw value is backed up).
    """
    try:
        raw = get_value(KEYS["members"])
    except sqlite3.Error as e:
        logger.error("Database error loading members: %s", e)
        return []

    if not raw:
        return []

    try:
        records = [Member.from_dict(r) for r in json.loads(raw)]
    except (ValueError, TypeError, AttributeError) as e:
        logger.error("Stored member data is corrupt, starting empty: %s", e)
        _backup_members(raw)
        return []

    members: List[Member] = []
    seen = set()
    for m in records:
        if m.id in seen:
            logger.warning("Dropping duplicate stored member id %s (%s)", m.id, m.full_name)
            continue
        seen.add(m.id)
        members.append(m)
    return members


def save_members(members: Sequence[Member]) -> bool:
    """
    Mirrors the roster to local storage. Best effort: a failed write is
    logged and reported, the in-memory roster is left as it is.

    Returns:
        bool: True if successful, False otherwise.
    """
    try:
        payload = json.dumps([m.to_dict() for m in members])
        set_value(KEYS["members"], payload)
        return True
    except (sqlite3.Error, TypeError, ValueError) as e:
        logger.error("Failed to save members: %s", e)
        return False


# --- SETTINGS ---

def load_settings() -> ChapterSettings:
    """Reads each chapter setting independently, keeping defaults for missing ones."""
    settings = ChapterSettings()
    try:
        name = get_value(KEYS["name"])
        logo = get_value(KEYS["logo"])
        size = get_value(KEYS["logo_size"])
        theme = get_value(KEYS["theme"])
        mode = get_value(KEYS["mode"])
    except sqlite3.Error as e:
        logger.error("Database error loading settings: %s", e)
        return settings

    if size:
        try:
            size_value = int(size)
        except ValueError:
            logger.warning("Ignoring invalid stored logo size %r", size)
            size_value = settings.logo_size
    else:
        size_value = settings.logo_size

    return ChapterSettings(
        chapter_name=name if name is not None else settings.chapter_name,
        logo=logo or None,
        logo_size=size_value,
        theme_color=theme or settings.theme_color,
        theme_mode=mode or settings.theme_mode,
    )


def save_settings(settings: ChapterSettings) -> bool:
    """
    Writes every chapter setting to its own key. A settings object without a
    logo removes the stored one in the same write.

    Returns:
        bool: True if successful, False otherwise.
    """
    try:
        if settings.logo:
            set_value(KEYS["logo"], settings.logo)
        else:
            delete_value(KEYS["logo"])
        set_value(KEYS["logo_size"], str(settings.logo_size))
        set_value(KEYS["name"], settings.chapter_name)
        set_value(KEYS["theme"], settings.theme_color)
        set_value(KEYS["mode"], settings.theme_mode)
        return True
    except sqlite3.Error as e:
        logger.error("Failed to save settings: %s", e)
        return False
