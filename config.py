import os
from pathlib import Path

# Global Config (filled in by services.file_manager.init_paths)
BASE_FOLDER = None
DB_FILE = None
EXPORT_FOLDER = None
CONFIG_FILE = Path.home() / ".chapter_roster_config"

APP_NAME = "Chapter Roster"
APP_TAGLINE = "Membership & Attendance"

# Environment overrides
HOME_ENV_VAR = "CHAPTER_ROSTER_HOME"
LOG_LEVEL = os.environ.get("CHAPTER_ROSTER_LOG_LEVEL", "INFO")
DEFAULT_DATA_FOLDER = Path.home() / "ChapterRoster"

# Local storage keys (one value per key)
STORAGE_KEYS = {
    "members": "mc_members",
    "members_backup": "mc_members_backup",
    "logo": "mc_logo",
    "logo_size": "mc_logo_size",
    "name": "mc_name",
    "theme": "mc_theme",
    "mode": "mc_mode",
}

# Chapter settings defaults
DEFAULT_CHAPTER_NAME = "Chapter Name"
DEFAULT_THEME_COLOR = "orange"
DEFAULT_THEME_MODE = "dark"
THEME_MODES = ("light", "dark")

LOGO_SIZE_MIN = 32
LOGO_SIZE_MAX = 100
LOGO_SIZE_DEFAULT = 48

# Accent colours offered in Settings
THEME_COLORS = {
    "orange": "#f97316",
    "red": "#ef4444",
    "blue": "#3b82f6",
    "emerald": "#10b981",
    "purple": "#a855f7",
    "amber": "#f59e0b",
}

# AI summary
AI_MODEL = os.environ.get("CHAPTER_ROSTER_AI_MODEL", "gpt-4o-mini")
AI_FALLBACK_TEXT = "Error generating AI summary. Keep riding hard!"
AI_EMPTY_TEXT = "No member data available yet."
