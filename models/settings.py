from dataclasses import dataclass
from typing import Optional

import config


def clamp_logo_size(size: int) -> int:
    """Keeps the header logo within the slider bounds."""
    return max(config.LOGO_SIZE_MIN, min(config.LOGO_SIZE_MAX, int(size)))


@dataclass
class ChapterSettings:
    """
    Chapter-wide display preferences. Loaded once at startup, handed to the
    dashboard, and written back whenever the user changes one of them.
    """
    chapter_name: str = config.DEFAULT_CHAPTER_NAME
    logo: Optional[str] = None  # base64 data URI
    logo_size: int = config.LOGO_SIZE_DEFAULT
    theme_color: str = config.DEFAULT_THEME_COLOR
    theme_mode: str = config.DEFAULT_THEME_MODE

    def __post_init__(self):
        self.logo_size = clamp_logo_size(self.logo_size)
        if self.theme_color not in config.THEME_COLORS:
            self.theme_color = config.DEFAULT_THEME_COLOR
        if self.theme_mode not in config.THEME_MODES:
            self.theme_mode = config.DEFAULT_THEME_MODE

    @property
    def is_light(self) -> bool:
        return self.theme_mode == "light"

    @property
    def accent_hex(self) -> str:
        return config.THEME_COLORS[self.theme_color]
