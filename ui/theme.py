from models.settings import ChapterSettings

# (background, panel, border, text, muted text)
PALETTES = {
    "dark": ("#0f172a", "#1e293b", "#334155", "#f1f5f9", "#94a3b8"),
    "light": ("#f1f5f9", "#ffffff", "#e2e8f0", "#0f172a", "#64748b"),
}


def build_stylesheet(settings: ChapterSettings) -> str:
    """Qt stylesheet for the dashboard, driven by the display mode and accent colour."""
    bg, panel, border, text, muted = PALETTES[settings.theme_mode]
    accent = settings.accent_hex
    return f"""
        QMainWindow, QWidget {{ background: {bg}; color: {text}; font-family: 'Segoe UI'; }}
        QLabel {{ background: transparent; }}
        QLabel[role="muted"] {{ color: {muted}; font-size: 11px; }}
        QLabel[role="heading"] {{ font-size: 16px; font-weight: bold; border-left: 4px solid {accent}; padding-left: 8px; }}
        QLabel[role="accent"] {{ color: {accent}; font-weight: bold; }}
        QLabel[role="stat"] {{ color: {accent}; font-size: 36px; font-weight: 900; }}
        QFrame[role="card"] {{ background: {panel}; border: 1px solid {border}; border-radius: 12px; }}
        QLineEdit, QComboBox, QSpinBox, QTextEdit {{
            padding: 6px; background: {panel}; color: {text}; border: 1px solid {border}; border-radius: 6px;
        }}
        QLineEdit:focus {{ border: 1px solid {accent}; }}
        QPushButton {{ background: {panel}; color: {text}; padding: 8px; border: 1px solid {border}; border-radius: 6px; }}
        QPushButton:hover {{ border: 1px solid {accent}; }}
        QPushButton[role="primary"] {{ background: {accent}; color: white; font-weight: bold; border: none; }}
        QPushButton[role="danger"] {{ background: #7f1d1d; color: white; font-weight: bold; border: none; }}
        QPushButton[role="month"]:checked {{ background: {accent}; color: white; font-weight: bold; border: 1px solid {accent}; }}
        QPushButton[role="nav"] {{ text-align: left; border: none; }}
        QPushButton[role="nav"]:checked {{ color: {accent}; font-weight: bold; }}
        QSlider::handle:horizontal {{ background: {accent}; width: 14px; border-radius: 7px; }}
        QProgressBar {{ background: {border}; border: none; border-radius: 4px; }}
        QProgressBar::chunk {{ background: {accent}; border-radius: 4px; }}
        QTableWidget {{ gridline-color: {border}; }}
        QHeaderView::section {{ background-color: {panel}; color: {text}; padding: 5px; border: none; }}
    """
