import datetime
import logging
from pathlib import Path
from typing import List, Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from core.errors import ExternalServiceError
from core.utils import blank_to_dash, slugify_whitespace
from models.member import Member
from services.file_manager import ensure_folder

logger = logging.getLogger(__name__)

ROSTER_COLUMNS = ["ID", "Member Name", "Road Name", "Email", "Phone", "Location"]

HEADER_FILL = colors.Color(30 / 255, 41 / 255, 59 / 255)
STRIPE_FILL = colors.Color(248 / 255, 250 / 255, 252 / 255)


def roster_filename(chapter_name: str) -> str:
    """'North Coast MC' -> 'North_Coast_MC_Members.pdf'."""
    return f"{slugify_whitespace(chapter_name)}_Members.pdf"


def roster_rows(members: Sequence[Member]) -> List[List[str]]:
    """
    Builds one table row per member, in roster order.
    Empty fields are shown as a dash; road names are quoted.
    """
    rows = []
    for m in members:
        rows.append([
            blank_to_dash(m.membership_no),
            m.full_name,
            f'"{m.road_name}"' if m.road_name else "-",
            blank_to_dash(m.email),
            blank_to_dash(m.phone),
            blank_to_dash(m.location),
        ])
    return rows


def export_roster_pdf(members: Sequence[Member], chapter_name: str, folder: Path,
                      generated_at: Optional[datetime.datetime] = None) -> Path:
    """
    Generates the printable member roster.

    Args:
        members: Roster snapshot, already in display order.
        chapter_name: Shown in the title block and used for the file name.
        folder: Where the PDF is written.
        generated_at: Timestamp printed in the title block. Defaults to now.

    Returns:
        Path: The written PDF.

    Raises:
        ExternalServiceError: If the document cannot be written.
    """
    generated_at = generated_at or datetime.datetime.now()
    save_path = Path(folder) / roster_filename(chapter_name)

    styles = getSampleStyleSheet()
    title_style = styles["Title"]
    title_style.alignment = 0  # left
    info_style = styles["Normal"]
    info_style.textColor = colors.Color(100 / 255, 100 / 255, 100 / 255)

    story = [
        Paragraph(escape(chapter_name), title_style),
        Paragraph(
            f"Official Member Roster - Generated on {generated_at.strftime('%Y-%m-%d %H:%M')}",
            info_style,
        ),
        Paragraph(f"Total Active Members: {len(members)}", info_style),
        Spacer(1, 6 * mm),
    ]

    table = Table([ROSTER_COLUMNS] + roster_rows(members), repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_FILL),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, 0), 10),
        ("FONTSIZE", (0, 1), (-1, -1), 9),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, STRIPE_FILL]),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]))
    story.append(table)

    try:
        ensure_folder(save_path.parent)
        doc = SimpleDocTemplate(
            str(save_path),
            pagesize=landscape(A4),
            leftMargin=14 * mm,
            rightMargin=14 * mm,
            topMargin=14 * mm,
            bottomMargin=14 * mm,
            title=f"{chapter_name} Members",
        )
        doc.build(story)
    except OSError as e:
        logger.error("Roster export failed: %s", e)
        raise ExternalServiceError(f"Could not write {save_path.name}: {e}") from e

    logger.info("Exported %d members to %s", len(members), save_path)
    return save_path
