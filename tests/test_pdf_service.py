import datetime

import pytest
from PyPDF2 import PdfReader

from core.errors import ExternalServiceError
from models.member import Member
from services.pdf_service import export_roster_pdf, roster_filename, roster_rows


def _member(**kw):
    base = dict(id="x", first_name="Jane", last_name="Doe", join_date="2024-01-01T00:00:00")
    base.update(kw)
    return Member(**base)


def test_roster_filename_replaces_whitespace():
    assert roster_filename("North Coast MC") == "North_Coast_MC_Members.pdf"
    assert roster_filename("Iron  Horse\tRiders") == "Iron_Horse_Riders_Members.pdf"
    assert roster_filename("Solo") == "Solo_Members.pdf"


def test_rows_use_dash_for_missing_values():
    rows = roster_rows([_member()])
    assert rows == [["-", "Jane Doe", "-", "-", "-", "-"]]


def test_rows_quote_road_name_and_join_location():
    m = _member(membership_no="7", road_name="Ghost", email="jane@example.com",
                phone="555-0100", city="Austin", state="TX")
    assert roster_rows([m]) == [["7", "Jane Doe", '"Ghost"', "jane@example.com", "555-0100", "Austin, TX"]]


def test_location_needs_a_city():
    assert roster_rows([_member(state="TX")])[0][5] == "-"


def test_rows_keep_roster_order():
    members = [_member(id=str(i), first_name=n) for i, n in enumerate(["Zed", "Amy", "Bob"])]
    assert [r[1] for r in roster_rows(members)] == ["Zed Doe", "Amy Doe", "Bob Doe"]


def test_export_writes_title_block_and_rows(tmp_path):
    members = [
        _member(id="1", membership_no="101", road_name="Ghost"),
        _member(id="2", first_name="Max", last_name="Power", city="Reno", state="NV"),
    ]
    path = export_roster_pdf(
        members, "North Coast MC", tmp_path,
        generated_at=datetime.datetime(2024, 5, 4, 12, 0),
    )

    assert path == tmp_path / "North_Coast_MC_Members.pdf"
    assert path.exists()

    text = "".join(page.extract_text() or "" for page in PdfReader(str(path)).pages)
    assert "North Coast MC" in text
    assert "Generated on 2024-05-04 12:00" in text
    assert "Total Active Members: 2" in text
    assert "Jane Doe" in text
    assert "Max Power" in text
    assert "Reno, NV" in text


def test_export_creates_missing_folder(tmp_path):
    path = export_roster_pdf([_member()], "Solo", tmp_path / "nested" / "exports")
    assert path.exists()


def test_export_failure_raises_service_error(tmp_path):
    blocker = tmp_path / "not_a_folder"
    blocker.write_text("occupied")
    with pytest.raises(ExternalServiceError):
        export_roster_pdf([_member()], "Solo", blocker)
