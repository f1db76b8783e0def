import base64
import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6 import QtCore, QtGui, QtWidgets  # noqa: E402

from ai_module.summary import ChapterAI  # noqa: E402
from models.member import Member  # noqa: E402
from models.settings import ChapterSettings  # noqa: E402
from ui.dashboards.chapter_dashboard import ChapterDashboard, avatar_pixmap  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])


@pytest.fixture
def dashboard(qapp, registry):
    registry.add({"first_name": "Jane", "last_name": "Doe"})
    registry.add({"first_name": "Max", "last_name": "Power"})
    dash = ChapterDashboard(registry, ChapterSettings(), ai=ChapterAI(client=object()))
    yield dash
    dash.close()


def _png_data_uri():
    image = QtGui.QImage(10, 10, QtGui.QImage.Format_ARGB32)
    image.fill(QtGui.QColor("red"))
    buf = QtCore.QBuffer()
    buf.open(QtCore.QIODevice.WriteOnly)
    image.save(buf, "PNG")
    return "data:image/png;base64," + base64.b64encode(bytes(buf.data())).decode("ascii")


def _member(photo=None):
    return Member(id="1", first_name="Jane", last_name="Doe",
                  join_date="2024-01-01T00:00:00", photo=photo)


def test_avatar_without_photo_is_initials_badge(qapp):
    pm = avatar_pixmap(_member(), 28, "#f97316")

    assert pm.width() == 28 and pm.height() == 28
    # Corners sit outside the round badge
    assert pm.toImage().pixelColor(0, 0).alpha() == 0


def test_avatar_uses_photo_when_present(qapp):
    pm = avatar_pixmap(_member(_png_data_uri()), 28, "#f97316")

    assert pm.width() == 28
    assert pm.toImage().pixelColor(0, 0).red() == 255


def test_member_table_shows_avatars(dashboard):
    assert dashboard.mem_table.rowCount() == 2
    assert not dashboard.mem_table.item(0, 1).icon().isNull()


def test_attendance_button_toggles_and_keeps_grid(dashboard, registry):
    year = dashboard.attendance_year
    member_id = registry.list()[0].id
    button = dashboard.att_table.cellWidget(0, 4)

    button.click()
    dashboard.refresh_all()

    assert registry.get(member_id).attendance == {year: {3: True}}
    assert dashboard.att_table.cellWidget(0, 4) is button
    assert button.isChecked()

    button.click()
    dashboard.refresh_all()

    assert registry.get(member_id).attendance == {year: {3: False}}
    assert not button.isChecked()


def test_roster_change_rebuilds_attendance_rows(dashboard, registry):
    registry.add({"first_name": "New", "last_name": "Rider"})
    dashboard.refresh_all()

    assert dashboard.att_table.rowCount() == 3
    assert dashboard.att_table.item(2, 0).text() == "New Rider"


def test_home_shows_member_total(dashboard):
    assert dashboard.total_lbl.text() == "2"
