import datetime
import logging
from dataclasses import replace
from typing import Dict, List, Optional

from PySide6 import QtWidgets, QtCore, QtGui

import config
from ai_module.summary import ChapterAI
from core.attendance import is_attended
from core.errors import ExternalServiceError, MemberNotFoundError, ValidationError
from core.utils import MONTHS
from models.member import Member
from models.settings import ChapterSettings
from services.analytics_service import has_attendance_data, monthly_attendance_stats
from services.eligibility_service import (
    EligibleMember, eligible_for_nomination, eligible_for_voting,
    nomination_period, period_label, voting_period,
)
from services.image_service import IMAGE_FILTER, decode_data_uri, encode_image_file
from services.member_service import MemberRegistry
from ui.theme import build_stylesheet

# Workers
from workers.report_worker import ExportWorker, SummaryWorker
from workers.save_worker import SaveSettingsWorker

logger = logging.getLogger(__name__)

# Form field -> label (* = required)
FORM_FIELDS = [
    ("first_name", "First Name*"),
    ("last_name", "Last Name*"),
    ("road_name", "Road Name"),
    ("membership_no", "Membership #"),
    ("email", "Email"),
    ("phone", "Phone"),
    ("address", "Address"),
    ("city", "City"),
    ("state", "State"),
    ("zip", "Zip"),
]


def _role(widget: QtWidgets.QWidget, role: str) -> QtWidgets.QWidget:
    """Tags a widget so the theme stylesheet can target it."""
    widget.setProperty("role", role)
    return widget


def pixmap_from_data_uri(uri: Optional[str], size: int) -> Optional[QtGui.QPixmap]:
    """Decodes a stored image into a scaled pixmap, or None if it cannot be shown."""
    if not uri:
        return None
    try:
        _, data = decode_data_uri(uri)
    except ExternalServiceError as e:
        logger.warning("Cannot display stored image: %s", e)
        return None

    pm = QtGui.QPixmap()
    if not pm.loadFromData(data):
        return None
    return pm.scaled(size, size, QtCore.Qt.KeepAspectRatio, QtCore.Qt.SmoothTransformation)


def avatar_pixmap(member: Member, size: int, color: str) -> QtGui.QPixmap:
    """The member's photo, or a round badge with their initials when there is none."""
    pm = pixmap_from_data_uri(member.photo, size)
    if pm:
        return pm

    pm = QtGui.QPixmap(size, size)
    pm.fill(QtCore.Qt.transparent)
    painter = QtGui.QPainter(pm)
    painter.setRenderHint(QtGui.QPainter.Antialiasing)
    painter.setPen(QtCore.Qt.NoPen)
    painter.setBrush(QtGui.QColor(color))
    painter.drawEllipse(0, 0, size, size)

    font = painter.font()
    font.setBold(True)
    font.setPixelSize(max(8, size // 2 - 2))
    painter.setFont(font)
    painter.setPen(QtGui.QColor("white"))
    painter.drawText(pm.rect(), QtCore.Qt.AlignCenter, member.initials or "?")
    painter.end()
    return pm


class ChapterDashboard(QtWidgets.QMainWindow):
    """
    The main window of the roster application.
    Handles the Home overview, Member Management, Attendance and Settings.
    """
    def __init__(self, registry: MemberRegistry, settings: ChapterSettings,
                 ai: Optional[ChapterAI] = None):
        super().__init__()
        self.registry = registry
        self.settings = settings
        self.ai = ai or ChapterAI()

        self.setWindowTitle(f"{config.APP_NAME} - {settings.chapter_name}")
        self.resize(1200, 850)

        # ThreadPool for background tasks (Export, AI summary)
        self.pool = QtCore.QThreadPool()
        self.pool.setMaxThreadCount(2)

        # Settings snapshots are written one at a time, in the order they were taken
        self.save_pool = QtCore.QThreadPool()
        self.save_pool.setMaxThreadCount(1)

        self.editing_id: Optional[str] = None
        self.att_ids: List[str] = []
        self.current_photo: Optional[str] = None
        self.attendance_year = datetime.date.today().year

        self.init_ui()
        self.apply_style()
        self.refresh_all()

        # Refresh every page whenever the roster changes
        self.registry.subscribe(lambda _snapshot: QtCore.QTimer.singleShot(0, self.refresh_all))

    def init_ui(self) -> None:
        cw = QtWidgets.QWidget()
        self.setCentralWidget(cw)
        layout = QtWidgets.QHBoxLayout(cw)
        layout.setContentsMargins(0, 0, 0, 0)

        # --- SIDEBAR ---
        sidebar = QtWidgets.QVBoxLayout()
        sidebar.setContentsMargins(12, 12, 12, 12)

        self.logo_lbl = QtWidgets.QLabel()
        self.logo_lbl.setAlignment(QtCore.Qt.AlignCenter)
        sidebar.addWidget(self.logo_lbl, alignment=QtCore.Qt.AlignCenter)

        self.name_lbl = _role(QtWidgets.QLabel(), "accent")
        self.name_lbl.setAlignment(QtCore.Qt.AlignCenter)
        self.name_lbl.setWordWrap(True)
        self.name_lbl.setStyleSheet("font-size: 18px; text-transform: uppercase;")
        sidebar.addWidget(self.name_lbl)

        tag = _role(QtWidgets.QLabel(config.APP_TAGLINE.upper()), "muted")
        tag.setAlignment(QtCore.Qt.AlignCenter)
        sidebar.addWidget(tag)
        sidebar.addSpacing(20)

        self.b_home = QtWidgets.QPushButton("🏠 Home")
        self.b_mem = QtWidgets.QPushButton("👥 Members")
        self.b_att = QtWidgets.QPushButton("✅ Attendance")
        self.b_set = QtWidgets.QPushButton("⚙️ Settings")

        self.nav_group = QtWidgets.QButtonGroup(self)
        for b in (self.b_home, self.b_mem, self.b_att, self.b_set):
            _role(b, "nav")
            b.setCheckable(True)
            b.setMinimumHeight(40)
            b.setCursor(QtCore.Qt.PointingHandCursor)
            self.nav_group.addButton(b)
            sidebar.addWidget(b)
        self.b_home.setChecked(True)
        sidebar.addStretch()

        sw = QtWidgets.QWidget()
        sw.setLayout(sidebar)
        sw.setFixedWidth(230)
        layout.addWidget(sw)

        # --- CONTENT AREA (Stacked Widget) ---
        self.stacked = QtWidgets.QStackedWidget()
        layout.addWidget(self.stacked, 1)

        self.p_home = QtWidgets.QWidget()
        self.init_home_page()
        self.stacked.addWidget(self._scrolled(self.p_home))

        self.p_mem = QtWidgets.QWidget()
        self.init_member_page()
        self.stacked.addWidget(self._scrolled(self.p_mem))

        self.p_att = QtWidgets.QWidget()
        self.init_attendance_page()
        self.stacked.addWidget(self.p_att)

        self.p_set = QtWidgets.QWidget()
        self.init_settings_page()
        self.stacked.addWidget(self._scrolled(self.p_set))

        # Navigation Signals
        self.b_home.clicked.connect(lambda: self.stacked.setCurrentIndex(0))
        self.b_mem.clicked.connect(lambda: self.stacked.setCurrentIndex(1))
        self.b_att.clicked.connect(lambda: self.stacked.setCurrentIndex(2))
        self.b_set.clicked.connect(lambda: self.stacked.setCurrentIndex(3))

    def _scrolled(self, page: QtWidgets.QWidget) -> QtWidgets.QScrollArea:
        area = QtWidgets.QScrollArea()
        area.setWidgetResizable(True)
        area.setFrameShape(QtWidgets.QFrame.NoFrame)
        area.setWidget(page)
        return area

    def _card(self) -> QtWidgets.QFrame:
        return _role(QtWidgets.QFrame(), "card")

    # --- HOME ---
    def init_home_page(self) -> None:
        l = QtWidgets.QVBoxLayout(self.p_home)
        l.setContentsMargins(20, 20, 20, 20)
        l.setSpacing(16)

        # Quick Stats
        stat_card = self._card()
        sv = QtWidgets.QVBoxLayout(stat_card)
        self.total_lbl = _role(QtWidgets.QLabel("0"), "stat")
        self.total_lbl.setAlignment(QtCore.Qt.AlignCenter)
        sub = _role(QtWidgets.QLabel("MEMBER TOTAL"), "muted")
        sub.setAlignment(QtCore.Qt.AlignCenter)
        sv.addWidget(self.total_lbl)
        sv.addWidget(sub)
        l.addWidget(stat_card)

        # Attendance Trend
        trend_card = self._card()
        tv = QtWidgets.QVBoxLayout(trend_card)
        self.trend_title = _role(QtWidgets.QLabel(), "heading")
        tv.addWidget(self.trend_title)

        bars = QtWidgets.QHBoxLayout()
        self.trend_bars: List[QtWidgets.QProgressBar] = []
        for name in MONTHS:
            col = QtWidgets.QVBoxLayout()
            bar = QtWidgets.QProgressBar()
            bar.setOrientation(QtCore.Qt.Vertical)
            bar.setRange(0, 100)
            bar.setTextVisible(False)
            bar.setFixedSize(14, 120)
            col.addWidget(bar, alignment=QtCore.Qt.AlignHCenter)
            m_lbl = _role(QtWidgets.QLabel(name), "muted")
            col.addWidget(m_lbl, alignment=QtCore.Qt.AlignHCenter)
            bars.addLayout(col)
            self.trend_bars.append(bar)
        tv.addLayout(bars)

        self.trend_empty = _role(QtWidgets.QLabel("No attendance recorded for this year yet."), "muted")
        self.trend_empty.setAlignment(QtCore.Qt.AlignCenter)
        tv.addWidget(self.trend_empty)
        l.addWidget(trend_card)

        # Eligibility Lists
        self.nom_title, self.nom_period, self.nom_table = self._eligibility_section(l, "Eligible Nomination")
        self.vote_title, self.vote_period, self.vote_table = self._eligibility_section(l, "Eligible Vote")

        # AI Summary
        ai_card = self._card()
        av = QtWidgets.QVBoxLayout(ai_card)
        av.addWidget(_role(QtWidgets.QLabel("Chapter Summary"), "heading"))
        self.ai_txt = QtWidgets.QTextEdit()
        self.ai_txt.setReadOnly(True)
        self.ai_txt.setMaximumHeight(110)
        self.ai_txt.setPlaceholderText("Generate a short summary of the pack.")
        av.addWidget(self.ai_txt)
        self.b_ai = _role(QtWidgets.QPushButton("🤖 Generate Summary"), "primary")
        self.b_ai.clicked.connect(self.generate_summary)
        av.addWidget(self.b_ai)
        l.addWidget(ai_card)

        note = _role(QtWidgets.QLabel(
            "* Active Status: Attendance at 3+ meetings in the specific 6-month period "
            "is required for voting and nominations."
        ), "muted")
        note.setWordWrap(True)
        l.addWidget(note)
        l.addStretch()

    def _eligibility_section(self, parent: QtWidgets.QVBoxLayout, title: str):
        card = self._card()
        v = QtWidgets.QVBoxLayout(card)

        head = QtWidgets.QHBoxLayout()
        t = _role(QtWidgets.QLabel(title), "heading")
        head.addWidget(t)
        head.addStretch()
        head.addWidget(_role(QtWidgets.QLabel("3+ MEETINGS"), "accent"))
        v.addLayout(head)

        period = _role(QtWidgets.QLabel(), "muted")
        v.addWidget(period)

        table = QtWidgets.QTableWidget()
        table.setColumnCount(3)
        table.setHorizontalHeaderLabels(["Member", "Road Name", "Attended"])
        table.horizontalHeader().setSectionResizeMode(QtWidgets.QHeaderView.Stretch)
        table.verticalHeader().setVisible(False)
        table.setEditTriggers(QtWidgets.QAbstractItemView.NoEditTriggers)
        table.setSelectionMode(QtWidgets.QAbstractItemView.NoSelection)
        table.setIconSize(QtCore.QSize(28, 28))
        table.verticalHeader().setDefaultSectionSize(36)
        table.setMinimumHeight(150)
        v.addWidget(table)

        parent.addWidget(card)
        return t, period, table

    def _fill_eligibility(self, table: QtWidgets.QTableWidget, entries: List[EligibleMember]) -> None:
        table.clearSpans()
        table.setRowCount(0)
        if not entries:
            table.insertRow(0)
            item = QtWidgets.QTableWidgetItem("No members meeting threshold")
            item.setTextAlignment(QtCore.Qt.AlignCenter)
            table.setItem(0, 0, item)
            table.setSpan(0, 0, 1, 3)
            return

        for i, e in enumerate(entries):
            table.insertRow(i)
            name = QtWidgets.QTableWidgetItem(e.member.full_name)
            name.setIcon(QtGui.QIcon(avatar_pixmap(e.member, 28, self.settings.accent_hex)))
            table.setItem(i, 0, name)
            road = f'"{e.member.road_name}"' if e.member.road_name else ""
            table.setItem(i, 1, QtWidgets.QTableWidgetItem(road))
            table.setItem(i, 2, QtWidgets.QTableWidgetItem(f"{e.count} Attended"))

    def load_home(self) -> None:
        today = datetime.date.today()
        members = self.registry.list()

        self.total_lbl.setText(str(len(members)))

        self.trend_title.setText(f"Attendance Trend {today.year}")
        stats = monthly_attendance_stats(members, today.year)
        for bar, stat in zip(self.trend_bars, stats):
            bar.setValue(int(round(stat.percent)))
            bar.setToolTip(f"{stat.month}: {stat.count} attended")
        self.trend_empty.setVisible(not has_attendance_data(stats))

        self.nom_period.setText(f"Period: {period_label(nomination_period(today.year))}")
        self.vote_period.setText(f"Period: {period_label(voting_period(today.year))}")
        self._fill_eligibility(self.nom_table, eligible_for_nomination(self.registry, today))
        self._fill_eligibility(self.vote_table, eligible_for_voting(self.registry, today))

    def generate_summary(self) -> None:
        self.b_ai.setEnabled(False)
        self.ai_txt.setPlainText("Generating...")
        w = SummaryWorker(self.registry.list(), self.ai)
        w.signals.finished.connect(self._summary_ready)
        w.signals.error.connect(self._summary_ready)
        self.pool.start(w)

    def _summary_ready(self, text: str) -> None:
        self.ai_txt.setPlainText(text)
        self.b_ai.setEnabled(True)

    # --- MEMBERS ---
    def init_member_page(self) -> None:
        layout = QtWidgets.QVBoxLayout(self.p_mem)
        layout.setContentsMargins(20, 20, 20, 20)

        form_card = self._card()
        fv = QtWidgets.QVBoxLayout(form_card)
        self.form_title = _role(QtWidgets.QLabel("Add Member"), "heading")
        fv.addWidget(self.form_title)

        top = QtWidgets.QHBoxLayout()
        self.ph_lbl = QtWidgets.QLabel("📷 No Photo")
        self.ph_lbl.setFixedSize(120, 120)
        self.ph_lbl.setAlignment(QtCore.Qt.AlignCenter)
        self.ph_lbl.setStyleSheet("border: 2px solid #444; border-radius: 8px;")

        # Photo Buttons
        btns = QtWidgets.QVBoxLayout()
        b1 = QtWidgets.QPushButton("📁 Upload Photo")
        b1.clicked.connect(self.upl)
        b2 = QtWidgets.QPushButton("🗑️ Clear Photo")
        b2.clicked.connect(self.clr_ph)
        btns.addWidget(b1)
        btns.addWidget(b2)
        btns.addStretch()
        top.addWidget(self.ph_lbl)
        top.addLayout(btns)
        top.addStretch()
        fv.addLayout(top)

        form = QtWidgets.QFormLayout()
        self.inputs: Dict[str, QtWidgets.QLineEdit] = {}
        for key, label in FORM_FIELDS:
            inp = QtWidgets.QLineEdit()
            self.inputs[key] = inp
            form.addRow(label, inp)
        fv.addLayout(form)

        # Form Actions
        self.b_save = _role(QtWidgets.QPushButton("💾 Add Member"), "primary")
        self.b_save.clicked.connect(self.on_save)
        self.b_cancel = QtWidgets.QPushButton("Cancel")
        self.b_cancel.clicked.connect(self.clr_frm)
        self.b_cancel.setVisible(False)

        bH = QtWidgets.QHBoxLayout()
        bH.addWidget(self.b_save)
        bH.addWidget(self.b_cancel)
        fv.addLayout(bH)
        layout.addWidget(form_card)

        # Member List
        head = QtWidgets.QHBoxLayout()
        self.list_title = _role(QtWidgets.QLabel("Active Members (0)"), "heading")
        head.addWidget(self.list_title)
        head.addStretch()
        self.b_exp = QtWidgets.QPushButton("📄 PDF Export")
        self.b_exp.clicked.connect(self.export_pdf)
        head.addWidget(self.b_exp)
        layout.addLayout(head)

        self.mem_table = QtWidgets.QTableWidget()
        self.mem_table.setColumnCount(6)
        self.mem_table.setHorizontalHeaderLabels(["#", "Name", "Road Name", "Phone", "Location", "Action"])
        self.mem_table.horizontalHeader().setSectionResizeMode(QtWidgets.QHeaderView.Stretch)
        self.mem_table.verticalHeader().setVisible(False)
        self.mem_table.setEditTriggers(QtWidgets.QAbstractItemView.NoEditTriggers)
        self.mem_table.setIconSize(QtCore.QSize(36, 36))
        self.mem_table.verticalHeader().setDefaultSectionSize(44)
        self.mem_table.setMinimumHeight(300)
        self.mem_table.cellDoubleClicked.connect(
            lambda r, c: self.edit_member(self.mem_table.item(r, 1).data(QtCore.Qt.UserRole))
        )
        layout.addWidget(self.mem_table)

    def load_members_table(self) -> None:
        members = self.registry.list()
        self.list_title.setText(f"Active Members ({len(members)})")
        self.b_exp.setEnabled(bool(members))

        self.mem_table.setRowCount(0)
        for i, m in enumerate(members):
            self.mem_table.insertRow(i)
            self.mem_table.setItem(i, 0, QtWidgets.QTableWidgetItem(m.membership_no or "??"))
            name = QtWidgets.QTableWidgetItem(m.full_name)
            name.setIcon(QtGui.QIcon(avatar_pixmap(m, 36, self.settings.accent_hex)))
            name.setData(QtCore.Qt.UserRole, m.id)
            self.mem_table.setItem(i, 1, name)
            self.mem_table.setItem(i, 2, QtWidgets.QTableWidgetItem(f'"{m.road_name}"' if m.road_name else ""))
            self.mem_table.setItem(i, 3, QtWidgets.QTableWidgetItem(m.phone))
            self.mem_table.setItem(i, 4, QtWidgets.QTableWidgetItem(m.location))

            w = QtWidgets.QWidget()
            h = QtWidgets.QHBoxLayout(w)
            h.setContentsMargins(0, 0, 0, 0)

            b_ed = QtWidgets.QPushButton("✏️ Edit")
            b_ed.clicked.connect(lambda c, x=m.id: self.edit_member(x))
            b_rm = _role(QtWidgets.QPushButton("🗑️ Remove"), "danger")
            b_rm.clicked.connect(lambda c, x=m.id: self.do_remove(x))

            h.addWidget(b_ed)
            h.addWidget(b_rm)
            self.mem_table.setCellWidget(i, 5, w)

    def _form_fields(self) -> Dict[str, object]:
        fields: Dict[str, object] = {k: inp.text() for k, inp in self.inputs.items()}
        fields["photo"] = self.current_photo
        return fields

    def on_save(self) -> None:
        fields = self._form_fields()
        try:
            if self.editing_id:
                m = self.registry.update(self.editing_id, fields)
                QtWidgets.QMessageBox.information(self, "Success", f"Updated {m.full_name}.")
            else:
                m = self.registry.add(fields)
                QtWidgets.QMessageBox.information(self, "Success", f"Added {m.full_name}.")
        except ValidationError as e:
            QtWidgets.QMessageBox.warning(self, "Missing Data", str(e))
            return
        except MemberNotFoundError as e:
            QtWidgets.QMessageBox.critical(self, "Error", str(e))
        self.clr_frm()

    def edit_member(self, member_id: str) -> None:
        try:
            m = self.registry.get(member_id)
        except MemberNotFoundError as e:
            QtWidgets.QMessageBox.warning(self, "Unknown", str(e))
            return

        self.editing_id = m.id
        for key, inp in self.inputs.items():
            inp.setText(getattr(m, key))
        self.current_photo = m.photo
        self._show_photo()

        self.form_title.setText("Update Member Profile")
        self.b_save.setText("💾 Update Member")
        self.b_cancel.setVisible(True)
        self.stacked.setCurrentIndex(1)
        self.b_mem.setChecked(True)

    def do_remove(self, member_id: str) -> None:
        try:
            m = self.registry.get(member_id)
        except MemberNotFoundError as e:
            QtWidgets.QMessageBox.warning(self, "Unknown", str(e))
            return

        if QtWidgets.QMessageBox.question(
            self, "Confirm Delete", f"Remove {m.full_name} from the roster?",
            QtWidgets.QMessageBox.Yes | QtWidgets.QMessageBox.No
        ) != QtWidgets.QMessageBox.Yes:
            return

        try:
            self.registry.remove(member_id)
        except MemberNotFoundError as e:
            QtWidgets.QMessageBox.warning(self, "Unknown", str(e))
            return
        if self.editing_id == member_id:
            self.clr_frm()

    def export_pdf(self) -> None:
        members = self.registry.list()
        if not members:
            return

        self.b_exp.setEnabled(False)
        w = ExportWorker(members, self.settings.chapter_name, config.EXPORT_FOLDER)
        w.signals.finished.connect(self._exported)
        w.signals.error.connect(self._export_failed)
        self.pool.start(w)

    def _exported(self, path: str) -> None:
        self.b_exp.setEnabled(True)
        QtWidgets.QMessageBox.information(self, "Done", f"Exported: {path}")
        QtGui.QDesktopServices.openUrl(QtCore.QUrl.fromLocalFile(path))

    def _export_failed(self, message: str) -> None:
        self.b_exp.setEnabled(True)
        QtWidgets.QMessageBox.critical(self, "Export Failed", message)

    # --- ATTENDANCE ---
    def init_attendance_page(self) -> None:
        l = QtWidgets.QVBoxLayout(self.p_att)
        l.setContentsMargins(20, 20, 20, 20)
        l.addWidget(_role(QtWidgets.QLabel("Monthly Attendance"), "heading"))

        # Year Selector
        ys = QtWidgets.QHBoxLayout()
        b_prev = QtWidgets.QPushButton("◀")
        b_prev.setToolTip("Previous Year")
        b_prev.clicked.connect(lambda: self.shift_year(-1))
        self.year_lbl = _role(QtWidgets.QLabel(), "accent")
        self.year_lbl.setAlignment(QtCore.Qt.AlignCenter)
        self.year_lbl.setStyleSheet("font-size: 22px;")
        b_next = QtWidgets.QPushButton("▶")
        b_next.setToolTip("Next Year")
        b_next.clicked.connect(lambda: self.shift_year(1))
        ys.addWidget(b_prev)
        ys.addWidget(self.year_lbl, 1)
        ys.addWidget(b_next)
        l.addLayout(ys)

        self.att_table = QtWidgets.QTableWidget()
        self.att_table.setColumnCount(1 + len(MONTHS))
        self.att_table.setHorizontalHeaderLabels(["Member"] + MONTHS)
        header = self.att_table.horizontalHeader()
        header.setSectionResizeMode(0, QtWidgets.QHeaderView.Stretch)
        for c in range(1, 1 + len(MONTHS)):
            header.setSectionResizeMode(c, QtWidgets.QHeaderView.ResizeToContents)
        self.att_table.verticalHeader().setVisible(False)
        self.att_table.setEditTriggers(QtWidgets.QAbstractItemView.NoEditTriggers)
        l.addWidget(self.att_table)

        self.att_empty = _role(QtWidgets.QLabel("Add members to start tracking attendance."), "muted")
        self.att_empty.setAlignment(QtCore.Qt.AlignCenter)
        l.addWidget(self.att_empty)

    def shift_year(self, step: int) -> None:
        self.attendance_year += step
        self.load_attendance()

    def load_attendance(self) -> None:
        year = self.attendance_year
        self.year_lbl.setText(str(year))
        members = self.registry.list()
        self.att_empty.setVisible(not members)

        # Rows are only rebuilt when the roster itself changes; a toggle just syncs states
        ids = [m.id for m in members]
        if ids != self.att_ids:
            self._build_attendance_rows(ids)

        for i, m in enumerate(members):
            label = m.full_name
            if m.membership_no:
                label += f"  #{m.membership_no}"
            self.att_table.item(i, 0).setText(label)
            for idx in range(len(MONTHS)):
                self.att_table.cellWidget(i, idx + 1).setChecked(is_attended(m.attendance, year, idx))

    def _build_attendance_rows(self, ids: List[str]) -> None:
        self.att_ids = ids
        self.att_table.setRowCount(0)
        for i, member_id in enumerate(ids):
            self.att_table.insertRow(i)
            self.att_table.setItem(i, 0, QtWidgets.QTableWidgetItem())
            for idx, name in enumerate(MONTHS):
                b = _role(QtWidgets.QPushButton(name), "month")
                b.setCheckable(True)
                b.clicked.connect(lambda c, x=member_id, mo=idx: self.mark(x, mo))
                self.att_table.setCellWidget(i, idx + 1, b)

    def mark(self, member_id: str, month: int) -> None:
        try:
            self.registry.toggle_attendance(member_id, self.attendance_year, month)
        except MemberNotFoundError as e:
            QtWidgets.QMessageBox.warning(self, "Unknown", str(e))

    # --- SETTINGS ---
    def init_settings_page(self) -> None:
        l = QtWidgets.QVBoxLayout(self.p_set)
        l.setContentsMargins(20, 20, 20, 20)
        l.addWidget(_role(QtWidgets.QLabel("Chapter Settings"), "heading"))

        card = self._card()
        form = QtWidgets.QFormLayout(card)

        # Logo
        logo_row = QtWidgets.QHBoxLayout()
        self.set_logo_lbl = QtWidgets.QLabel("Select Logo")
        self.set_logo_lbl.setFixedSize(96, 96)
        self.set_logo_lbl.setAlignment(QtCore.Qt.AlignCenter)
        self.set_logo_lbl.setStyleSheet("background: black; border-radius: 12px; color: #555;")
        b_logo = QtWidgets.QPushButton("📁 Upload Logo")
        b_logo.clicked.connect(self.upl_logo)
        b_logo_clr = QtWidgets.QPushButton("🗑️ Remove Logo")
        b_logo_clr.clicked.connect(self.clr_logo)
        logo_row.addWidget(self.set_logo_lbl)
        logo_row.addWidget(b_logo)
        logo_row.addWidget(b_logo_clr)
        logo_row.addStretch()
        form.addRow("Chapter Logo", logo_row)

        # Logo Scale
        scale_row = QtWidgets.QHBoxLayout()
        self.size_slider = QtWidgets.QSlider(QtCore.Qt.Horizontal)
        self.size_slider.setRange(config.LOGO_SIZE_MIN, config.LOGO_SIZE_MAX)
        self.size_slider.setValue(self.settings.logo_size)
        self.size_lbl = QtWidgets.QLabel(f"{self.settings.logo_size}px")
        self.size_slider.valueChanged.connect(self.on_logo_size)
        scale_row.addWidget(self.size_slider, 1)
        scale_row.addWidget(self.size_lbl)
        form.addRow("Logo Scale", scale_row)

        # Chapter Name
        self.chapter_inp = QtWidgets.QLineEdit(self.settings.chapter_name)
        self.chapter_inp.editingFinished.connect(self.on_chapter_name)
        form.addRow("Chapter Name", self.chapter_inp)

        # Display Mode
        mode_row = QtWidgets.QHBoxLayout()
        self.b_light = QtWidgets.QPushButton("☀️ Light")
        self.b_dark = QtWidgets.QPushButton("🌙 Dark")
        mode_group = QtWidgets.QButtonGroup(self)
        for b, mode in ((self.b_light, "light"), (self.b_dark, "dark")):
            b.setCheckable(True)
            b.setChecked(self.settings.theme_mode == mode)
            mode_group.addButton(b)
            b.clicked.connect(lambda c, x=mode: self.on_mode(x))
            mode_row.addWidget(b)
        form.addRow("Display Mode", mode_row)

        # Accent Colour
        self.color_box = QtWidgets.QComboBox()
        for key in config.THEME_COLORS:
            self.color_box.addItem(key.title(), key)
        self.color_box.setCurrentIndex(self.color_box.findData(self.settings.theme_color))
        self.color_box.currentIndexChanged.connect(
            lambda i: self.on_color(self.color_box.itemData(i))
        )
        form.addRow("Primary App Color", self.color_box)

        l.addWidget(card)

        b_done = _role(QtWidgets.QPushButton("✓ Save"), "primary")
        b_done.clicked.connect(lambda: [self.on_chapter_name(), self.b_home.click()])
        l.addWidget(b_done)
        l.addStretch()

    def on_logo_size(self, value: int) -> None:
        self.settings.logo_size = value
        self.size_lbl.setText(f"{value}px")
        self._settings_updated()

    def on_chapter_name(self) -> None:
        name = self.chapter_inp.text()
        if name == self.settings.chapter_name:
            return
        self.settings.chapter_name = name
        self._settings_updated()

    def on_mode(self, mode: str) -> None:
        self.settings.theme_mode = mode
        self._settings_updated()

    def on_color(self, color: str) -> None:
        self.settings.theme_color = color
        self._settings_updated()
        # Initials badges use the accent colour
        self.refresh_all()

    def upl_logo(self) -> None:
        f, _ = QtWidgets.QFileDialog.getOpenFileName(self, "Logo", "", IMAGE_FILTER)
        if not f:
            return
        try:
            self.settings.logo = encode_image_file(f)
        except ExternalServiceError as e:
            QtWidgets.QMessageBox.warning(self, "Image Error", str(e))
            return
        self._settings_updated()

    def clr_logo(self) -> None:
        self.settings.logo = None
        self._settings_updated()

    def _settings_updated(self) -> None:
        w = SaveSettingsWorker(replace(self.settings))
        w.signals.error.connect(lambda msg: logger.error("Settings save failed: %s", msg))
        self.save_pool.start(w)
        self.apply_style()
        self.load_header()

    def load_header(self) -> None:
        s = self.settings
        self.setWindowTitle(f"{config.APP_NAME} - {s.chapter_name}")
        self.name_lbl.setText(s.chapter_name)

        self.logo_lbl.setFixedSize(s.logo_size, s.logo_size)
        pm = pixmap_from_data_uri(s.logo, s.logo_size)
        if pm:
            self.logo_lbl.setPixmap(pm)
        else:
            self.logo_lbl.clear()
            self.logo_lbl.setText("🏍️")

        preview = pixmap_from_data_uri(s.logo, 96)
        if preview:
            self.set_logo_lbl.setPixmap(preview)
        else:
            self.set_logo_lbl.clear()
            self.set_logo_lbl.setText("Select Logo")

    # --- UTILS ---
    def upl(self) -> None:
        f, _ = QtWidgets.QFileDialog.getOpenFileName(self, "Photo", "", IMAGE_FILTER)
        if not f:
            return
        try:
            self.current_photo = encode_image_file(f)
        except ExternalServiceError as e:
            QtWidgets.QMessageBox.warning(self, "Image Error", str(e))
            return
        self._show_photo()

    def _show_photo(self) -> None:
        pm = pixmap_from_data_uri(self.current_photo, 120)
        if pm:
            self.ph_lbl.setPixmap(pm)
        else:
            self.ph_lbl.clear()
            self.ph_lbl.setText("📷 No Photo")

    def clr_ph(self) -> None:
        self.current_photo = None
        self._show_photo()

    def clr_frm(self) -> None:
        self.editing_id = None
        for inp in self.inputs.values():
            inp.clear()
        self.clr_ph()
        self.form_title.setText("Add Member")
        self.b_save.setText("💾 Add Member")
        self.b_cancel.setVisible(False)

    def refresh_all(self) -> None:
        self.load_header()
        self.load_home()
        self.load_members_table()
        self.load_attendance()

    def apply_style(self) -> None:
        self.setStyleSheet(build_stylesheet(self.settings))
