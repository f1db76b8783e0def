import config
from models.member import Member
from models.settings import ChapterSettings


def test_member_derived_fields():
    m = Member(id="1", first_name="jane", last_name="doe", join_date="2024-01-01T00:00:00",
               city="Austin", state="TX")
    assert m.full_name == "jane doe"
    assert m.initials == "JD"
    assert m.location == "Austin, TX"

    m.city = ""
    assert m.location == ""


def test_member_from_partial_record():
    m = Member.from_dict({
        "id": "abc",
        "firstName": "Jane",
        "lastName": "Doe",
        "joinDate": "2024-01-01T00:00:00.000Z",
        "zip": 73301,
        "attendance": {"2024": {"3": True, "4": False}},
    })
    assert m.road_name == ""
    assert m.zip == "73301"
    assert m.photo is None
    assert m.attendance == {2024: {3: True, 4: False}}


def test_member_to_dict_uses_storage_keys():
    m = Member(id="1", first_name="Jane", last_name="Doe", join_date="2024-01-01T00:00:00",
               membership_no="7", attendance={2024: {3: True}})
    d = m.to_dict()
    assert d["firstName"] == "Jane"
    assert d["membershipNo"] == "7"
    assert d["joinDate"] == "2024-01-01T00:00:00"
    assert d["attendance"] == {"2024": {"3": True}}
    assert Member.from_dict(d) == m


def test_settings_defaults():
    s = ChapterSettings()
    assert s.chapter_name == "Chapter Name"
    assert s.logo is None
    assert s.logo_size == 48
    assert s.theme_color == "orange"
    assert s.theme_mode == "dark"
    assert not s.is_light
    assert s.accent_hex == config.THEME_COLORS["orange"]


def test_settings_clamp_and_fallback():
    assert ChapterSettings(logo_size=10).logo_size == config.LOGO_SIZE_MIN
    assert ChapterSettings(logo_size=500).logo_size == config.LOGO_SIZE_MAX
    assert ChapterSettings(theme_color="pink").theme_color == "orange"
    assert ChapterSettings(theme_mode="light").is_light
    assert ChapterSettings(theme_mode="neon").theme_mode == "dark"
