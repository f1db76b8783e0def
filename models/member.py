from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from core.attendance import Attendance, normalize_attendance

# Python attribute -> persisted JSON key
JSON_KEYS = {
    "id": "id",
    "first_name": "firstName",
    "last_name": "lastName",
    "road_name": "roadName",
    "email": "email",
    "address": "address",
    "city": "city",
    "state": "state",
    "zip": "zip",
    "phone": "phone",
    "membership_no": "membershipNo",
    "join_date": "joinDate",
    "photo": "photo",
    "attendance": "attendance",
}

# Fields a caller may supply when creating or editing a member
EDITABLE_FIELDS = (
    "first_name", "last_name", "road_name", "email", "address",
    "city", "state", "zip", "phone", "membership_no", "photo",
)

IMMUTABLE_FIELDS = ("id", "join_date")


@dataclass
class Member:
    """
    Represents a single chapter member's contact details and meeting attendance.
    """
    id: str
    first_name: str
    last_name: str
    join_date: str  # ISO-8601 timestamp, set once at creation
    road_name: str = ""
    email: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    phone: str = ""
    membership_no: str = ""
    photo: Optional[str] = None  # base64 data URI
    attendance: Attendance = field(default_factory=dict)  # year -> month (0-11) -> attended

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def initials(self) -> str:
        return f"{self.first_name[:1]}{self.last_name[:1]}".upper()

    @property
    def location(self) -> str:
        """'City, State' or an empty string when no city is recorded."""
        if not self.city:
            return ""
        return f"{self.city}, {self.state}"

    def to_dict(self) -> Dict[str, Any]:
        """Serializes to the JSON-compatible record used by local storage."""
        d = {JSON_KEYS[name]: getattr(self, name) for name in JSON_KEYS if name != "attendance"}
        d["attendance"] = {
            str(year): {str(month): attended for month, attended in months.items()}
            for year, months in self.attendance.items()
        }
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Member":
        """Builds a Member from a stored record, tolerating missing optional keys."""
        kwargs = {}
        for name, key in JSON_KEYS.items():
            if key in data and data[key] is not None:
                kwargs[name] = data[key]

        kwargs["attendance"] = normalize_attendance(data.get("attendance") or {})
        for name in ("first_name", "last_name", "join_date"):
            kwargs.setdefault(name, "")
        for name in EDITABLE_FIELDS:
            if name != "photo" and name in kwargs:
                kwargs[name] = str(kwargs[name])
        return cls(**kwargs)
