import copy
import datetime
import logging
import uuid
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from core.attendance import is_attended, merge_attendance, set_attended
from core.errors import MemberNotFoundError, ValidationError
from models.member import EDITABLE_FIELDS, IMMUTABLE_FIELDS, Member

logger = logging.getLogger(__name__)

Listener = Callable[[List[Member]], None]
Clock = Callable[[], datetime.datetime]

REQUIRED_FIELDS = ("first_name", "last_name")


def _validate_fields(fields: Mapping[str, Any], creating: bool) -> Dict[str, Any]:
    """
    Checks a field mapping before any member is built or changed.
    Returns a cleaned copy (names stripped, text fields coerced to str).

    Raises:
        ValidationError: On unknown or immutable fields, or empty required names.
    """
    allowed = set(EDITABLE_FIELDS)
    if not creating:
        allowed.add("attendance")

    for key in fields:
        if key in IMMUTABLE_FIELDS:
            raise ValidationError(f"'{key}' cannot be changed.")
        if key not in allowed:
            raise ValidationError(f"Unknown member field '{key}'.")

    clean: Dict[str, Any] = {}
    for key, value in fields.items():
        if key == "photo":
            clean[key] = value or None
        elif key == "attendance":
            clean[key] = value
        else:
            clean[key] = "" if value is None else str(value)

    for key in REQUIRED_FIELDS:
        if creating or key in clean:
            value = clean.get(key, "").strip()
            if not value:
                label = key.replace("_", " ").title()
                raise ValidationError(f"{label} is required.")
            clean[key] = value

    return clean


class MemberRegistry:
    """
    In-memory, insertion-ordered collection of chapter members.

    Every successful mutation notifies the subscribed listeners with a
    snapshot of the roster so the storage layer can mirror it. Listener
    failures are logged and never undo the mutation.
    """

    def __init__(self, members: Optional[Iterable[Member]] = None, clock: Optional[Clock] = None):
        self._members: List[Member] = []
        self._listeners: List[Listener] = []
        self._clock: Clock = clock or datetime.datetime.now

        seen = set()
        for m in members or []:
            if m.id in seen:
                raise ValidationError(f"Duplicate member id '{m.id}'.")
            seen.add(m.id)
            self._members.append(copy.deepcopy(m))

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, member_id: object) -> bool:
        return any(m.id == member_id for m in self._members)

    # --- LISTENERS ---

    def subscribe(self, listener: Listener) -> None:
        """Registers a callback invoked with a roster snapshot after each change."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        snapshot = self.list()
        for listener in self._listeners:
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Registry listener %r failed", listener)

    # --- LOOKUP ---

    def _index_of(self, member_id: str) -> int:
        for i, m in enumerate(self._members):
            if m.id == member_id:
                return i
        raise MemberNotFoundError(member_id)

    def get(self, member_id: str) -> Member:
        """
        Returns a copy of the member with this id.

        Raises:
            MemberNotFoundError: If the id is not in the registry.
        """
        return copy.deepcopy(self._members[self._index_of(member_id)])

    # --- MUTATIONS ---

    def add(self, fields: Mapping[str, Any]) -> Member:
        """
        Creates a member from the supplied fields.
        A fresh id and join date are assigned and attendance starts empty.

        Raises:
            ValidationError: If first or last name is empty, or a field is unknown.
        """
        clean = _validate_fields(fields, creating=True)

        member_id = str(uuid.uuid4())
        while member_id in self:
            member_id = str(uuid.uuid4())

        member = Member(
            id=member_id,
            join_date=self._clock().isoformat(timespec="seconds"),
            attendance={},
            **clean,
        )
        self._members.append(member)
        logger.info("Added member %s (%s)", member.id, member.full_name)
        self._notify()
        return copy.deepcopy(member)

    def update(self, member_id: str, fields: Mapping[str, Any]) -> Member:
        """
        Merges `fields` into an existing member. Id and join date never change;
        attendance entries not mentioned in `fields` are preserved.

        Raises:
            MemberNotFoundError: If the id is not in the registry.
            ValidationError: On bad or immutable fields.
        """
        idx = self._index_of(member_id)
        clean = _validate_fields(fields, creating=False)
        if not clean:
            return copy.deepcopy(self._members[idx])

        current = self._members[idx]
        updated = copy.deepcopy(current)
        for key, value in clean.items():
            if key == "attendance":
                updated.attendance = merge_attendance(current.attendance, value or {})
            else:
                setattr(updated, key, value)

        self._members[idx] = updated
        logger.debug("Updated member %s: %s", member_id, sorted(clean))
        self._notify()
        return copy.deepcopy(updated)

    def remove(self, member_id: str) -> None:
        """
        Permanently deletes a member.

        Raises:
            MemberNotFoundError: If the id is not (or no longer) in the registry.
        """
        idx = self._index_of(member_id)
        removed = self._members.pop(idx)
        logger.info("Removed member %s (%s)", removed.id, removed.full_name)
        self._notify()

    def set_attendance(self, member_id: str, year: int, month: int, attended: bool) -> Member:
        """
        Records whether a member attended the meeting of (year, month).

        Raises:
            MemberNotFoundError: If the id is not in the registry.
        """
        idx = self._index_of(member_id)
        member = copy.deepcopy(self._members[idx])
        member.attendance = set_attended(member.attendance, year, month, attended)
        self._members[idx] = member
        logger.debug("Attendance %s %d/%d -> %s", member_id, year, month, attended)
        self._notify()
        return copy.deepcopy(member)

    def toggle_attendance(self, member_id: str, year: int, month: int) -> Member:
        """Flips the attendance flag for (year, month)."""
        current = self._members[self._index_of(member_id)]
        return self.set_attendance(member_id, year, month, not is_attended(current.attendance, year, month))

    # --- SNAPSHOT ---

    def list(self) -> List[Member]:
        """All members in insertion order. Changing the result never touches the registry."""
        return copy.deepcopy(self._members)
