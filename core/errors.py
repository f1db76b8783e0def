from typing import Optional


class RosterError(Exception):
    """Base exception for roster rule violations."""


class ValidationError(RosterError):
    """Raised when member input is missing required data or names an unknown field."""


class MemberNotFoundError(RosterError):
    """Raised when an operation references a member id that is not in the registry."""

    def __init__(self, member_id: str, message: Optional[str] = None):
        self.member_id = member_id
        super().__init__(message or f"Member {member_id} not found.")


class ExternalServiceError(RosterError):
    """Raised by collaborators (export, image decoding, AI) when their I/O fails."""
