"""User and workout partner models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class PartnerStatus(str, Enum):
    """State of a partner invite."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass
class UserProfile:
    """Public profile of a user."""

    id: int
    name: str
    username: str
    email: str | None = None

    def to_dict(self) -> dict:
        """Public fields only; email is never exposed."""
        return {"id": self.id, "name": self.name, "username": self.username}

    @classmethod
    def from_dict(cls, data: dict) -> "UserProfile":
        return cls(
            id=data["id"],
            name=data["name"],
            username=data["username"],
            email=data.get("email"),
        )


@dataclass
class PartnerLink:
    """An invite between two users.

    ``counterpart`` is the other user's profile, joined in when links are
    listed for one side.
    """

    requester_id: int
    target_id: int
    status: PartnerStatus = PartnerStatus.PENDING
    created_at: datetime | None = None
    counterpart: UserProfile | None = None
    id: int | None = None

    def other(self, user_id: int) -> int:
        """Return the id of the user on the other side of the link."""
        return self.target_id if user_id == self.requester_id else self.requester_id

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "requester_id": self.requester_id,
            "target_id": self.target_id,
            "status": self.status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "counterpart": self.counterpart.to_dict() if self.counterpart else None,
        }

    @classmethod
    def from_dict(cls, data: dict, counterpart: UserProfile | None = None) -> "PartnerLink":
        created_at = data.get("created_at")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        return cls(
            id=data.get("id"),
            requester_id=data["requester_id"],
            target_id=data["target_id"],
            status=PartnerStatus(data.get("status", "pending")),
            created_at=created_at,
            counterpart=counterpart,
        )
