# src/core/models.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional


# tag colours per resource type (unknown -> blue)
TYPE_COLORS = {
    "Activity": "blue",
    "Printable": "green",
    "Game": "purple",
    "Book": "red",
    "Song": "pink",
    "Craft": "orange",
    "Experiment": "teal",
    "OutdoorActivity": "cyan",
    "DigitalResource": "linkedin",
    "LessonPlan": "yellow",
    "VideoLink": "messenger",
    "ParentTip": "gray",
}

# palette used by the Qt stylesheets
COLOR_HEX = {
    "blue": "#3182ce",
    "green": "#38a169",
    "purple": "#805ad5",
    "red": "#e53e3e",
    "pink": "#d53f8c",
    "orange": "#dd6b20",
    "teal": "#319795",
    "cyan": "#00a3c4",
    "linkedin": "#0077b5",
    "yellow": "#d69e2e",
    "messenger": "#0078ff",
    "gray": "#718096",
}


def type_color(resource_type: str | None) -> str:
    return TYPE_COLORS.get(resource_type or "", "blue")


@dataclass(frozen=True)
class ResourceOwner:
    first_name: str = ""
    last_name: str = ""

    def display_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


@dataclass(frozen=True)
class Resource:
    id: Any
    title: str = ""
    type: str = ""
    subject: str = ""
    age_group: str = ""
    description: str = ""
    event_date: str = ""
    image_url: str = ""
    is_approved: bool = False
    user_id: Any = None
    user: Optional[ResourceOwner] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Resource":
        if not data or data.get("id") in (None, ""):
            raise ValueError("Resource id is required.")

        owner = None
        u = data.get("user")
        if isinstance(u, dict):
            owner = ResourceOwner(
                first_name=u.get("firstName") or "",
                last_name=u.get("lastName") or "",
            )

        return cls(
            id=data["id"],
            title=data.get("title") or "",
            type=data.get("type") or "",
            subject=data.get("subject") or "",
            age_group=data.get("ageGroup") or "",
            description=data.get("description") or "",
            event_date=data.get("eventDate") or "",
            image_url=data.get("imageUrl") or "",
            is_approved=data.get("isApproved") is True,  # "false" strings stay pending
            user_id=data.get("userId"),
            user=owner,
        )

    def to_payload(self) -> dict[str, Any]:
        """Editable fields, camelCase (as the backend expects)."""
        return {
            "title": self.title,
            "type": self.type,
            "subject": self.subject,
            "ageGroup": self.age_group,
            "description": self.description,
            "eventDate": self.event_date,
            "imageUrl": self.image_url,
        }

    def status_label(self) -> str:
        return "Approved" if self.is_approved else "Pending"

    def creator_label(self) -> str:
        if not self.user:
            return "Unknown User"
        return self.user.display_name()

    def event_date_label(self) -> str:
        dt = parse_date(self.event_date)
        if dt is None:
            return self.event_date or ""
        return f"{dt:%A, %B} {dt.day}, {dt.year}"


def parse_date(value: str | None) -> datetime | None:
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None
