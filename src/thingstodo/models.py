"""Domain types shared by the services and the UI."""

import re
from dataclasses import dataclass
from typing import NamedTuple, Optional

ALL = "all"

# Cities recognised inside free-text locations such as "Central Jakarta"
KNOWN_CITIES = ("Bali", "Jakarta", "Yogyakarta", "Lombok", "Surabaya", "Bandung", "Semarang", "Palembang")


def extract_city(location: str) -> str:
    """Extract the city from a location field.

    Examples: "Ubud, Bali" -> "Bali", "Central Jakarta" -> "Jakarta"
    """
    parts = location.split(",")
    if len(parts) > 1:
        return parts[-1].strip()

    for city in KNOWN_CITIES:
        if city in location:
            return city

    return location.strip()


@dataclass(frozen=True)
class Record:
    """One activity entry."""

    id: str
    name: str
    local_name: str = ""
    description: str = ""
    location: str = ""
    duration: str = ""
    tags: str = ""
    rating: float = 0.0
    image: Optional[str] = None

    @property
    def city(self) -> str:
        return extract_city(self.location)

    @property
    def tag_list(self) -> list[str]:
        """Hashtag tokens without the leading '#': "#temple #sunset" -> ["temple", "sunset"]."""
        return [tag[1:].lower() for tag in self.tags.split() if tag.startswith("#") and len(tag) > 1]

    @classmethod
    def from_mapping(cls, data: dict) -> "Record":
        """Build a record from a loosely shaped mapping (e.g. a generated itinerary entry)."""
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("activity") or data.get("name") or ""),
            local_name=str(data.get("localName") or data.get("local_name") or ""),
            description=str(data.get("description") or ""),
            location=str(data.get("location") or ""),
            duration=str(data.get("duration") or ""),
            tags=str(data.get("tags") or ""),
            rating=parse_rating(data.get("rating")),
            image=data.get("image") or None,
        )

    def to_mapping(self) -> dict:
        return {
            "id": self.id,
            "activity": self.name,
            "localName": self.local_name,
            "description": self.description,
            "location": self.location,
            "duration": self.duration,
            "rating": self.rating,
            "tags": self.tags,
        }


def parse_rating(value) -> float:
    """Parse ratings such as 4.5, "4.5" or "4.5/5", clamped to 0..5."""
    if isinstance(value, (int, float)):
        rating = float(value)
    else:
        match = re.match(r"\s*(\d+(?:\.\d+)?)", str(value or ""))
        rating = float(match.group(1)) if match else 0.0
    return min(max(rating, 0.0), 5.0)


@dataclass(frozen=True)
class FacetOption:
    value: str
    label: str


@dataclass(frozen=True)
class FilterState:
    """Current search text and facet selections."""

    search_text: str = ""
    selected_location: str = ALL
    selected_duration: str = ALL


class Page(NamedTuple):
    window: tuple
    has_more: bool


@dataclass(frozen=True)
class Snapshot:
    """What the presentation layer needs for one render."""

    displayed_window: tuple
    filtered_count: int
    total_count: int
    has_more: bool
    is_busy: bool
