# Itinerary planner
# Remote generation first; any collaborator failure falls back to a
# deterministic top-rated-first plan paced by PACE_ACTIVITIES.

import json
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional

from loguru import logger

from thingstodo.errors import RemoteGenerationError
from thingstodo.gateways.llm import ArkGateway
from thingstodo.models import Record

PACE_ACTIVITIES = {"relaxed": 2, "moderate": 3, "intensive": 4}
PACE_RANGES = {"relaxed": "2-3", "moderate": "3-4", "intensive": "4-5"}
BUDGETS = ("budget", "moderate", "luxury")
FALLBACK_THEMES = ("Cultural Discovery", "Nature & Adventure", "Local Experiences", "Hidden Gems")
MAX_CANDIDATES = 20
HOURS_PER_ACTIVITY = 3

JSON_OBJECT_PATTERN = re.compile(r"\{.*\}", re.DOTALL)


@dataclass
class Preferences:
    destination: str
    duration: int = 3
    travelers: int = 2
    budget: str = "moderate"
    interests: list[str] = field(default_factory=list)
    pace: str = "moderate"

    def __post_init__(self):
        if not self.destination.strip():
            raise ValueError("Destination is required")
        if self.duration < 1:
            raise ValueError(f"Duration must be at least one day, got {self.duration}")
        if self.travelers < 1:
            raise ValueError(f"Travelers must be at least 1, got {self.travelers}")
        if self.budget not in BUDGETS:
            raise ValueError(f"Invalid budget '{self.budget}'. Allowed: {', '.join(BUDGETS)}")
        if self.pace not in PACE_ACTIVITIES:
            raise ValueError(f"Invalid pace '{self.pace}'. Allowed: {', '.join(PACE_ACTIVITIES)}")


@dataclass
class ItineraryDay:
    day: int
    date: str
    theme: str
    activities: list[Record]

    @property
    def total_duration(self) -> str:
        return f"{len(self.activities) * HOURS_PER_ACTIVITY} hours"


@dataclass
class ItineraryResult:
    days: list[ItineraryDay]
    source: str  # "remote" or "fallback"
    warning: Optional[str] = None


def format_day_date(start: date, offset: int) -> str:
    """Format the date of the day ``offset`` days after ``start``, e.g. "Monday, December 16"."""
    day = start + timedelta(days=offset)
    return f"{day:%A}, {day:%B} {day.day}"


def _at_destination(records: Sequence[Record], destination: str) -> list[Record]:
    needle = destination.lower()
    return [record for record in records if needle in record.location.lower()]


def candidate_records(records: Sequence[Record], prefs: Preferences) -> list[Record]:
    """Best-rated destination records matching any interest, capped at MAX_CANDIDATES."""
    interests = [interest.lower() for interest in prefs.interests]

    def matches(record: Record) -> bool:
        if not interests:
            return True
        tags = record.tags.lower()
        description = record.description.lower()
        return any(interest in tags or interest in description for interest in interests)

    relevant = [record for record in _at_destination(records, prefs.destination) if matches(record)]
    relevant.sort(key=lambda record: record.rating, reverse=True)
    return relevant[:MAX_CANDIDATES]


def build_prompt(prefs: Preferences, candidates: Sequence[Record]) -> str:
    travelers = f"{prefs.travelers} {'person' if prefs.travelers == 1 else 'people'}"
    interests = ", ".join(prefs.interests) or "General sightseeing"
    activity_lines = "\n".join(
        f"- [{r.id}] {r.name} ({r.local_name}) - {r.description} | Duration: {r.duration} "
        f"| Rating: {r.rating} | Tags: {r.tags}"
        for r in candidates
    )
    example = json.dumps(
        {
            "itinerary": [
                {
                    "day": 1,
                    "date": "Monday, December 16",
                    "theme": "Cultural Discovery",
                    "activities": [
                        {
                            "id": "activity_id",
                            "activity": "Activity Name",
                            "localName": "Local Name",
                            "description": "Description",
                            "location": "Location",
                            "duration": "Duration",
                            "rating": 4.5,
                            "tags": "tags",
                        }
                    ],
                }
            ]
        },
        indent=2,
    )

    return f"""You are a travel expert specializing in Indonesia. Create a {prefs.duration}-day itinerary for {prefs.destination} based on these preferences:

- Travelers: {travelers}
- Budget: {prefs.budget}
- Interests: {interests}
- Pace: {prefs.pace} ({PACE_RANGES[prefs.pace]} activities per day)

Available activities:
{activity_lines}

Please create a detailed itinerary in JSON format with this structure:
{example}

Rules:
1. Use ONLY activities from the provided list
2. Select activities that match the interests and budget
3. Ensure logical flow and proximity for each day
4. Vary the themes across days
5. Respect the pace preference
6. Generate exactly {prefs.duration} days
7. Return ONLY the JSON, no additional text"""


def parse_itinerary_text(text: str) -> list[dict]:
    """Extract the ``itinerary`` list from generated text.

    The text is parsed as JSON first; if that fails the first brace-delimited
    span is parsed instead, which tolerates prose around the object.

    Raises:
        RemoteGenerationError: no JSON object can be recovered or it has no
            ``itinerary`` list.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        match = JSON_OBJECT_PATTERN.search(text)
        if not match:
            raise RemoteGenerationError("No valid JSON found in AI response")
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise RemoteGenerationError("Invalid AI response format") from e

    itinerary = data.get("itinerary") if isinstance(data, dict) else None
    if not isinstance(itinerary, list):
        raise RemoteGenerationError("AI response has no itinerary list")
    return itinerary


def _format_days(raw_days: list, start: date) -> list[ItineraryDay]:
    days = []
    for index, raw_day in enumerate(raw_days):
        if not isinstance(raw_day, dict):
            raise RemoteGenerationError(f"Itinerary day {index + 1} is not an object")
        raw_activities = raw_day.get("activities")
        if not isinstance(raw_activities, list):
            raw_activities = []
        days.append(
            ItineraryDay(
                day=index + 1,
                date=format_day_date(start, index),
                theme=raw_day.get("theme") or f"Day {index + 1}",
                activities=[Record.from_mapping(item) for item in raw_activities if isinstance(item, dict)],
            )
        )
    return days


def fallback_itinerary(records: Sequence[Record], prefs: Preferences, start: date) -> list[ItineraryDay]:
    """Assign the best-rated destination records to days, PACE_ACTIVITIES per day."""
    per_day = PACE_ACTIVITIES[prefs.pace]
    ranked = sorted(_at_destination(records, prefs.destination), key=lambda record: record.rating, reverse=True)

    days = []
    for day in range(1, prefs.duration + 1):
        start_index = (day - 1) * per_day
        days.append(
            ItineraryDay(
                day=day,
                date=format_day_date(start, day - 1),
                theme=FALLBACK_THEMES[(day - 1) % len(FALLBACK_THEMES)],
                activities=list(ranked[start_index : start_index + per_day]),
            )
        )
    return days


class ItineraryPlanner:
    """Build a day-by-day plan from the activities of the current store."""

    def __init__(self, records: Sequence[Record], gateway: ArkGateway):
        self._records = records
        self._gateway = gateway

    async def plan(self, prefs: Preferences, start: date | None = None) -> ItineraryResult:
        """Plan with the remote service, falling back to the local plan on any failure."""
        start = start or date.today()
        candidates = candidate_records(self._records, prefs)

        try:
            text = await self._gateway.complete(build_prompt(prefs, candidates))
            days = _format_days(parse_itinerary_text(text), start)
        except RemoteGenerationError as e:
            logger.warning(f"Itinerary generation failed, using fallback: {e}")
            return ItineraryResult(
                days=fallback_itinerary(self._records, prefs, start),
                source="fallback",
                warning=f"Failed to generate itinerary ({e}). Using fallback recommendation system.",
            )

        logger.info(f"Generated {len(days)}-day itinerary for '{prefs.destination}'")
        return ItineraryResult(days=days, source="remote")
