import csv

import pytest

from thingstodo.gateways.csv_source import REQUIRED_COLUMNS
from thingstodo.models import Record
from thingstodo.services.record_store import RecordStore


class ManualHandle:
    def __init__(self, when, callback):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Scheduler driven by an explicit clock instead of an event loop."""

    def __init__(self):
        self.now = 0.0
        self.handles = []

    def call_later(self, delay, callback):
        handle = ManualHandle(self.now + delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self):
        return [handle for handle in self.handles if not handle.cancelled]

    def advance(self, seconds):
        """Move the clock forward, firing due callbacks in time order."""
        target = self.now + seconds
        while True:
            due = [handle for handle in self.pending if handle.when <= target]
            if not due:
                break
            handle = min(due, key=lambda h: h.when)
            self.handles.remove(handle)
            self.now = handle.when
            handle.callback()
        self.now = target


def make_record(index, **overrides):
    fields = {
        "id": f"act-{index}",
        "name": f"Activity {index}",
        "local_name": "",
        "description": f"Description {index}",
        "location": "Ubud, Bali",
        "duration": "2-3 hours",
        "tags": "#culture",
        "rating": 4.0,
    }
    fields.update(overrides)
    return Record(**fields)


def write_csv(path, rows, columns=REQUIRED_COLUMNS):
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=list(columns), extrasaction="ignore")
        writer.writeheader()
        for row in rows:
            writer.writerow({column: row.get(column, "") for column in columns})
    return path


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def records():
    return [
        make_record(1, name="Uluwatu Temple", location="Uluwatu, Bali", duration="2-3 hours", tags="#temple #sunset", rating=4.8),
        make_record(2, name="Tegallalang Rice Terrace", location="Ubud, Bali", duration="1-2 hours", tags="#nature", rating=4.5),
        make_record(3, name="National Monument", location="Central Jakarta", duration="1-2 hours", tags="#history", rating=4.2),
        make_record(4, name="Kota Tua Walk", location="West Jakarta", duration="Full day", tags="#history #food", rating=3.9),
        make_record(5, name="Borobudur Sunrise", location="Magelang, Yogyakarta", duration="Full day", tags="#temple", rating=4.9),
        make_record(6, name="Gili Snorkeling", location="Gili Trawangan, Lombok", duration="3-4 hours", tags="#beach", rating=4.6),
    ]


@pytest.fixture
def store(records):
    return RecordStore(records)


@pytest.fixture
def activities_csv(tmp_path):
    rows = [
        {
            "id": "1",
            "activity": "Uluwatu Temple",
            "localName": "Pura Luhur Uluwatu",
            "description": "Clifftop temple",
            "location": "Uluwatu, Bali",
            "duration": "2-3 hours",
            "tags": "#temple #sunset",
            "rating": "4.8",
            "image": "uluwatu.jpg",
        },
        {
            "id": "2",
            "activity": "National Monument",
            "localName": "Monas",
            "description": "Landmark tower",
            "location": "Central Jakarta",
            "duration": "1-2 hours",
            "tags": "#history",
            "rating": "4.2",
            "image": "",
        },
    ]
    return write_csv(tmp_path / "activities.csv", rows)
