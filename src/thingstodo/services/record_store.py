from collections import Counter
from collections.abc import Iterable, Sequence
from pathlib import Path

from loguru import logger

from thingstodo.errors import DataLoadError
from thingstodo.gateways.csv_source import read_records
from thingstodo.models import Record


class RecordStore(Sequence):
    """Read-only, ordered collection of the activities for one session."""

    def __init__(self, records: Iterable[Record] = (), load_error: DataLoadError | None = None):
        self._records = tuple(records)
        self.load_error = load_error

    @classmethod
    def load(cls, path: str | Path) -> "RecordStore":
        """Load the store from a CSV file.

        Never raises: when the source cannot be read the store is empty and
        ``load_error`` holds the failure for the caller to surface.
        """
        try:
            return cls(read_records(path))
        except DataLoadError as e:
            logger.error(str(e))
            return cls((), load_error=e)

    def __getitem__(self, index):
        return self._records[index]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    @property
    def records(self) -> tuple[Record, ...]:
        return self._records

    def by_rating(self) -> list[Record]:
        """Records ordered by rating, highest first. Ties keep source order."""
        return sorted(self._records, key=lambda record: record.rating, reverse=True)

    def cities(self) -> list[tuple[str, int]]:
        """Cities with their activity counts, most activities first."""
        counts = Counter(record.city for record in self._records if record.city)
        return sorted(counts.items(), key=lambda item: (-item[1], item[0]))

    def top_tags(self, limit: int) -> list[str]:
        counts = Counter(tag for record in self._records for tag in record.tag_list)
        return [tag for tag, _ in counts.most_common(limit)]
