import csv
from pathlib import Path

from loguru import logger

from thingstodo.errors import DataLoadError
from thingstodo.models import Record, parse_rating

REQUIRED_COLUMNS = ("id", "activity", "localName", "description", "location", "duration", "tags", "rating", "image")


def _clean(value) -> str:
    """Strip a cell value, treating missing cells as empty."""
    if value is None:
        return ""
    return str(value).strip()


def _row_to_record(row: dict) -> Record:
    return Record(
        id=_clean(row.get("id")),
        name=_clean(row.get("activity")),
        local_name=_clean(row.get("localName")),
        description=_clean(row.get("description")),
        location=_clean(row.get("location")),
        duration=_clean(row.get("duration")),
        tags=_clean(row.get("tags")),
        rating=parse_rating(_clean(row.get("rating"))),
        image=_clean(row.get("image")) or None,
    )


def read_records(path: str | Path) -> list[Record]:
    """Read activity records from a CSV file with a header row.

    Rows lacking an ``id`` or ``activity`` are skipped. Rows repeating an
    ``id`` already seen are dropped, keeping the first.

    Raises:
        DataLoadError: the file is missing, unreadable, not valid CSV or
            lacks one of the required columns.
    """
    path = Path(path)
    logger.info(f"Loading activities from '{path}'")

    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            reader = csv.DictReader(f)
            columns = reader.fieldnames or []
            missing = [column for column in REQUIRED_COLUMNS if column not in columns]
            if missing:
                raise DataLoadError(str(path), f"missing columns: {', '.join(missing)}")

            records = []
            seen_ids = set()
            skipped = 0
            for row in reader:
                if not _clean(row.get("id")) or not _clean(row.get("activity")):
                    skipped += 1
                    continue

                record = _row_to_record(row)
                if record.id in seen_ids:
                    logger.warning(f"Dropping duplicate activity id '{record.id}'")
                    continue
                seen_ids.add(record.id)
                records.append(record)
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise DataLoadError(str(path), str(e)) from e

    if skipped:
        logger.warning(f"Skipped {skipped} incomplete rows in '{path}'")
    logger.info(f"Loaded {len(records)} activities from '{path}'")

    return records
