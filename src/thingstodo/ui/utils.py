from thingstodo.models import Record

STAR_ICON = "★"


def format_rating(rating: float) -> str:
    """Format a rating as stars plus its value, e.g. "★★★★☆ 4.5"."""
    full = int(round(rating))
    return f"{STAR_ICON * full}{'☆' * (5 - full)} {rating:.1f}"


def format_tags(tags: str, limit: int = 3) -> str:
    """Show the first ``limit`` tags without their leading '#'."""
    return " ".join(tag.lstrip("#") for tag in tags.split()[:limit])


def format_record_title(record: Record) -> str:
    if record.local_name and record.local_name != record.name:
        return f"{record.name} ({record.local_name})"
    return record.name


def format_result_count(shown: int, filtered: int, location: str | None = None) -> str:
    """Format the "N of M activities" summary, optionally naming the location."""
    text = f"{shown} of {filtered} activities"
    if location:
        text += f" in {location}"
    return text


def truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: max(width - 1, 0)].rstrip() + "…"
