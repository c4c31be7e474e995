from collections.abc import Sequence

from thingstodo.models import Page


def paginate(filtered: Sequence, cursor: int, page_size: int) -> Page:
    """Return the first ``cursor * page_size`` items and whether more remain."""
    assert cursor >= 1, f"cursor must be at least 1, got {cursor}"
    assert page_size >= 1, f"page_size must be at least 1, got {page_size}"

    end = cursor * page_size
    return Page(window=tuple(filtered[:end]), has_more=end < len(filtered))
