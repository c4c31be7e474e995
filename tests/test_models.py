from thingstodo.models import Record, extract_city, parse_rating
from thingstodo.ui.utils import format_rating, format_result_count, format_tags, truncate


def test_extract_city():
    assert extract_city("Ubud, Bali") == "Bali"
    assert extract_city("Central Jakarta") == "Jakarta"
    assert extract_city("Somewhere") == "Somewhere"


def test_parse_rating():
    assert parse_rating(4.5) == 4.5
    assert parse_rating("4.2/5") == 4.2
    assert parse_rating("7") == 5.0
    assert parse_rating(None) == 0.0


def test_record_from_mapping():
    record = Record.from_mapping(
        {"id": 7, "activity": "Monas", "localName": "Monumen Nasional", "rating": "4.4", "tags": "#history"}
    )
    assert record.id == "7"
    assert record.name == "Monas"
    assert record.local_name == "Monumen Nasional"
    assert record.rating == 4.4
    assert record.tag_list == ["history"]
    assert Record.from_mapping(record.to_mapping()) == record


def test_format_helpers():
    assert format_rating(4.0) == "★★★★☆ 4.0"
    assert format_tags("#a #b #c #d") == "a b c"
    assert format_result_count(9, 20) == "9 of 20 activities"
    assert format_result_count(9, 20, "Bali") == "9 of 20 activities in Bali"
    assert truncate("abcdef", 4) == "abc…"
    assert truncate("abc", 4) == "abc"
