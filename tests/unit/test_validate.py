import pytest

from archiver.pipeline.validate import ShowsValidationError, ensure_valid, validate_shows_document


def make_document(**overrides):
    data = {
        "upcoming": [
            {"date": "Dec 4, 2025", "time": "20:00", "venue": "Paradiso", "city": "Amsterdam", "status": "tickets"}
        ],
        "past": [],
        "settings": {"showPastShows": True},
    }
    data.update(overrides)
    return data


def test_valid_document():
    assert validate_shows_document(make_document()) is None


def test_rejects_non_object():
    assert validate_shows_document(None) == "Data is not an object"
    assert validate_shows_document([]) == "Data is not an object"


def test_checks_run_in_order():
    data = make_document()
    del data["upcoming"]
    del data["settings"]
    assert validate_shows_document(data) == 'Missing or invalid "upcoming" array'

    assert validate_shows_document(make_document(past={})) == 'Missing or invalid "past" array'
    assert validate_shows_document(make_document(settings=[])) == 'Missing or invalid "settings" object'


def test_reports_first_missing_field():
    data = make_document()
    data["upcoming"].append({"date": "Dec 5, 2025", "venue": "013"})
    assert validate_shows_document(data) == "Upcoming show #2 missing field: time"


def test_extra_fields_are_allowed():
    data = make_document()
    data["upcoming"][0]["ticketUrl"] = "https://example.com"
    data["upcoming"][0]["support"] = "Someone"
    assert validate_shows_document(data) is None


def test_ensure_valid_raises():
    with pytest.raises(ShowsValidationError, match="missing field: status"):
        ensure_valid(make_document(upcoming=[{"date": "", "time": "", "venue": "", "city": ""}]))
