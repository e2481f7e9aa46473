from archiver import config


class ShowsValidationError(ValueError):
    """Raised when a shows document does not have the expected structure."""


def validate_shows_document(data):
    """
    Check the structure of a decoded shows document.
    Returns None when valid, otherwise the first problem found.
    """
    if not isinstance(data, dict):
        return "Data is not an object"

    if not isinstance(data.get("upcoming"), list):
        return 'Missing or invalid "upcoming" array'

    if not isinstance(data.get("past"), list):
        return 'Missing or invalid "past" array'

    if not isinstance(data.get("settings"), dict):
        return 'Missing or invalid "settings" object'

    for index, show in enumerate(data["upcoming"], start=1):
        if not isinstance(show, dict):
            return f"Upcoming show #{index} is not an object"
        for field in config.REQUIRED_SHOW_FIELDS:
            if field not in show:
                return f"Upcoming show #{index} missing field: {field}"

    return None


def ensure_valid(data):
    error = validate_shows_document(data)
    if error:
        raise ShowsValidationError(f"Invalid shows.json structure: {error}")
    return data
