"""Date helpers for the filter endpoint (DD-MM-YYYY day strings)."""

from datetime import datetime, time

from synapse.utils.exceptions import QueryError

DAY_FORMAT = "%d-%m-%Y"

# Last representable instant of a day (stored timestamps keep microseconds);
# the end bound of a range is inclusive.
END_OF_DAY = time.max


def parse_day(value: str | None) -> datetime | None:
    """
    Parse a DD-MM-YYYY string to midnight of that day.

    Blank or missing values mean "unbounded" and return None.

    Raises:
        QueryError: If the value is not a valid DD-MM-YYYY date
    """
    if value is None or not value.strip():
        return None
    try:
        return datetime.strptime(value.strip(), DAY_FORMAT)
    except ValueError as e:
        raise QueryError(
            f"Invalid date '{value}', expected DD-MM-YYYY", context={"value": value}
        ) from e


def start_of_day(day: datetime) -> datetime:
    return datetime.combine(day.date(), time.min)


def end_of_day(day: datetime) -> datetime:
    return datetime.combine(day.date(), END_OF_DAY)
