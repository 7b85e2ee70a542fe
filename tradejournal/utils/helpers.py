import uuid
from datetime import datetime, timezone


def generate_id():
    return uuid.uuid4().hex


def utcnow():
    return datetime.utcnow()


def to_naive_utc(value):
    """Normalize a datetime to naive UTC so stored and computed timestamps compare."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
