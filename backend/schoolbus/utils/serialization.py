from enum import Enum
from datetime import datetime, date

def isoformat(value):
    return value.isoformat() if value is not None else None

def serialize(value):
    """Turn enums, dates and nested containers into JSON-friendly values."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: serialize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize(item) for item in value]
    return value
