"""Custom JSON encoding utilities"""
import dataclasses
import enum
import json
from datetime import date, datetime


class DateTimeEncoder(json.JSONEncoder):
    """Custom JSON encoder that handles dates, enums and dataclass values"""
    def default(self, obj):
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        if isinstance(obj, enum.Enum):
            return obj.value
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return dataclasses.asdict(obj)
        return super().default(obj)


def json_dumps(obj, **kwargs):
    """Helper function to dump JSON with date/enum/dataclass handling"""
    return json.dumps(obj, cls=DateTimeEncoder, **kwargs)


def to_jsonable(obj):
    """Round-trip through the encoder to get plain dicts/lists/strings"""
    return json.loads(json_dumps(obj))
