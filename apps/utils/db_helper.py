from bson import ObjectId
from datetime import datetime


def to_object_id(value):
    """Convert a 24-hex string to ObjectId, leave anything else as given"""
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return value


def id_variants(value):
    """Both stored forms of a reference: ObjectId and its string"""
    object_id = to_object_id(value)
    if isinstance(object_id, ObjectId):
        return [object_id, str(object_id)]
    return [value]


def convert_object_ids(document):
    """Convert ObjectIds in MongoDB document to strings for JSON serialization"""
    if document is None:
        return None

    result = {}
    for key, value in document.items():
        result[key] = _convert_value(value)
    return result


def _convert_value(value):
    # Convert ObjectId to string
    if isinstance(value, ObjectId):
        return str(value)
    # Convert datetime to ISO format
    if isinstance(value, datetime):
        return value.isoformat()
    # Recursively convert nested dictionaries
    if isinstance(value, dict):
        return convert_object_ids(value)
    if isinstance(value, (list, tuple)):
        return [_convert_value(item) for item in value]
    return value
