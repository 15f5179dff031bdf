import base64
import binascii
import json

from user_service.errors import ValidationFailed
from user_service.utils import decimal_to_native

KEY_ATTRIBUTES = {"PK", "SK"}


def encode_next_key(last_evaluated_key):
    """Turn a LastEvaluatedKey into an opaque, URL-safe cursor."""
    if not last_evaluated_key:
        return None
    raw = json.dumps(decimal_to_native(last_evaluated_key), separators=(",", ":"))
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii")


def decode_next_key(next_key):
    if not next_key:
        return None
    try:
        raw = base64.urlsafe_b64decode(next_key.encode("ascii"))
        key = json.loads(raw)
    except (binascii.Error, UnicodeError, ValueError) as e:
        raise ValidationFailed("Invalid nextKey") from e
    # Only a primary key of this table may be used as ExclusiveStartKey
    if not isinstance(key, dict) or set(key) != KEY_ATTRIBUTES:
        raise ValidationFailed("Invalid nextKey")
    if not all(isinstance(v, str) and v for v in key.values()):
        raise ValidationFailed("Invalid nextKey")
    return key
