"""
custom-id: keep small key/value state inside length-limited custom IDs.

    ban/confirm?user=42390489028347289&days=7

Everything before the first "?" is the prefix; the rest is the field block.
"""

__version__ = "0.1.0"

from custom_id.errors import CustomIdError, LengthLimitError
from custom_id.fields import EncodableValue, FieldValue
from custom_id.identifier import CustomId
from custom_id.options import (
    EncodeOptions,
    get_default_encode_options,
    reset_default_encode_options,
    set_default_encode_options,
)
from custom_id.serializer import MAX_LENGTH, serialize

__all__ = [
    "CustomId",
    "CustomIdError",
    "EncodableValue",
    "EncodeOptions",
    "FieldValue",
    "LengthLimitError",
    "MAX_LENGTH",
    "get_default_encode_options",
    "reset_default_encode_options",
    "serialize",
    "set_default_encode_options",
]
