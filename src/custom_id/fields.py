"""Field block grammar.

A custom ID carries its fields after a ``?``, query-string style:

    <prefix>?<name>=<value>&<name>=<v1>,<v2>,<v3>

Example:
    ban/confirm?user=42390489028347289&roles=1,2

Design notes:
- No percent-encoding in either direction; values must already be safe for
  the channel the ID travels through.
- Arrays are comma-joined under one name, so a literal comma in a string
  value reads back as an array. This ambiguity is accepted.
- Decoding never raises: malformed pairs are dropped.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Mapping, Union

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "?"
PAIR_SEPARATOR = "&"
KEY_VALUE_SEPARATOR = "="
ARRAY_SEPARATOR = ","

# stored/parsed form
FieldValue = Union[str, List[str]]

Scalar = Union[bool, int, float, str, None]

# what set_field accepts before encoding
EncodableValue = Union[Scalar, List[Union[bool, int, float, str, None]]]


def _decode_value(raw: str) -> FieldValue:
    if ARRAY_SEPARATOR in raw:
        return raw.split(ARRAY_SEPARATOR)
    return raw


def parse_field_block(block: str) -> Dict[str, FieldValue]:
    """Decode a field block (the text after ``?``) into a mapping.

    Values are always strings or lists of strings. A name repeated in the
    block collects its values into one list, in order.
    """
    fields: Dict[str, FieldValue] = {}
    if not block:
        return fields

    for pair in block.split(PAIR_SEPARATOR):
        if not pair:
            continue
        name, _, raw = pair.partition(KEY_VALUE_SEPARATOR)
        if not name:
            logger.debug("dropping field pair with empty name: %r", pair)
            continue

        value = _decode_value(raw)
        if name in fields:
            prev = fields[name]
            merged = list(prev) if isinstance(prev, list) else [prev]
            merged.extend(value if isinstance(value, list) else [value])
            fields[name] = merged
        else:
            fields[name] = value
    return fields


def render_scalar(value: Any) -> str:
    """Render one scalar the way other clients of the format spell it.

    Non-integral floats use Python's ``repr``, so exponent forms differ from
    JavaScript's ``String()`` (``1e-07`` vs ``1e-7``), and large integral
    floats are written out in full (``1e21`` as 22 digits, not ``1e+21``).
    Both read back to the same number.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def render_field_block(fields: Mapping[str, Any]) -> str:
    """Encode a mapping as a field block, without the leading ``?``.

    ``None`` values and empty arrays are never written.
    """
    pairs: list[str] = []
    for name, value in fields.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            if not value:
                continue
            rendered = ARRAY_SEPARATOR.join(render_scalar(v) for v in value)
        else:
            rendered = render_scalar(value)
        pairs.append(f"{name}{KEY_VALUE_SEPARATOR}{rendered}")
    return PAIR_SEPARATOR.join(pairs)
