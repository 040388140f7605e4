"""The CustomId value: an immutable prefix plus a mutable field mapping.

Custom IDs are echoed back by the client and can be edited by users. Never
put anything in them you would not accept from an untrusted source.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from .coerce import Number, is_number, to_number
from .fields import FIELD_SEPARATOR, EncodableValue, parse_field_block
from .options import EncodeOptions
from .serializer import MAX_LENGTH, serialize

PATH_SEPARATOR = "/"


class CustomId:
    """Small key/value state stored inside a length-limited custom ID.

    Usage:
        cid = CustomId("ban/confirm").set_field("user", "4239").set_field("days", 7)
        cid.serialize()                 # 'ban/confirm?user=4239&days=7'

        back = CustomId("ban/confirm?user=4239&days=7")
        back.segments                   # ['ban', 'confirm']
        back.get_numeric_field("days")  # 7

    The prefix (everything before the first ``?``) is fixed for the life of
    the instance. To change it, build a new one and merge the fields over,
    or use :meth:`with_prefix`.

    Construction never raises. Getters never raise either; a missing or
    mistyped field reads as ``""``, ``[]``, ``nan`` or ``False``.
    """

    def __init__(self, raw: str = "") -> None:
        prefix, sep, block = raw.partition(FIELD_SEPARATOR)
        self._prefix = prefix
        self._fields: Dict[str, Any] = parse_field_block(block) if sep else {}
        # empty segments from leading, trailing or doubled '/' are kept
        self._segments = tuple(prefix.split(PATH_SEPARATOR))

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def segments(self) -> List[str]:
        return list(self._segments)

    # names used by older callers
    raw_id = prefix
    path_parts = segments

    def __repr__(self) -> str:
        return f"CustomId(prefix={self._prefix!r}, fields={self._fields!r})"

    def __str__(self) -> str:
        return self.serialize()

    # ------------------------------------------------------------------
    # Mutators (all return self)
    # ------------------------------------------------------------------

    def set_field(self, name: str, value: EncodableValue) -> CustomId:
        """Add or overwrite one field.

        Keep names and values short; the length limit is only checked when
        serializing.
        """
        if isinstance(value, (list, tuple)):
            value = list(value)
        self._fields[name] = value
        return self

    def set_fields(self, fields: Mapping[str, EncodableValue]) -> CustomId:
        """Add many fields, overwriting existing ones with the same name."""
        for name, value in fields.items():
            self.set_field(name, value)
        return self

    def remove_field(self, name: str) -> CustomId:
        self._fields.pop(name, None)
        return self

    def merge_from(self, other: CustomId) -> CustomId:
        """Copy every field of ``other`` into this ID; ``other`` wins on conflict."""
        for name, value in other._fields.items():
            self.set_field(name, value)
        return self

    add_field = set_field
    add_fields = set_fields
    copy_fields_from = merge_from

    def with_prefix(self, prefix: str) -> CustomId:
        """Return a new CustomId with ``prefix`` and a copy of these fields.

        Fields parsed from a ``?`` block in ``prefix`` lose to ours.
        """
        return CustomId(prefix).merge_from(self)

    # ------------------------------------------------------------------
    # Readers
    # ------------------------------------------------------------------

    def get_fields(self) -> Mapping[str, Any]:
        """Read-only view of the raw fields."""
        return MappingProxyType(self._fields)

    def get_string_field(self, name: str) -> str:
        value = self._fields.get(name)
        return value if isinstance(value, str) else ""

    def get_string_array_field(self, name: str) -> List[Any]:
        """The field as a list: arrays as stored, scalars wrapped, absent as ``[]``."""
        value = self._fields.get(name)
        if value is None:
            return []
        if isinstance(value, list):
            return value
        return [value]

    def get_numeric_field(self, name: str, as_float: bool = False, base: int = 10) -> Number:
        """The field as a number, or ``nan``.

        Strings are parsed by prefix, so ``"10.5"`` reads as ``10`` unless
        ``as_float`` is set. ``base`` is ignored for floats.
        """
        return to_number(self._fields.get(name), as_float, base)

    def get_numeric_array_field(
        self, name: str, as_float: bool = False, base: int = 10
    ) -> List[Number]:
        """The field as a list of numbers; unparseable entries become ``nan``."""
        return [to_number(v, as_float, base) for v in self.get_string_array_field(name)]

    def get_boolean_field(self, name: str) -> bool:
        """True only for ``True``, ``1``, ``"true"`` and ``"1"``."""
        value = self._fields.get(name)
        if value is True or value in ("true", "1"):
            return True
        return is_number(value) and value == 1

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def serialize(
        self, options: Optional[EncodeOptions] = None, *, limit: int = MAX_LENGTH
    ) -> str:
        """Encode this ID; see :func:`custom_id.serializer.serialize`.

        Raises:
            LengthLimitError: if the result is longer than ``limit``.
        """
        return serialize(self._prefix, self._fields, options, limit=limit)
