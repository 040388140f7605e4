"""Encode options and the process-wide default.

Pass an :class:`EncodeOptions` to ``serialize`` explicitly where you can.
The module-level default exists for applications that want to flip a switch
once at startup; it is plain global state and is not locked.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EncodeOptions:
    """Lossy compression switches applied when a custom ID is serialized.

    skip_falsy_values:
        Leave out fields whose value is ``""``, ``0``, ``False``, ``None``,
        ``nan`` or an empty list. Saves space, but after a round trip a field
        set to ``""`` is indistinguishable from one never set. The coercing
        getters hide the difference; raw ``get_fields()`` readers see it.
    convert_true_to_one:
        Write ``True`` and ``"true"`` as ``1``. ``get_boolean_field`` reads
        both spellings as true.
    """
    skip_falsy_values: bool = True
    convert_true_to_one: bool = False

    @property
    def is_lossless(self) -> bool:
        return not (self.skip_falsy_values or self.convert_true_to_one)

    def replace(self, **changes: bool) -> EncodeOptions:
        return dataclasses.replace(self, **changes)


_default_options = EncodeOptions()


def get_default_encode_options() -> EncodeOptions:
    return _default_options


def set_default_encode_options(options: EncodeOptions) -> EncodeOptions:
    """Replace the process-wide default. Returns the previous default."""
    global _default_options
    if not isinstance(options, EncodeOptions):
        raise TypeError(f"expected EncodeOptions, got {type(options).__name__}")
    previous = _default_options
    _default_options = options
    logger.debug("default encode options changed: %r -> %r", previous, options)
    return previous


def reset_default_encode_options() -> EncodeOptions:
    return set_default_encode_options(EncodeOptions())
