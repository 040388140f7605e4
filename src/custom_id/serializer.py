"""Serialization pipeline.

Pipeline shape:
- compress fields (per encode options)
- render the field block
- compose prefix + block, enforce the length limit

Pure: the caller's mapping is never touched, so the same state can be
serialized repeatedly under different options.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from .compression import compress_fields
from .errors import LengthLimitError
from .fields import FIELD_SEPARATOR, render_field_block
from .options import EncodeOptions, get_default_encode_options

logger = logging.getLogger(__name__)

# Discord's limit for component custom IDs
MAX_LENGTH = 100


def compose(prefix: str, block: str) -> str:
    if not block:
        return prefix
    return f"{prefix}{FIELD_SEPARATOR}{block}"


def serialize(
    prefix: str,
    fields: Mapping[str, Any],
    options: Optional[EncodeOptions] = None,
    *,
    limit: int = MAX_LENGTH,
) -> str:
    """Encode ``prefix`` and ``fields`` into a single custom ID string.

    Uses the process-wide default options when ``options`` is None.

    Raises:
        LengthLimitError: if the result is longer than ``limit`` characters.
    """
    if options is None:
        options = get_default_encode_options()

    compressed = compress_fields(fields, options)
    out = compose(prefix, render_field_block(compressed))

    if len(out) > limit:
        logger.debug("custom ID over %d characters (%d): %s", limit, len(out), out)
        raise LengthLimitError(out, limit)

    logger.debug("serialized %d fields into %d characters", len(compressed), len(out))
    return out
