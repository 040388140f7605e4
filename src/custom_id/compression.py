"""Compression transforms.

Encode options compile into a list of transforms, each taking one
``(name, value)`` entry and returning it (possibly rewritten) or ``None`` to
drop it. Transforms run in order; the first ``None`` wins.

Supported transforms:
- skip falsy values (see :func:`custom_id.coerce.is_falsy`)
- rewrite ``True`` / ``"true"`` to ``"1"``
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple

from .coerce import is_falsy
from .options import EncodeOptions

logger = logging.getLogger(__name__)

Entry = Tuple[str, Any]
Transform = Callable[[Entry], Optional[Entry]]

TRUE_TOKEN = "1"


def skip_falsy(entry: Entry) -> Optional[Entry]:
    if is_falsy(entry[1]):
        return None
    return entry


def true_to_one(entry: Entry) -> Optional[Entry]:
    name, value = entry
    # identity check: 1 == True, and 1 must stay a number
    if value is True or value == "true":
        return name, TRUE_TOKEN
    return entry


def compile_options(options: EncodeOptions) -> list[Transform]:
    """Compile encode options into transforms."""
    transforms: list[Transform] = []
    if options.skip_falsy_values:
        transforms.append(skip_falsy)
    if options.convert_true_to_one:
        transforms.append(true_to_one)
    return transforms


def apply_transforms(entry: Entry, transforms: Iterable[Transform]) -> Optional[Entry]:
    """Apply transforms in order."""
    cur: Optional[Entry] = entry
    for t in transforms:
        cur = t(cur)
        if cur is None:
            return None
    return cur


def compress_fields(fields: Mapping[str, Any], options: EncodeOptions) -> Mapping[str, Any]:
    """Return a compressed copy of ``fields``. Never mutates the input.

    With every option off the input mapping itself is returned.
    """
    if options.is_lossless:
        return fields

    transforms = compile_options(options)
    out: Dict[str, Any] = {}
    for entry in fields.items():
        kept = apply_transforms(entry, transforms)
        if kept is not None:
            out[kept[0]] = kept[1]
    if len(out) != len(fields):
        logger.debug("compression dropped %d of %d fields", len(fields) - len(out), len(fields))
    return out
