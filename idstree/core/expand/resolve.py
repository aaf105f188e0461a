from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Optional


logger = logging.getLogger(__name__)

DEFAULT_VARIANT = ""


def resolve_variant(
    ch: str,
    available: Mapping[str, str],
    preference: Sequence[str],
) -> Optional[tuple[str, str]]:
    """Pick the (tag, raw) pair that best matches ``preference``.

    - a single pair is returned whatever the preference says
    - otherwise the first preferred tag present wins
    - otherwise the default ("") tag, else the first pair in insertion order

    Falling through to the default/first pair is logged as a warning (soft fallback).
    """
    if not available:
        return None
    if len(available) == 1:
        return next(iter(available.items()))

    for tag in preference:
        if tag in available:
            return tag, available[tag]

    if DEFAULT_VARIANT in available:
        picked = (DEFAULT_VARIANT, available[DEFAULT_VARIANT])
    else:
        picked = next(iter(available.items()))
    logger.warning(
        "no (%s) variant for %r; using (%s)",
        ",".join(preference),
        ch,
        picked[0],
    )
    return picked


def extend_preference(preference: Sequence[str], variant: str) -> list[str]:
    """Move ``variant`` to the front of ``preference``, dropping its other occurrences."""
    if not variant:
        return list(preference)
    return [variant] + [v for v in preference if v != variant]
