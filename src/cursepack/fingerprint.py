"""
Fingerprint match resolution.

A fingerprint lookup can come back with several exact matches. The first one
is the canonical file; no other ranking (download count, date) is applied.
An empty lookup is reported as `NoMatch` instead of an index error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from .exceptions import EmptyResultError
from .types_models import FingerprintLookupResult, ModFile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Found:
    file: ModFile
    found = True


@dataclass(frozen=True)
class NoMatch:
    error: EmptyResultError
    found = False


Resolution = Union[Found, NoMatch]


def resolve(lookup: FingerprintLookupResult) -> Resolution:
    """Return `Found` with the first exact match's file, or `NoMatch` if there is none."""
    if not lookup.exact_matches:
        logger.debug("Fingerprint lookup returned no exact matches")
        return NoMatch(EmptyResultError("Fingerprint lookup returned no exact matches"))
    return Found(lookup.exact_matches[0].file)


def resolve_or_raise(lookup: FingerprintLookupResult) -> ModFile:
    """Like `resolve`, but raises EmptyResultError when nothing matched."""
    result = resolve(lookup)
    if isinstance(result, NoMatch):
        raise result.error
    return result.file


__all__ = ["Found", "NoMatch", "Resolution", "resolve", "resolve_or_raise"]
