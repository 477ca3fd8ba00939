"""
envelope.py - the API's uniform ``{"data": ...}`` wrapping.

Every CurseForge response wraps its payload the same way, so one unwrapper
serves all endpoints; only the decoder for the inner value changes:

    lookup = unwrap(text, FingerprintLookupResult.from_dict)
    sets = unwrap(text, list_of(ModVersionSet.from_dict))

Decoding needs nothing from the payload type beyond the decoder callable.
Encoding is only asked of it when `ResponseEnvelope.to_dict()` is called.
"""

from __future__ import annotations

import logging
from collections import abc
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, Tuple, TypeVar, Union

from .exceptions import ParseError
from .types_models import (
    FingerprintLookupResult,
    ModFile,
    ModVersionSet,
    ModVersionsResponse,
)
from .utils import parse_json_text

logger = logging.getLogger(__name__)

T = TypeVar("T")

Decoder = Callable[[Any], T]


def _inner(text: Union[str, bytes]) -> Any:
    parsed = parse_json_text(text, what="response")
    if not isinstance(parsed, abc.Mapping):
        raise ParseError(f"Response envelope must be a JSON object, got {type(parsed).__name__}")
    if "data" not in parsed:
        raise ParseError("Response envelope is missing 'data'")
    return parsed["data"]


def unwrap(text: Union[str, bytes], decoder: Decoder[T]) -> T:
    """
    Parse ``{"data": <payload>}`` and return the decoded payload.

    Parameters
    ----------
    text : str | bytes
        Raw response body.
    decoder : Callable[[Any], T]
        Turns the raw inner value into `T`; usually an entity's `from_dict`.

    Raises
    ------
    ParseError
        If the text is not JSON, is not an object, has no ``data`` key, or the
        decoder rejects the payload.
    """
    payload = _inner(text)
    try:
        return decoder(payload)
    except ParseError:
        raise
    except (TypeError, ValueError, KeyError) as exc:
        raise ParseError("Response payload does not match the expected shape", cause=exc) from exc


def list_of(decoder: Decoder[T]) -> Decoder[Tuple[T, ...]]:
    """Lift an item decoder to one that decodes a JSON array into a tuple."""
    def decode(value: Any) -> Tuple[T, ...]:
        if not isinstance(value, list):
            raise ParseError(f"Expected a JSON array, got {type(value).__name__}")
        return tuple(decoder(v) for v in value)
    return decode


@dataclass(frozen=True)
class ResponseEnvelope(Generic[T]):
    """Typed ``{"data": T}`` value, for callers that want to keep the wrapper."""
    data: T

    @classmethod
    def from_text(cls, text: Union[str, bytes], decoder: Decoder[T]) -> "ResponseEnvelope[T]":
        return cls(data=unwrap(text, decoder))

    def to_dict(self, encoder: Optional[Callable[[T], Any]] = None) -> Dict[str, Any]:
        """
        Encode back to ``{"data": ...}``.

        Without `encoder`, the payload's own ``to_dict`` is used; tuples of
        entities are encoded item by item.
        """
        if encoder is not None:
            return {"data": encoder(self.data)}
        return {"data": _encode(self.data)}


def _encode(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_encode(v) for v in value]
    raise TypeError(f"Cannot encode {type(value).__name__}; pass an encoder")


# Concrete endpoints
def parse_fingerprint_response(text: Union[str, bytes]) -> FingerprintLookupResult:
    """``{"data": {"exactMatches": [...]}}`` -> FingerprintLookupResult."""
    result = unwrap(text, FingerprintLookupResult.from_dict)
    logger.debug("Fingerprint response: %d exact match(es)", len(result.exact_matches))
    return result


def parse_versions_response(text: Union[str, bytes]) -> ModVersionsResponse:
    """``{"data": [ModVersionSet, ...]}`` -> ModVersionsResponse."""
    return ModVersionsResponse(data=unwrap(text, list_of(ModVersionSet.from_dict)))


def parse_file_response(text: Union[str, bytes]) -> ModFile:
    """``{"data": <ModFile>}`` as returned for a single file lookup."""
    return unwrap(text, ModFile.from_dict)


__all__ = [
    "Decoder", "ResponseEnvelope", "unwrap", "list_of",
    "parse_fingerprint_response", "parse_versions_response",
    "parse_file_response",
]
