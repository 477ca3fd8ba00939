"""
cursepack package initializer.

This file exposes the public API for the package:
 - typed models (ModPack, ModFile, FingerprintLookupResult, ...)
 - load_pack / loads_pack / dumps_pack (manifest loading)
 - unwrap and the response parsers (API envelope handling)
 - resolve (fingerprint match resolution)
 - exceptions

Importing the package does no I/O and installs no log handlers.
"""

__version__ = "0.1.0"

from .exceptions import *  # noqa: F401,F403
from .types_models import (
    FingerprintLookupResult,
    FingerprintMatch,
    ModFile,
    ModFileRef,
    ModLogo,
    ModPack,
    ModVersionSet,
    ModVersionsResponse,
)
from .envelope import (
    ResponseEnvelope,
    list_of,
    parse_file_response,
    parse_fingerprint_response,
    parse_versions_response,
    unwrap,
)
from .fingerprint import Found, NoMatch, resolve, resolve_or_raise
from .loader import Failure, Success, dumps_pack, load_pack, loads_pack
from .utils import logger_setup

__all__ = [
    "__version__",
    "CursePackError", "ReadError", "ParseError", "EmptyResultError",
    "ModFileRef", "ModPack", "ModLogo", "ModFile",
    "FingerprintMatch", "FingerprintLookupResult",
    "ModVersionSet", "ModVersionsResponse",
    "ResponseEnvelope", "unwrap", "list_of",
    "parse_fingerprint_response", "parse_versions_response", "parse_file_response",
    "Found", "NoMatch", "resolve", "resolve_or_raise",
    "Success", "Failure", "load_pack", "loads_pack", "dumps_pack",
    "logger_setup",
]
