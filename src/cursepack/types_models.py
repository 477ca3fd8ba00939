"""
types_models.py

Typed, immutable dataclasses for the CurseForge pack manifest and API objects.

Purpose
-------
- Provide typed, documented value containers for manifests, file records,
  version lists and fingerprint lookups.
- Supply `from_dict()` factories that validate raw JSON (camelCase keys) and
  `to_dict()` methods that emit the same shape back.

Notes
-----
- All classes are frozen; sequences are stored as tuples. "Updating" a value
  means building a new one (``dataclasses.replace``).
- Validation is about presence and JSON type only. Unknown keys are ignored.
"""

from __future__ import annotations

import logging
from collections import abc
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import PurePath
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, TypeVar

import dateutil.parser as _dateutil_parser
from packaging.version import InvalidVersion, Version

from .exceptions import ParseError
from .utils import parse_version

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


# Field readers. Each raises ParseError naming the entity and key.
def _mapping(d: Any, entity: str) -> Mapping[str, Any]:
    if not isinstance(d, abc.Mapping):
        raise ParseError(f"{entity}: expected a JSON object, got {type(d).__name__}")
    return d


def _uint(d: Mapping[str, Any], key: str, entity: str, *, optional: bool = False) -> Optional[int]:
    value = d.get(key, _MISSING)
    if value is _MISSING or value is None:
        if optional:
            return None
        raise ParseError(f"{entity}: missing required field '{key}'")
    # bool is an int subclass; JSON true/false is not a number here
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ParseError(f"{entity}: field '{key}' must be an unsigned integer, got {value!r}")
    return value


def _str(d: Mapping[str, Any], key: str, entity: str, *, optional: bool = False) -> Optional[str]:
    value = d.get(key, _MISSING)
    if value is _MISSING or value is None:
        if optional:
            return None
        raise ParseError(f"{entity}: missing required field '{key}'")
    if not isinstance(value, str):
        raise ParseError(f"{entity}: field '{key}' must be a string, got {type(value).__name__}")
    return value


def _seq(d: Mapping[str, Any], key: str, entity: str, item: Callable[[Any], T]) -> Tuple[T, ...]:
    value = d.get(key, _MISSING)
    if value is _MISSING or value is None:
        raise ParseError(f"{entity}: missing required field '{key}'")
    if not isinstance(value, list):
        raise ParseError(f"{entity}: field '{key}' must be an array, got {type(value).__name__}")
    return tuple(item(v) for v in value)


def _string_item(entity: str, key: str) -> Callable[[Any], str]:
    def check(v: Any) -> str:
        if not isinstance(v, str):
            raise ParseError(f"{entity}: every entry of '{key}' must be a string, got {v!r}")
        return v
    return check


# Pack manifest
@dataclass(frozen=True)
class ModFileRef:
    """
    One entry in the manifest's 'files' list: a specific file of a specific project.

    Fields:
      - project_id: CurseForge project id (``projectID``)
      - file_id: chosen file id for that project (``fileID``)
    """
    project_id: int
    file_id: int

    @classmethod
    def from_dict(cls, d: Any) -> "ModFileRef":
        d = _mapping(d, "ModFileRef")
        return cls(
            project_id=_uint(d, "projectID", "ModFileRef"),
            file_id=_uint(d, "fileID", "ModFileRef"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"projectID": self.project_id, "fileID": self.file_id}


@dataclass(frozen=True)
class ModPack:
    """
    A local modpack manifest.

    `files` keeps the declaration order of the manifest; that order is the
    load order, so it survives parsing and serialization untouched.
    Duplicate references are not collapsed.
    """
    name: str
    author: str
    files: Tuple[ModFileRef, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "files", tuple(self.files))

    @classmethod
    def from_dict(cls, d: Any) -> "ModPack":
        d = _mapping(d, "ModPack")
        return cls(
            name=_str(d, "name", "ModPack"),
            author=_str(d, "author", "ModPack"),
            files=_seq(d, "files", "ModPack", ModFileRef.from_dict),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "author": self.author,
            "files": [f.to_dict() for f in self.files],
        }

    def __repr__(self) -> str:
        return f"<ModPack name={self.name!r} author={self.author!r} files={len(self.files)}>"


# API objects
@dataclass(frozen=True)
class ModLogo:
    """Logo image metadata for a mod. Only shares `mod_id` with file records."""
    id: int
    mod_id: int
    thumbnail_url: str
    url: str

    @classmethod
    def from_dict(cls, d: Any) -> "ModLogo":
        d = _mapping(d, "ModLogo")
        return cls(
            id=_uint(d, "id", "ModLogo"),
            mod_id=_uint(d, "modId", "ModLogo"),
            thumbnail_url=_str(d, "thumbnailUrl", "ModLogo"),
            url=_str(d, "url", "ModLogo"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "modId": self.mod_id,
            "thumbnailUrl": self.thumbnail_url,
            "url": self.url,
        }


@dataclass(frozen=True)
class ModFile:
    """
    Typed representation of a mod's file record (a single uploaded file).

    Important fields:
      - id: file id
      - mod_id: project id this file belongs to
      - file_name: server filename (used for saving)
      - file_length: file size in bytes
      - game_versions: version strings and loader tags, as listed by the API

    `game_id` and `download_url` are optional in the API but never read as
    None here: a missing or null value becomes 0 / "" when the object is
    built, whether through `from_dict` or the constructor. Callers compare
    ``game_id == 0`` to mean "unset".

    `raw` keeps the source mapping for fields this model does not cover
    (hashes, dependencies ...) as a read-only view; it is excluded from equality.
    """
    id: int
    mod_id: int
    display_name: str
    file_name: PurePath
    file_length: int
    game_id: int = 0
    download_url: str = ""
    game_versions: Tuple[str, ...] = ()
    file_date: Optional[str] = None
    raw: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}), repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.game_id is None:
            object.__setattr__(self, "game_id", 0)
        if self.download_url is None:
            object.__setattr__(self, "download_url", "")
        if not isinstance(self.file_name, PurePath):
            object.__setattr__(self, "file_name", PurePath(self.file_name))
        if isinstance(self.game_versions, str):
            object.__setattr__(self, "game_versions", (self.game_versions,))
        else:
            object.__setattr__(self, "game_versions", tuple(self.game_versions))
        if not isinstance(self.raw, MappingProxyType):
            object.__setattr__(self, "raw", MappingProxyType(dict(self.raw)))

    @classmethod
    def from_dict(cls, d: Any) -> "ModFile":
        d = _mapping(d, "ModFile")
        return cls(
            id=_uint(d, "id", "ModFile"),
            game_id=_uint(d, "gameId", "ModFile", optional=True),
            mod_id=_uint(d, "modId", "ModFile"),
            display_name=_str(d, "displayName", "ModFile"),
            file_name=PurePath(_str(d, "fileName", "ModFile")),
            download_url=_str(d, "downloadUrl", "ModFile", optional=True),
            file_length=_uint(d, "fileLength", "ModFile"),
            game_versions=_seq(d, "gameVersions", "ModFile", _string_item("ModFile", "gameVersions")),
            file_date=_str(d, "fileDate", "ModFile", optional=True),
            raw=MappingProxyType(dict(d)),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "gameId": self.game_id,
            "modId": self.mod_id,
            "displayName": self.display_name,
            "fileName": str(self.file_name),
            "downloadUrl": self.download_url,
            "fileLength": self.file_length,
            "gameVersions": list(self.game_versions),
        }
        if self.file_date is not None:
            out["fileDate"] = self.file_date
        return out

    def supports(self, game_version: str) -> bool:
        """True when `game_version` is listed verbatim in `game_versions`."""
        return game_version in self.game_versions

    def newest_game_version(self) -> Optional[str]:
        """
        Highest entry of `game_versions` that parses as a version.

        Loader tags ("Forge", "Fabric", "Client") are skipped. Returns None when
        nothing in the list is a version.
        """
        best: Optional[Tuple[Version, str]] = None
        for raw_version in self.game_versions:
            try:
                parsed = parse_version(raw_version)
            except InvalidVersion:
                continue
            if best is None or parsed > best[0]:
                best = (parsed, raw_version)
        return best[1] if best else None

    def file_date_dt(self) -> Optional[datetime]:
        """
        Parse `file_date` into a datetime if possible.

        Returns None when file_date is empty or unparseable.
        """
        if not self.file_date:
            return None
        try:
            return _dateutil_parser.isoparse(self.file_date)
        except (ValueError, OverflowError):
            logger.debug("Unparseable fileDate %r on file %s", self.file_date, self.id)
            return None

    def __repr__(self) -> str:
        return f"<ModFile id={self.id} fileName={str(self.file_name)!r} size={self.file_length}>"


@dataclass(frozen=True)
class FingerprintMatch:
    """One exact match of a fingerprint lookup."""
    id: int
    file: ModFile

    @classmethod
    def from_dict(cls, d: Any) -> "FingerprintMatch":
        d = _mapping(d, "FingerprintMatch")
        if d.get("file") is None:
            raise ParseError("FingerprintMatch: missing required field 'file'")
        return cls(id=_uint(d, "id", "FingerprintMatch"), file=ModFile.from_dict(d["file"]))

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "file": self.file.to_dict()}


@dataclass(frozen=True)
class FingerprintLookupResult:
    """
    Payload of a fingerprint lookup response.

    The service may return several exact matches; only the first is
    authoritative (see `cursepack.fingerprint.resolve`).
    """
    exact_matches: Tuple[FingerprintMatch, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "exact_matches", tuple(self.exact_matches))

    @classmethod
    def from_dict(cls, d: Any) -> "FingerprintLookupResult":
        d = _mapping(d, "FingerprintLookupResult")
        return cls(exact_matches=_seq(d, "exactMatches", "FingerprintLookupResult", FingerprintMatch.from_dict))

    def to_dict(self) -> Dict[str, Any]:
        return {"exactMatches": [m.to_dict() for m in self.exact_matches]}


@dataclass(frozen=True)
class ModVersionSet:
    """
    A mod together with its latest files, as listed by the versions endpoint.
    """
    id: int
    game_id: int
    name: str
    slug: str
    download_count: int
    latest_files: Tuple[ModFile, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "latest_files", tuple(self.latest_files))

    @classmethod
    def from_dict(cls, d: Any) -> "ModVersionSet":
        d = _mapping(d, "ModVersionSet")
        return cls(
            id=_uint(d, "id", "ModVersionSet"),
            game_id=_uint(d, "gameId", "ModVersionSet"),
            name=_str(d, "name", "ModVersionSet"),
            slug=_str(d, "slug", "ModVersionSet"),
            download_count=_uint(d, "downloadCount", "ModVersionSet"),
            latest_files=_seq(d, "latestFiles", "ModVersionSet", ModFile.from_dict),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "gameId": self.game_id,
            "name": self.name,
            "slug": self.slug,
            "downloadCount": self.download_count,
            "latestFiles": [f.to_dict() for f in self.latest_files],
        }

    def files_for_game_version(self, game_version: str) -> List[ModFile]:
        """Latest files that list `game_version`, in their original order."""
        return [f for f in self.latest_files if f.supports(game_version)]


@dataclass(frozen=True)
class ModVersionsResponse:
    """Top-level ``{"data": [ModVersionSet, ...]}`` shape of the versions endpoint."""
    data: Tuple[ModVersionSet, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", tuple(self.data))

    @classmethod
    def from_dict(cls, d: Any) -> "ModVersionsResponse":
        d = _mapping(d, "ModVersionsResponse")
        return cls(data=_seq(d, "data", "ModVersionsResponse", ModVersionSet.from_dict))

    def to_dict(self) -> Dict[str, Any]:
        return {"data": [v.to_dict() for v in self.data]}


__all__ = [
    "ModFileRef", "ModPack",
    "ModLogo", "ModFile",
    "FingerprintMatch", "FingerprintLookupResult",
    "ModVersionSet", "ModVersionsResponse",
]
