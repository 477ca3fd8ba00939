"""
cursepack.loader
----------------

Pack manifest loading.

`load_pack()` reads a manifest (``manifest.json`` or a modpack ``.zip``
containing one) exactly once and returns either `Success(ModPack)` or
`Failure(error)`. A missing or corrupt manifest is an expected condition:
it is logged once at ERROR level and returned, never raised.

`loads_pack()` / `dumps_pack()` are the pure text counterparts.
"""

from __future__ import annotations

import json
import logging
import zipfile
import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import Generic, Optional, TypeVar, Union

from .exceptions import CursePackError, ParseError, ReadError
from .types_models import ModPack
from .utils import parse_json_text

logger = logging.getLogger(__name__)

T = TypeVar("T")

MANIFEST_NAME = "manifest.json"


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful outcome carrying the parsed value."""
    value: T
    ok = True
    error = None

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    """Failed outcome carrying a ReadError or ParseError."""
    error: CursePackError
    ok = False
    value = None

    def unwrap(self):
        raise self.error


LoadResult = Union[Success[ModPack], Failure]


def loads_pack(text: Union[str, bytes]) -> ModPack:
    """
    Parse manifest text into a ModPack.

    Raises
    ------
    ParseError
        Malformed JSON, or a missing/mistyped required field.
    """
    return ModPack.from_dict(parse_json_text(text, what="manifest"))


def dumps_pack(pack: ModPack, *, indent: Optional[int] = None) -> str:
    """Serialize a ModPack back to manifest JSON, keeping file order."""
    return json.dumps(pack.to_dict(), indent=indent, ensure_ascii=False)


def _read_zip_manifest(p: Path, encoding: str) -> str:
    with zipfile.ZipFile(p, "r") as z:
        candidates = [n for n in z.namelist() if n.endswith(MANIFEST_NAME)]
        if not candidates:
            raise ReadError(f"No {MANIFEST_NAME} found inside {p}")
        # prefer top-level manifest.json
        candidate = min(candidates, key=lambda n: (n.count("/"), n))
        with z.open(candidate) as f:
            return f.read().decode(encoding)


def _read_manifest_text(path: Union[str, Path], encoding: str) -> str:
    p = Path(path)
    try:
        if p.suffix.lower() == ".zip":
            return _read_zip_manifest(p, encoding)
        return p.read_text(encoding=encoding)
    except ReadError:
        raise
    # ValueError covers NUL bytes in the path and undecodable text; RuntimeError and
    # NotImplementedError come from encrypted or unsupported zip entries
    except (OSError, ValueError, LookupError, EOFError, RuntimeError, NotImplementedError,
            zipfile.BadZipFile, zlib.error) as exc:
        raise ReadError(f"Error reading the pack {p}", cause=exc) from exc


def load_pack(path: Union[str, Path], *, encoding: str = "utf-8") -> LoadResult:
    """
    Load a pack manifest from disk.

    Parameters
    ----------
    path : str | Path
        A manifest JSON file, or a modpack zip holding ``manifest.json``.
    encoding : str
        Text encoding of the manifest.

    Returns
    -------
    Success[ModPack] | Failure
        `Failure.error` is a ReadError when the storage could not be read and
        a ParseError when the text is not a valid manifest.
    """
    try:
        text = _read_manifest_text(path, encoding)
    except ReadError as exc:
        logger.error("%s", exc)
        return Failure(exc)

    try:
        pack = loads_pack(text)
    except ParseError as exc:
        err = ParseError(f"Error deserializing the pack {path}: {exc.message}", cause=exc.cause)
        logger.error("%s", err)
        return Failure(err)

    logger.debug("Loaded pack %r by %r with %d file(s)", pack.name, pack.author, len(pack.files))
    return Success(pack)


__all__ = [
    "MANIFEST_NAME", "Success", "Failure", "LoadResult",
    "load_pack", "loads_pack", "dumps_pack",
]
