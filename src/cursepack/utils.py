from __future__ import annotations

import json
import logging
from typing import Any, Optional, Union

from packaging import version

from .exceptions import ParseError

__all__ = [
    "logger_setup",
    "parse_json_text",
    "parse_version",
]


_HANDLER_PREFIX = "cursepack."


def _add_handler(logger: logging.Logger, handler: logging.Handler, tag: str,
                 level: int, formatter: logging.Formatter) -> None:
    handler.set_name(_HANDLER_PREFIX + tag)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def logger_setup(name: str = "cursepack",
                 level: int = logging.INFO,
                 *,
                 log_to_file: Optional[str] = None,
                 file_level: Optional[int] = None,
                 fmt: str = "%(asctime)s %(name)s %(levelname)s: %(message)s") -> logging.Logger:
    """
    Send the package's log records (loader diagnostics included) to stderr,
    and optionally to `log_to_file`. Opt-in; importing cursepack installs no
    handlers. Handlers already installed by an earlier call are not added again.
    """
    logger = logging.getLogger(name)
    file_level = level if file_level is None else file_level
    logger.setLevel(min(level, file_level) if log_to_file else level)

    installed = {h.get_name() for h in logger.handlers}
    formatter = logging.Formatter(fmt=fmt)
    if _HANDLER_PREFIX + "console" not in installed:
        _add_handler(logger, logging.StreamHandler(), "console", level, formatter)
    if log_to_file and _HANDLER_PREFIX + "file" not in installed:
        _add_handler(logger, logging.FileHandler(log_to_file, encoding="utf-8"), "file", file_level, formatter)
    return logger


def parse_json_text(payload: Union[str, bytes, bytearray], *, what: str = "payload") -> Any:
    """
    Parse JSON text (str or UTF-8 bytes) into Python objects.

    Unlike a lenient reader this never substitutes a default: empty or
    malformed input raises ParseError naming `what`, with the decoder error
    chained as the cause.
    """
    if isinstance(payload, (bytes, bytearray)):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError(f"{what} is not valid UTF-8", cause=exc) from exc

    if not isinstance(payload, str):
        raise ParseError(f"{what} must be text, got {type(payload).__name__}")

    if not payload.strip():
        raise ParseError(f"{what} is empty")

    try:
        return json.loads(payload)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Invalid JSON in {what}", cause=exc) from exc
    except RecursionError as exc:
        raise ParseError(f"{what} is nested too deeply", cause=exc) from exc


def parse_version(ver_str: str) -> version.Version:
    """
    Parse a version string into a standardized Version object.

    Parameters
    ----------
    ver_str : str
        Version string (e.g., '1.20.1').

    Returns
    -------
    packaging.version.Version
        Parsed version object for comparison operations.

    Raises
    ------
    packaging.version.InvalidVersion
        If the version string cannot be parsed (e.g. loader tags like "Forge").
    """
    return version.parse(ver_str)
