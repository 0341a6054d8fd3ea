"""Syntax loader: reads one policy file and returns its generic syntax tree."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional, Tuple, Union

from acl_policy.exceptions import PolicySyntaxError
from acl_policy.schemas.diagnostic import Diagnostic, SourceRange
from acl_policy.syntax.parser import parse_source
from acl_policy.syntax.tree import File

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def load_file(filename: PathLike, encoding: str = "utf-8") -> Tuple[Optional[File], List[Diagnostic]]:
    """Read and parse ``filename``.

    Returns the parsed file and an empty list, or None and the diagnostics
    explaining why the file could not be read or parsed. The file handle is
    closed before this function returns.
    """
    name = os.fspath(filename)
    try:
        raw = Path(name).read_bytes()
    except OSError as exc:
        logger.debug("Could not read %s: %s", name, exc)
        return None, [
            Diagnostic(
                summary="Failed to read file",
                detail=f'The configuration file "{name}" could not be read.',
                subject=SourceRange.file_start(name),
            )
        ]
    logger.debug("Read %d bytes from %s", len(raw), name)

    try:
        source = raw.decode(encoding)
    except UnicodeDecodeError:
        return None, [
            Diagnostic(
                summary="Invalid file encoding",
                detail=f'The configuration file "{name}" is not valid {encoding.upper()}.',
                subject=SourceRange.file_start(name),
            )
        ]
    return load_source(source, name)


def load_source(source: str, filename: str) -> Tuple[Optional[File], List[Diagnostic]]:
    """Parse already-read ``source`` text, reporting it under ``filename``."""
    if source.startswith("\ufeff"):
        source = source[1:]
    try:
        return parse_source(source, filename), []
    except PolicySyntaxError as exc:
        logger.debug("Syntax error in %s: %s", filename, exc.diagnostic.render())
        return None, [exc.diagnostic]
