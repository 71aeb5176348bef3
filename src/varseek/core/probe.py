"""Capability probe: can the source seek, and is there a usable index?"""

from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Optional, Tuple, Union

from .model import Capabilities, IndexCorruptError
from .reader_base import VariantReader
from ..io.base import VariantIndex

logger = logging.getLogger(__name__)


def _locate_index(reader: VariantReader, index: Optional[Union[str, Path]]) -> Optional[Path]:
    if index is not None:
        path = Path(index)
        if not path.exists():
            raise FileNotFoundError(f"No such index: {path}")
        return path
    if not reader.indexable():
        return None
    return reader.source.find_index(reader.index_suffixes)


def _validate(reader: VariantReader, loaded: VariantIndex, path: Path) -> None:
    declared = set(reader.header_contigs)
    if declared:
        unknown = [c for c in loaded.contigs() if c not in declared]
        if unknown:
            raise IndexCorruptError(
                f"index {path} names contigs absent from the header: {', '.join(unknown[:5])}")
    data_path = reader.source.path
    if data_path is not None and os.stat(path).st_mtime < os.stat(data_path).st_mtime:
        logger.warning("index %s is older than %s; using it anyway", path, data_path)


def probe(reader: VariantReader,
          index: Optional[Union[str, Path]] = None) -> Tuple[Capabilities, Optional[VariantIndex]]:
    """Work out what random access `reader` supports, loading its index eagerly.

    A missing index degrades to ``indexed=False``; an index that exists but
    cannot be loaded or does not match the file raises IndexCorruptError.
    """
    seekable = reader.source.seekable()
    path = _locate_index(reader, index)
    if path is None:
        logger.debug("%s: no index", reader.source.name)
        return Capabilities(seekable=seekable, indexed=False), None

    if not seekable:
        logger.info("%s: ignoring index %s, source cannot seek", reader.source.name, path)
        return Capabilities(seekable=False, indexed=False), None
    if not reader.indexable():
        raise IndexCorruptError(f"{reader.form.name} files cannot be indexed, but got {path}")

    try:
        loaded = reader.codec.load_index(path)
    except (OSError, ValueError) as e:
        raise IndexCorruptError(f"cannot load index {path}: {e}") from e
    _validate(reader, loaded, path)
    logger.debug("%s: loaded index %s", reader.source.name, path)
    return Capabilities(seekable=True, indexed=True), loaded
