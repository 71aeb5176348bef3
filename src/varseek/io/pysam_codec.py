"""Codec and index collaborators backed by pysam (htslib)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Optional, Sequence

import pysam

from ..core.model import Region
from .base import VariantSource

logger = logging.getLogger(__name__)


class PysamCodec:
    """Sequential decoder over one ``pysam.VariantFile``.

    Rewinding re-opens the file from its source rather than trusting
    ``VariantFile.seek``, which htslib does not support for every
    compression (plain gzip in particular).
    """

    def __init__(self, source: VariantSource):
        self._source = source
        self._index_path: Optional[Path] = None
        self._vf = self._open()
        self._contigs = tuple(self._vf.header.contigs)

    def _open(self) -> pysam.VariantFile:
        handle = self._source.codec_handle()
        if self._index_path is not None:
            return pysam.VariantFile(handle, "r", index_filename=str(self._index_path))
        return pysam.VariantFile(handle, "r")

    @property
    def header_contigs(self) -> Sequence[str]:
        return self._contigs

    @property
    def detected_format(self) -> tuple[str, str]:
        """htslib's own (format, compression) detection, e.g. ("VCF", "BGZF")."""
        return str(self._vf.format).upper(), str(self._vf.compression).upper()

    @property
    def variant_file(self) -> pysam.VariantFile:
        return self._vf

    def decode_next(self):
        return next(self._vf, None)

    def rewind(self) -> None:
        logger.debug("re-opening %s at the first record", self._source.name)
        self._vf.close()
        self._vf = self._open()

    def load_index(self, path: Path) -> "PysamIndex":
        self._index_path = path
        self._vf.close()
        self._vf = self._open()
        if self._vf.index is None:
            self._index_path = None
            raise ValueError(f"htslib could not load index {path}")
        return PysamIndex(self)

    def close(self) -> None:
        if self._vf is not None:
            self._vf.close()
            self._vf = None


class PysamIndex:
    """Tabix or CSI index loaded into the codec's VariantFile."""

    def __init__(self, codec: PysamCodec):
        self._codec = codec
        self._contigs = tuple(codec.variant_file.index)

    def contigs(self) -> Sequence[str]:
        return self._contigs

    def lookup(self, region: Region) -> Iterator:
        if region.contig not in self._contigs:
            return iter(())
        # pysam takes 0-based half-open coordinates
        return self._codec.variant_file.fetch(region.contig, region.start - 1, region.end)
