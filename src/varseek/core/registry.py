from __future__ import annotations
import zlib
from typing import Dict, Type

from .model import StorageForm, UnrecognizedFormatError
from .reader_base import VariantReader

GZIP_MAGIC = b"\x1f\x8b"


def _inflate_head(head: bytes) -> bytes:
    """Inflate as much of a truncated gzip/BGZF prefix as is available."""
    try:
        return zlib.decompressobj(16 + zlib.MAX_WBITS).decompress(head)
    except zlib.error:
        return b""


class ReaderRegistry:
    """The closed set of readers, one per StorageForm."""

    def __init__(self) -> None:
        self._by_form: Dict[StorageForm, Type[VariantReader]] = {}

    # called from VariantReader.__init_subclass__
    def register(self, reader_cls: Type[VariantReader]) -> None:
        existing = self._by_form.get(reader_cls.form)
        if existing is not None and existing is not reader_cls:
            raise ValueError(f"{reader_cls.form} already handled by {existing.__name__}")
        self._by_form[reader_cls.form] = reader_cls

    # --- detection helpers ---
    def _match(self, payload: bytes, compressed: bool) -> Type[VariantReader] | None:
        for reader_cls in self._by_form.values():
            if reader_cls.compressed != compressed:
                continue
            for offset, pat in reader_cls.signatures:
                if len(payload) >= offset + len(pat):
                    if payload[offset : offset + len(pat)] == pat:
                        return reader_cls
        return None

    def sniff(self, head: bytes) -> StorageForm:
        """Classify the leading bytes of a file."""
        compressed = head[:len(GZIP_MAGIC)] == GZIP_MAGIC
        payload = _inflate_head(head) if compressed else head
        reader_cls = self._match(payload, compressed)
        if reader_cls is None:
            raise UnrecognizedFormatError("no VCF or BCF signature in header bytes")
        return reader_cls.form

    def classify(self, format_name: str, compression: str) -> StorageForm:
        """Classify from a codec's own (format, compression) detection."""
        compressed = compression.upper() not in ("NONE", "")
        for reader_cls in self._by_form.values():
            if reader_cls.format_name == format_name.upper() and reader_cls.compressed == compressed:
                return reader_cls.form
        raise UnrecognizedFormatError(f"unsupported format {format_name} ({compression})")

    def reader_for(self, form: StorageForm) -> Type[VariantReader]:
        try:
            return self._by_form[form]
        except KeyError:
            raise UnrecognizedFormatError(f"no reader registered for {form.name}") from None


# singleton used project-wide
_REGISTRY = ReaderRegistry()
