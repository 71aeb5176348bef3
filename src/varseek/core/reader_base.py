from __future__ import annotations
from abc import ABC
from typing import ClassVar, Optional, Sequence, Tuple

from .model import StorageForm
from ..io.base import Record, VariantCodec, VariantSource

Signature = Tuple[int, bytes]          # (offset, byte-pattern)


class VariantReader(ABC):
    """One open variant file in a known storage form.

    Owns its source and codec; closing the reader closes both.
    """

    # --- required by subclasses ---
    form: ClassVar[StorageForm]
    format_name: ClassVar[str]                   # htslib format name, upper case
    compressed: ClassVar[bool]
    signatures: ClassVar[Sequence[Signature]]    # magic bytes of the decompressed stream
    index_suffixes: ClassVar[tuple[str, ...]] = ()   # companion index names, in lookup order

    def __init__(self, source: VariantSource, codec: VariantCodec) -> None:
        self.source = source
        self.codec = codec

    @classmethod
    def indexable(cls) -> bool:
        return bool(cls.index_suffixes)

    @property
    def header_contigs(self) -> Sequence[str]:
        return self.codec.header_contigs

    def decode_next(self) -> Optional[Record]:
        return self.codec.decode_next()

    def rewind(self) -> None:
        self.codec.rewind()

    def close(self) -> None:
        self.codec.close()
        self.source.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.source.name!r})"

    # --- registry hook ---
    def __init_subclass__(cls, **kw):
        super().__init_subclass__(**kw)
        from .registry import _REGISTRY
        _REGISTRY.register(cls)           # noqa: E402
