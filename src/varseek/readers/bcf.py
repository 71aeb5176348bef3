from __future__ import annotations

from typing import ClassVar

from ..core.model import StorageForm
from ..core.reader_base import VariantReader

# BCF2 magic; the minor version byte (1 or 2) is not checked
BCF_SIG = b"BCF\x02"


class BinaryCompressedReader(VariantReader):
    """BGZF-compressed BCF, indexable with CSI only."""

    form: ClassVar = StorageForm.BINARY_COMPRESSED
    format_name: ClassVar = "BCF"
    compressed: ClassVar = True
    signatures: ClassVar = ((0, BCF_SIG),)
    index_suffixes: ClassVar = (".csi",)


class BinaryPlainReader(VariantReader):
    form: ClassVar = StorageForm.BINARY_PLAIN
    format_name: ClassVar = "BCF"
    compressed: ClassVar = False
    signatures: ClassVar = ((0, BCF_SIG),)
