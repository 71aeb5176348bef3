from __future__ import annotations

from typing import ClassVar

from ..core.model import StorageForm
from ..core.reader_base import VariantReader

VCF_SIG = b"##fileformat=VCF"


class TextPlainReader(VariantReader):
    """Uncompressed VCF; scan-only since tabix needs BGZF blocks."""

    form: ClassVar = StorageForm.TEXT_PLAIN
    format_name: ClassVar = "VCF"
    compressed: ClassVar = False
    signatures: ClassVar = ((0, VCF_SIG),)


class TextCompressedReader(VariantReader):
    """BGZF-compressed VCF, indexable with CSI or tabix."""

    form: ClassVar = StorageForm.TEXT_COMPRESSED
    format_name: ClassVar = "VCF"
    compressed: ClassVar = True
    signatures: ClassVar = ((0, VCF_SIG),)
    index_suffixes: ClassVar = (".csi", ".tbi")
