"""Readers for the four variant storage forms."""

from .bcf import BinaryCompressedReader, BinaryPlainReader
from .vcf import TextCompressedReader, TextPlainReader
