from __future__ import annotations
import enum
import re
from dataclasses import dataclass


class StorageForm(enum.Enum):
    TEXT_PLAIN = "vcf"
    TEXT_COMPRESSED = "vcf.gz"
    BINARY_COMPRESSED = "bcf"
    BINARY_PLAIN = "ubcf"


@dataclass(frozen=True, slots=True)
class Capabilities:
    seekable: bool
    indexed: bool

    def __post_init__(self) -> None:
        if self.indexed and not self.seekable:
            raise ValueError("an index is only usable on a seekable source")


_REGION_RE = re.compile(r"^(?P<contig>[^:]+)(?::(?P<start>[\d,]+)(?:-(?P<end>[\d,]+))?)?$")
_WHOLE_CONTIG_END = 2**31 - 1        # htslib's HTS_POS_MAX for 32-bit coordinates


@dataclass(frozen=True, slots=True)
class Region:
    """A 1-based, closed query range on one contig."""

    contig: str
    start: int
    end: int

    def __post_init__(self) -> None:
        if not self.contig:
            raise InvalidRegionError("region contig must not be empty")
        if self.start < 1:
            raise InvalidRegionError(f"region start must be >= 1, got {self.start}")
        if self.start > self.end:
            raise InvalidRegionError(f"region start {self.start} is after end {self.end}")

    @classmethod
    def parse(cls, text: str) -> "Region":
        """Parse ``chr1:15-35``, ``chr1:15`` or ``chr1``."""
        m = _REGION_RE.match(text.strip())
        if not m:
            raise InvalidRegionError(f"cannot parse region {text!r}")
        contig = m["contig"]
        if m["start"] is None:
            return cls(contig, 1, _WHOLE_CONTIG_END)
        start = int(m["start"].replace(",", ""))
        end = int(m["end"].replace(",", "")) if m["end"] is not None else start
        return cls(contig, start, end)

    @classmethod
    def coerce(cls, region: "Region | str") -> "Region":
        if isinstance(region, Region):
            return region
        if isinstance(region, str):
            return cls.parse(region)
        raise TypeError(f"expected Region or str, got {type(region).__name__}")

    def __str__(self) -> str:
        return f"{self.contig}:{self.start}-{self.end}"


class VarseekError(RuntimeError):
    """Base class for errors raised by varseek."""
    pass


class UnrecognizedFormatError(VarseekError):
    """Raised when a source matches none of the known variant signatures."""
    pass


class IndexCorruptError(VarseekError):
    """Raised when a companion index exists but cannot be used with the file."""
    pass


class UnorderedQueryUnsupportedError(VarseekError):
    """Raised when a non-seekable source would have to rewind to answer a query."""
    pass


class ReaderBusyError(VarseekError):
    """Raised when a second stream is requested while one is still open."""
    pass


class InvalidRegionError(VarseekError, ValueError):
    pass
