"""Protocols for the collaborators the query core drives."""

from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Protocol, Sequence, Union, runtime_checkable

from ..core.model import Region


@runtime_checkable
class Record(Protocol):
    """The only fields of a decoded record the core looks at."""

    contig: str
    pos: int  # 1-based


@runtime_checkable
class VariantSource(Protocol):
    """Protocol for the byte source a reader is built on."""

    name: str
    path: Optional[Path]

    def seekable(self) -> bool:
        """True if the source supports absolute repositioning."""
        ...

    def fetch(self, start: int, length: int) -> bytes:
        """Return exactly `length` bytes starting at absolute offset `start`.
        If not enough data can be fetched → raise IOError.
        """
        ...

    def peek(self, length: int) -> bytes:
        """Return up to `length` leading bytes without moving the codec's stream."""
        ...

    def codec_handle(self) -> Union[str, BinaryIO]:
        """Return what the codec should open, positioned at offset 0."""
        ...

    def find_index(self, suffixes: tuple[str, ...]) -> Optional[Path]:
        """Return the first existing companion index for `suffixes`, or None."""
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class VariantIndex(Protocol):
    """Protocol for a loaded positional index."""

    def contigs(self) -> Sequence[str]:
        ...

    def lookup(self, region: Region) -> Iterator[Record]:
        """Decode records from the first indexed block that may overlap `region`.

        The result may start before the region and run past its end; callers filter.
        """
        ...


@runtime_checkable
class VariantCodec(Protocol):
    """Protocol for the record decoder of one open file."""

    @property
    def header_contigs(self) -> Sequence[str]:
        ...

    def decode_next(self) -> Optional[Record]:
        """Return the next record, or None at end of data."""
        ...

    def rewind(self) -> None:
        """Reposition so the next decode returns the first record."""
        ...

    def load_index(self, path: Path) -> VariantIndex:
        """Load `path` as an index for this file; raise OSError/ValueError if unusable."""
        ...

    def close(self) -> None:
        ...
