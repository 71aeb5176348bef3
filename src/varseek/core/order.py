"""Position ordering of records against a query region."""

from __future__ import annotations
from typing import Set

from .model import Region

BEFORE, INSIDE, AFTER = -1, 0, 1


class ContigTrail:
    """Contigs consumed so far in one forward pass over a position-sorted file.

    Header ``##contig`` order is not consulted: a header may declare
    ``chr1, chr10, chr2`` while the records run ``chr1, chr2, chr10``.
    """

    def __init__(self) -> None:
        self._seen: Set[str] = set()

    def observe(self, contig: str) -> None:
        self._seen.add(contig)

    def __contains__(self, contig: str) -> bool:
        return contig in self._seen

    def reset(self) -> None:
        self._seen.clear()

    def locate(self, contig: str, pos: int, region: Region) -> int:
        """Place (contig, pos) BEFORE, INSIDE or AFTER the region."""
        if contig != region.contig:
            # another contig is past the region only once the region's contig was read
            return AFTER if region.contig in self._seen else BEFORE
        if pos < region.start:
            return BEFORE
        if pos > region.end:
            return AFTER
        return INSIDE
