"""Forward-only scan that skips to a region when there is no index."""

from __future__ import annotations
import logging
from typing import Iterator, Optional

from .model import Region
from .order import AFTER, BEFORE, INSIDE, ContigTrail
from .reader_base import VariantReader
from ..io.base import Record

logger = logging.getLogger(__name__)


class RecordCursor:
    """The shared read position of a reader, with one record of lookahead.

    ``high_water`` is the (contig, pos) of the last record consumed and
    ``trail`` the contigs consumed since the last rewind. A record that was
    only peeked is not consumed and is handed to the next query.
    """

    def __init__(self, reader: VariantReader) -> None:
        self._reader = reader
        self._pending: Optional[Record] = None
        self._eof = False
        self.high_water: tuple[str, int] | None = None
        self.trail = ContigTrail()

    def peek(self) -> Optional[Record]:
        if self._pending is None and not self._eof:
            self._pending = self._reader.decode_next()
            if self._pending is None:
                self._eof = True
        return self._pending

    def advance(self) -> Optional[Record]:
        rec = self.peek()
        if rec is not None:
            self._pending = None
            self.high_water = (rec.contig, rec.pos)
            self.trail.observe(rec.contig)
        return rec

    def locate(self, rec: Record, region: Region) -> int:
        return self.trail.locate(rec.contig, rec.pos, region)

    def passed(self, region: Region) -> bool:
        """True if a record at or after the region start was already consumed."""
        if self.high_water is None or region.contig not in self.trail:
            return False
        contig, pos = self.high_water
        if contig != region.contig:
            # moved on from the region's contig
            return True
        return pos >= region.start

    def rewind(self) -> None:
        self._reader.rewind()
        self._pending = None
        self._eof = False
        self.high_water = None
        self.trail.reset()


class ScanSkipIterator:
    """Yield the records of `region` from the cursor's current position.

    Records before the region are discarded and counted in ``skipped``.
    Iteration stops, without consuming it, at the first record after the
    region, or at end of data.
    """

    def __init__(self, cursor: RecordCursor, region: Region) -> None:
        self._cursor = cursor
        self._region = region
        self.skipped = 0
        self._emitting = False
        self._done = False

    def __iter__(self) -> Iterator[Record]:
        return self

    def _skip_to_region(self) -> None:
        while True:
            rec = self._cursor.peek()
            if rec is None:
                return
            if self._cursor.locate(rec, self._region) != BEFORE:
                return
            self._cursor.advance()
            self.skipped += 1

    def __next__(self) -> Record:
        if self._done:
            raise StopIteration
        if not self._emitting:
            self._skip_to_region()
            self._emitting = True
            logger.debug("skipped %d records before %s", self.skipped, self._region)
        while True:
            rec = self._cursor.peek()
            if rec is None:
                break
            where = self._cursor.locate(rec, self._region)
            if where == AFTER:
                break
            self._cursor.advance()
            if where == INSIDE:
                return rec
            # BEFORE while emitting only happens on unsorted input
        self._done = True
        raise StopIteration
