"""Region queries over a variant reader, by index or by scan-skip."""

from __future__ import annotations
import enum
import logging
import weakref
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

from .model import (
    Capabilities, ReaderBusyError, Region, StorageForm, UnorderedQueryUnsupportedError,
)
from .order import AFTER, INSIDE, ContigTrail
from .reader_base import VariantReader
from .scan import RecordCursor, ScanSkipIterator
from ..io.base import Record, VariantIndex

logger = logging.getLogger(__name__)


class QueryPath(enum.Enum):
    INDEXED = "indexed"
    SCAN = "scan"


@dataclass(slots=True)
class QueryState:
    """Per-query cursor state, discarded with the stream."""

    region: Region
    path: QueryPath
    current: Optional[Record] = None
    emitted: int = 0
    exhausted: bool = False
    skipped: int = 0


class IndexedQuery:
    """Filter the index's coarse candidates down to the region."""

    def __init__(self, index: VariantIndex, region: Region) -> None:
        self._candidates = index.lookup(region)
        self._region = region
        self._trail = ContigTrail()
        self.skipped = 0

    def __iter__(self) -> Iterator[Record]:
        for rec in self._candidates:
            where = self._trail.locate(rec.contig, rec.pos, self._region)
            if where == AFTER:
                return
            self._trail.observe(rec.contig)
            if where == INSIDE:
                yield rec
            else:
                self.skipped += 1


class UnifiedRecordStream:
    """Lazy, forward-only records of one query, whichever path produced them.

    Closing, exhausting or dropping the stream frees the engine for the
    next query. Exhaustion is permanent.
    """

    def __init__(self, records, state: QueryState, release) -> None:
        self._records = records
        self._iter = iter(records)
        self.state = state
        self._release = release

    @property
    def path(self) -> QueryPath:
        return self.state.path

    def __iter__(self) -> "UnifiedRecordStream":
        return self

    def __next__(self) -> Record:
        if self.state.exhausted:
            raise StopIteration
        try:
            rec = next(self._iter)
        except BaseException:
            # end of data or a decode error both end the query
            self.close()
            raise
        self.state.current = rec
        self.state.emitted += 1
        return rec

    def close(self) -> None:
        if self.state.exhausted:
            return
        self.state.exhausted = True
        self.state.current = None
        self.state.skipped = getattr(self._records, "skipped", 0)
        close = getattr(self._iter, "close", None)
        if close is not None:
            close()
        self._release(self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __del__(self):
        state = getattr(self, "state", None)
        if state is not None and not state.exhausted:
            self.close()


class RegionQueryEngine:
    """Answer region queries on one reader, choosing the path once per query.

    Only one stream may be open at a time: both paths move the reader's
    single file position.
    """

    def __init__(self, reader: VariantReader, capabilities: Capabilities,
                 index: Optional[VariantIndex] = None) -> None:
        if capabilities.indexed != (index is not None):
            raise ValueError("capabilities.indexed must match whether an index is given")
        self.reader = reader
        self.capabilities = capabilities
        self._index = index
        self._cursor = RecordCursor(reader)
        self._active: Optional[weakref.ref] = None

    @property
    def form(self) -> StorageForm:
        return self.reader.form

    @property
    def header_contigs(self) -> Sequence[str]:
        return self.reader.header_contigs

    def query(self, region: Region | str) -> UnifiedRecordStream:
        """Return the records with start <= pos <= end on the region's contig."""
        region = Region.coerce(region)
        if self._active_stream() is not None:
            raise ReaderBusyError("a stream from this reader is still open; close it first")

        if self.capabilities.indexed:
            logger.debug("%s: indexed query %s", self.reader.source.name, region)
            records = IndexedQuery(self._index, region)
            path = QueryPath.INDEXED
        else:
            if self._cursor.passed(region):
                if not self.capabilities.seekable:
                    raise UnorderedQueryUnsupportedError(
                        f"{region} starts before the current position of a non-seekable source")
                logger.debug("%s: rewinding for %s", self.reader.source.name, region)
                self._cursor.rewind()
            logger.debug("%s: scan-skip query %s", self.reader.source.name, region)
            records = ScanSkipIterator(self._cursor, region)
            path = QueryPath.SCAN

        stream = UnifiedRecordStream(records, QueryState(region, path), self._release)
        # weak, so a stream the caller drops is collected and releases itself
        self._active = weakref.ref(stream)
        return stream

    def _active_stream(self) -> Optional[UnifiedRecordStream]:
        stream = self._active() if self._active is not None else None
        if stream is None or stream.state.exhausted:
            return None
        return stream

    def _release(self, stream: UnifiedRecordStream) -> None:
        if self._active is not None and self._active() is stream:
            self._active = None

    def close(self) -> None:
        stream = self._active_stream()
        if stream is not None:
            stream.close()
        self.reader.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
