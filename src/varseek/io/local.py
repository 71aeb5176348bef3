"""Local variant sources: paths, stdin and file objects."""

import io
import logging
import os
import stat
import sys
from pathlib import Path
from typing import BinaryIO, Optional, Union

logger = logging.getLogger(__name__)

# htslib's convention for naming an index inside the data path
INDEX_SEPARATOR = "##idx##"


class LocalVariantSource:
    """A local file, stdin or an open binary file object."""

    def __init__(self, source: Union[Path, str, BinaryIO]):
        self.path: Optional[Path] = None
        self.embedded_index: Optional[Path] = None
        self._file: Optional[BinaryIO] = None

        if hasattr(source, 'read'):
            if not hasattr(source, 'fileno'):
                raise TypeError("file object sources must provide fileno()")
            try:
                source.fileno()
            except (io.UnsupportedOperation, OSError) as e:
                raise TypeError(f"file object has no usable file descriptor: {e}") from e
            self._file = source
            self.name = getattr(source, 'name', '<stream>')
            if not isinstance(self.name, str):
                self.name = f"<fd {self.name}>"
        elif str(source) == "-":
            self._file = sys.stdin.buffer
            self.name = "<stdin>"
        else:
            text = str(source)
            if INDEX_SEPARATOR in text:
                text, index_text = text.split(INDEX_SEPARATOR, 1)
                self.embedded_index = Path(index_text)
            self.path = Path(text)
            self.name = text
            if not self.path.exists():
                raise FileNotFoundError(f"No such file: {text}")

    def seekable(self) -> bool:
        """Regular files and seekable file objects support absolute repositioning."""
        if self.path is not None:
            return stat.S_ISREG(os.stat(self.path).st_mode)
        try:
            return self._file.seekable()
        except (ValueError, OSError):
            return False

    @property
    def size(self) -> int:
        """Return the total size of the source in bytes."""
        if self.path is not None:
            return os.stat(self.path).st_size
        if not self.seekable():
            raise IOError(f"Size of non-seekable source {self.name} is unknown")
        return os.fstat(self._file.fileno()).st_size

    def fetch(self, start: int, length: int) -> bytes:
        """Return exactly `length` bytes starting at absolute offset `start`."""
        if start < 0:
            raise IOError("Start offset cannot be negative")
        if not self.seekable():
            raise IOError(f"Cannot fetch from non-seekable source {self.name}")

        if self.path is not None:
            with open(self.path, 'rb') as fh:
                fh.seek(start)
                data = fh.read(length)
        else:
            # peek-then-rewind on the caller's handle
            saved = self._file.tell()
            try:
                self._file.seek(start)
                data = self._file.read(length)
            finally:
                self._file.seek(saved)

        if len(data) < length:
            raise IOError(f"Not enough data: requested {length} bytes at offset {start}, "
                          f"but only {len(data)} available")
        return data

    def peek(self, length: int) -> bytes:
        """Return up to `length` leading bytes; empty for empty sources."""
        available = min(length, self.size)
        if available <= 0:
            return b''
        return self.fetch(0, available)

    def codec_handle(self) -> Union[str, BinaryIO]:
        if self.path is not None:
            return str(self.path)
        if self.seekable():
            self._file.seek(0)
        return self._file

    def find_index(self, suffixes: tuple[str, ...]) -> Optional[Path]:
        """Locate a companion index by htslib's naming rules."""
        if self.embedded_index is not None:
            return self.embedded_index
        if self.path is None:
            return None
        for suffix in suffixes:
            candidate = self.path.with_name(self.path.name + suffix)
            if candidate.exists():
                logger.debug("found index %s for %s", candidate, self.name)
                return candidate
        return None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Sources never close handles they did not open."""
        self._file = None


def open_local_source(source: Union[Path, str, BinaryIO]) -> LocalVariantSource:
    """Create a local variant source."""
    return LocalVariantSource(source)
