"""Tests for the capability probe."""

import logging
import os

import pytest

from varseek.core.model import Capabilities, IndexCorruptError
from varseek.core.probe import probe
from varseek.readers import BinaryCompressedReader, TextCompressedReader, TextPlainReader

from fakes import FakeCodec, FakeIndex, FakeSource, make_records

RECORDS = make_records([("chr1", [10, 20, 30, 40])])


@pytest.fixture
def data_file(tmp_path):
    path = tmp_path / "calls.vcf.gz"
    path.write_bytes(b"data")
    return path


def _index(tmp_path, content: bytes, name="calls.vcf.gz.tbi"):
    path = tmp_path / name
    path.write_bytes(content)
    return path


def _reader(cls=TextCompressedReader, *, seekable=True, path=None, index_path=None, contigs=("chr1",)):
    codec = FakeCodec(RECORDS, contigs)
    return cls(FakeSource(seekable=seekable, path=path, index_path=index_path), codec)


class TestProbe:
    """Test capability detection and eager index loading."""

    def test_no_index(self):
        caps, index = probe(_reader())
        assert caps == Capabilities(seekable=True, indexed=False)
        assert index is None

    def test_non_seekable_without_index(self):
        caps, index = probe(_reader(seekable=False))
        assert caps == Capabilities(seekable=False, indexed=False)

    def test_valid_index_loaded_at_probe(self, tmp_path, data_file):
        index_path = _index(tmp_path, b"IDX chr1")
        caps, index = probe(_reader(path=data_file, index_path=index_path))

        assert caps == Capabilities(seekable=True, indexed=True)
        assert isinstance(index, FakeIndex)
        assert index.contigs() == ("chr1",)

    def test_corrupt_index(self, tmp_path, data_file):
        index_path = _index(tmp_path, b"garbage")
        with pytest.raises(IndexCorruptError, match="cannot load index") as excinfo:
            probe(_reader(path=data_file, index_path=index_path))
        assert isinstance(excinfo.value.__cause__, ValueError)

    def test_removing_corrupt_index_degrades(self, tmp_path, data_file):
        """The same file opens unindexed once the bad index is gone."""
        index_path = _index(tmp_path, b"garbage")
        with pytest.raises(IndexCorruptError):
            probe(_reader(path=data_file, index_path=index_path))

        index_path.unlink()
        caps, index = probe(_reader(path=data_file, index_path=index_path))
        assert caps == Capabilities(seekable=True, indexed=False)
        assert index is None

    def test_index_for_other_contigs(self, tmp_path, data_file):
        index_path = _index(tmp_path, b"IDX chr1 chr9")
        with pytest.raises(IndexCorruptError, match="absent from the header: chr9"):
            probe(_reader(path=data_file, index_path=index_path))

    def test_header_without_contigs_skips_contig_check(self, tmp_path, data_file):
        index_path = _index(tmp_path, b"IDX chr9")
        caps, _ = probe(_reader(path=data_file, index_path=index_path, contigs=()))
        assert caps.indexed

    def test_older_index_is_used_with_warning(self, tmp_path, data_file, caplog):
        """Copies and downloads often leave the index older than its data."""
        index_path = _index(tmp_path, b"IDX chr1")
        stat = os.stat(data_file)
        os.utime(index_path, (stat.st_atime - 100, stat.st_mtime - 100))

        with caplog.at_level(logging.WARNING, logger="varseek.core.probe"):
            caps, index = probe(_reader(path=data_file, index_path=index_path))

        assert caps == Capabilities(seekable=True, indexed=True)
        assert index is not None
        assert "older than" in caplog.text

    def test_index_ignored_on_non_seekable_source(self, tmp_path):
        """Without seek an index is unusable; it is not even loaded."""
        index_path = _index(tmp_path, b"garbage")
        caps, index = probe(_reader(seekable=False, index_path=index_path))

        assert caps == Capabilities(seekable=False, indexed=False)
        assert index is None

    def test_ignored_index_is_logged(self, tmp_path, caplog):
        index_path = _index(tmp_path, b"IDX chr1")
        with caplog.at_level(logging.INFO, logger="varseek.core.probe"):
            probe(_reader(seekable=False, index_path=index_path))
        assert "source cannot seek" in caplog.text

    def test_plain_forms_are_not_searched(self, tmp_path):
        index_path = _index(tmp_path, b"IDX chr1", name="calls.vcf.csi")
        caps, _ = probe(_reader(TextPlainReader, index_path=index_path))
        assert not caps.indexed

    def test_explicit_index(self, tmp_path, data_file):
        explicit = _index(tmp_path, b"IDX chr1", name="custom.csi")
        caps, index = probe(_reader(BinaryCompressedReader, path=data_file), explicit)
        assert caps.indexed
        assert index is not None

    def test_explicit_index_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            probe(_reader(), tmp_path / "absent.csi")

    def test_explicit_index_on_plain_form(self, tmp_path):
        explicit = _index(tmp_path, b"IDX chr1", name="custom.csi")
        with pytest.raises(IndexCorruptError, match="cannot be indexed"):
            probe(_reader(TextPlainReader), explicit)
