import gzip
import shutil
from pathlib import Path

import pysam
import pysam.bcftools
import pytest

from fakes import make_records

# chr1 holds the 10/20/30/40 scenario; chr2 checks contig transitions
RECORD_LAYOUT = [("chr1", [10, 20, 30, 40]), ("chr2", [5, 15, 25])]

# mode passed to pysam.VariantFile for each storage form
WRITE_MODES = {
    "vcf": ("calls.vcf", "w"),
    "vcf.gz": ("calls.vcf.gz", "wz"),
    "bcf": ("calls.bcf", "wb"),
    "ubcf": ("calls.u.bcf", "wbu"),
}


def _header(contigs=("chr1", "chr2")) -> pysam.VariantHeader:
    header = pysam.VariantHeader()
    for contig in contigs:
        header.add_line(f"##contig=<ID={contig},length=1000>")
    return header


def write_variants(path: Path, mode: str, layout=RECORD_LAYOUT, contigs=("chr1", "chr2")) -> Path:
    header = _header(contigs)
    # pysam rejects "wbu"; write compressed BCF and inflate it to raw BCF
    inflate = mode == "wbu"
    with pysam.VariantFile(str(path), "wb" if inflate else mode, header=header) as out:
        for rec in make_records(layout):
            new = out.new_record(contig=rec.contig, start=rec.pos - 1, stop=rec.pos,
                                 alleles=("A", "C"), id=rec.id)
            out.write(new)
    if inflate:
        path.write_bytes(gzip.decompress(path.read_bytes()))
    return path


@pytest.fixture(scope="session")
def variant_files(tmp_path_factory):
    """Same records in all four storage forms; the compressed forms are indexed."""
    root = tmp_path_factory.mktemp("variants")
    files = {}
    for form, (name, mode) in WRITE_MODES.items():
        files[form] = write_variants(root / name, mode)
    pysam.bcftools.index("-t", "-f", str(files["vcf.gz"]))
    pysam.bcftools.index("-f", str(files["bcf"]))
    return files


@pytest.fixture
def unindexed_copy(tmp_path):
    """Copy a data file into a directory without its index."""
    def _copy(path: Path) -> Path:
        target = tmp_path / "unindexed" / path.name
        target.parent.mkdir(exist_ok=True)
        shutil.copy(path, target)
        return target
    return _copy
