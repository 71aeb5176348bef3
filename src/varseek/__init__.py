"""varseek - region queries over VCF/BCF files in any storage form."""

import logging

from .core.engine import QueryPath, QueryState, RegionQueryEngine, UnifiedRecordStream
from .core.model import (                                              # re-export
    Capabilities, IndexCorruptError, InvalidRegionError, ReaderBusyError, Region,
    StorageForm, UnorderedQueryUnsupportedError, UnrecognizedFormatError, VarseekError,
)
from .core.probe import probe
from .core.registry import _REGISTRY                                  # singleton
from .io import PysamCodec, open_source

# Import readers to trigger registration
from .readers import bcf, vcf  # noqa: F401

logger = logging.getLogger(__name__)

SNIFF_SIZE = 4096


def open_variants(source, *, index=None, sniff_size: int = SNIFF_SIZE) -> RegionQueryEngine:
    """Open a VCF/BCF path, '-' or binary file object for region queries.

    Format and index problems are raised here, not at query time.
    """
    src = open_source(source)
    codec = None
    try:
        if src.seekable():
            form = _REGISTRY.sniff(src.peek(sniff_size))
            codec = PysamCodec(src)
        else:
            # a non-seekable stream cannot be peeked and rewound; use htslib's detection
            try:
                codec = PysamCodec(src)
            except (OSError, ValueError) as e:
                raise UnrecognizedFormatError(f"cannot read {src.name} as VCF/BCF: {e}") from e
            form = _REGISTRY.classify(*codec.detected_format)
        logger.debug("%s: detected %s", src.name, form.name)

        reader = _REGISTRY.reader_for(form)(src, codec)
        capabilities, loaded = probe(reader, index)
    except BaseException:
        if codec is not None:
            codec.close()
        src.close()
        raise
    logger.debug("%s: %s", src.name, capabilities)
    return RegionQueryEngine(reader, capabilities, loaded)


__all__ = [
    "open_variants", "probe",
    "RegionQueryEngine", "UnifiedRecordStream", "QueryPath", "QueryState",
    "Region", "StorageForm", "Capabilities",
    "VarseekError", "UnrecognizedFormatError", "IndexCorruptError",
    "UnorderedQueryUnsupportedError", "ReaderBusyError", "InvalidRegionError",
]
