"""I/O layer for varseek - sources and the pysam-backed codec."""

# Re-export these for import convenience
from .base import Record, VariantCodec, VariantIndex, VariantSource
from .local import LocalVariantSource, open_local_source
from .pysam_codec import PysamCodec, PysamIndex


def open_source(source):
    """Factory function to create the VariantSource for a path, '-' or file object."""
    source_str = str(source) if not hasattr(source, 'read') else ''
    if source_str.startswith(('http://', 'https://', 'ftp://', 's3://')):
        raise ValueError(f"remote sources are not supported: {source_str}")
    return open_local_source(source)
