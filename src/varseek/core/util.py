from __future__ import annotations
from typing import Any, Dict, Iterable

from .model import Capabilities, StorageForm


def record_asdict(rec, *, fields: Iterable[str] | None = None) -> Dict[str, Any]:
    """Return a JSON-serialisable dict of a decoded record (skip None) optionally filtered."""
    alts = getattr(rec, "alts", None)
    filters = getattr(rec, "filter", None)
    payload = {
        "contig": rec.contig,
        "pos": rec.pos,
        "id": getattr(rec, "id", None),
        "ref": getattr(rec, "ref", None),
        "alts": list(alts) if alts else None,
        "qual": getattr(rec, "qual", None),
        "filter": list(filters.keys()) if filters is not None and len(filters) else None,
    }
    payload = {k: v for k, v in payload.items() if v is not None}
    if fields:
        wanted = set(fields)
        payload = {k: v for k, v in payload.items() if k in wanted}
    return payload


def describe(form: StorageForm, caps: Capabilities, contigs) -> Dict[str, Any]:
    return {
        "success": True,
        "form": form.value,
        "seekable": caps.seekable,
        "indexed": caps.indexed,
        "contigs": list(contigs),
    }
