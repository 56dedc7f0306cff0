"""Coordinates, placement and filtering for Read records."""

from __future__ import annotations

import logging

from ..models.reads import Read
from .config import ReadRequirements

logger = logging.getLogger(__name__)


def _require_alignment(read: Read):
    if read.alignment is None:
        raise ValueError(f"Read {read.fragment_name!r} is not aligned")
    return read.alignment


def aligned_contig(read: Read) -> str:
    """Contig the read is aligned to, or "" for an unaligned read."""
    if read.alignment is None:
        return ""
    return read.alignment.position.reference_name


def read_start(read: Read) -> int:
    """0-based reference start of the read. Leading clips and insertions do not shift it."""
    return _require_alignment(read).position.position


def read_end(read: Read) -> int:
    """0-based exclusive reference end: start plus the reference-consuming CIGAR lengths."""
    alignment = _require_alignment(read)
    span = sum(unit.operation_length for unit in alignment.cigar
               if unit.operation.consumes_reference)
    return alignment.position.position + span


def is_read_properly_placed(read: Read) -> bool:
    """Geometric placement check; the read's own proper_placement flag is ignored.

    Single-ended and unaligned reads are always properly placed. A paired,
    aligned read is improperly placed only if its mate is on another contig.
    """
    if read.number_reads == 1 or read.alignment is None:
        return True
    mate = read.next_mate_position
    return mate is None or mate.reference_name == read.alignment.position.reference_name


def read_satisfies_requirements(read: Read, requirements: ReadRequirements) -> bool:
    """Return True if none of the filters enabled by requirements reject the read."""
    if read.alignment is None and not requirements.keep_unaligned:
        logger.debug(f"{read.fragment_name}: rejected, unaligned")
        return False
    if read.duplicate_fragment and not requirements.keep_duplicates:
        logger.debug(f"{read.fragment_name}: rejected, duplicate")
        return False
    if read.failed_vendor_quality_checks and not requirements.keep_failed_vendor_quality_checks:
        logger.debug(f"{read.fragment_name}: rejected, failed vendor quality checks")
        return False
    if read.secondary_alignment and not requirements.keep_secondary_alignments:
        logger.debug(f"{read.fragment_name}: rejected, secondary alignment")
        return False
    if read.supplementary_alignment and not requirements.keep_supplementary_alignments:
        logger.debug(f"{read.fragment_name}: rejected, supplementary alignment")
        return False
    if not requirements.keep_improperly_placed and not is_read_properly_placed(read):
        logger.debug(f"{read.fragment_name}: rejected, improperly placed")
        return False

    mapq = read.alignment.mapping_quality if read.alignment is not None else None
    if requirements.min_mapping_quality and mapq is not None and mapq < requirements.min_mapping_quality:
        logger.debug(f"{read.fragment_name}: rejected, mapping quality {mapq} < {requirements.min_mapping_quality}")
        return False
    return True
