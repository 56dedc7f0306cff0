from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import pysam

from .cigar import CigarUnit, format_cigar
from .ranges import Position

# SAM spec: a MAPQ of 255 means the mapping quality is not available
MAPQ_UNAVAILABLE = 255


@dataclass
class LinearAlignment:
    """Placement of a read on the reference: anchor position, CIGAR and mapping quality."""
    position: Position
    cigar: List[CigarUnit] = field(default_factory=list)
    mapping_quality: Optional[int] = None

    @property
    def cigarstring(self) -> str:
        return format_cigar(self.cigar)


@dataclass
class Read:
    """A decoded sequencing read. Unaligned reads carry no alignment."""
    fragment_name: str = ""
    aligned_sequence: str = ""
    number_reads: int = 2
    proper_placement: bool = False
    duplicate_fragment: bool = False
    failed_vendor_quality_checks: bool = False
    secondary_alignment: bool = False
    supplementary_alignment: bool = False
    alignment: Optional[LinearAlignment] = None
    next_mate_position: Optional[Position] = None

    def __repr__(self) -> str:
        if self.alignment is None:
            return f"Read(name={self.fragment_name}, unaligned)"
        pos = self.alignment.position
        return (f"Read(name={self.fragment_name}, chrom={pos.reference_name}, "
                f"start={pos.position}, cigar={self.alignment.cigarstring})")

    @property
    def is_aligned(self) -> bool:
        return self.alignment is not None

    @classmethod
    def from_pysam_read(cls, read: pysam.AlignedSegment) -> 'Read':
        """Build a Read from a pysam AlignedSegment."""
        alignment = None
        if not read.is_unmapped:
            mapq = read.mapping_quality
            alignment = LinearAlignment(
                position=Position(read.reference_name, read.reference_start, read.is_reverse),
                cigar=[CigarUnit.from_tuple(t) for t in (read.cigartuples or [])],
                mapping_quality=None if mapq == MAPQ_UNAVAILABLE else mapq
            )

        next_mate_position = None
        if read.is_paired and not read.mate_is_unmapped and read.next_reference_id >= 0:
            next_mate_position = Position(read.next_reference_name, read.next_reference_start,
                                          read.mate_is_reverse)

        return cls(
            fragment_name=read.query_name or "",
            aligned_sequence=read.query_sequence or "",
            number_reads=2 if read.is_paired else 1,
            proper_placement=read.is_proper_pair,
            duplicate_fragment=read.is_duplicate,
            failed_vendor_quality_checks=read.is_qcfail,
            secondary_alignment=read.is_secondary,
            supplementary_alignment=read.is_supplementary,
            alignment=alignment,
            next_mate_position=next_mate_position
        )
