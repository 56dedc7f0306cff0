from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Position:
    """A single 0-based offset on a contig, with strand."""
    reference_name: str
    position: int
    reverse_strand: bool = False

    def __post_init__(self):
        if self.position < 0:
            raise ValueError(f"Position must be non-negative, got {self.position}")

    def __repr__(self) -> str:
        strand = '-' if self.reverse_strand else '+'
        return f"Position({self.reference_name}:{self.position}{strand})"


@dataclass
class Range:
    """A 0-based, half-open [start, end) interval on a contig."""
    reference_name: str
    start: int
    end: int

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError(f"Range end ({self.end}) must not precede start ({self.start})")

    def __repr__(self) -> str:
        return f"Range({self.reference_name}:{self.start}-{self.end})"

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass
class ContigInfo:
    """Contig metadata from a sequence dictionary (FASTA index, SAM or VCF header)."""
    name: str
    n_bases: int = 0
    pos_in_fasta: int = 0
