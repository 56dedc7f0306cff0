"""Construction, comparison and display of genomic positions and ranges.

Positions and ranges are 0-based; ranges are half-open [start, end). Two
orderings are provided:

- ``compare_positions`` is a local ordering on (contig name, offset) using
  plain string order on contig names.
- ``compare_variants`` is a global ordering driven by a contig rank lookup,
  e.g. the contig order of a sequence dictionary.
"""

from __future__ import annotations

import re
from functools import cmp_to_key
from typing import Callable, Dict, Iterable, List, Mapping, Union

import pysam

from ..models.ranges import ContigInfo, Position, Range
from ..models.reads import Read
from .reads import aligned_contig, read_end, read_start

ContigRank = Union[Mapping[str, int], Callable[[str], int]]

INTERVAL_PATTERN = re.compile(r'^(\d+)(?:-(\d+))?$')


def make_position(reference_name: str, position: int, reverse_strand: bool = False) -> Position:
    return Position(reference_name, position, reverse_strand)


def position_of(variant) -> Position:
    """Position of a variant-like record's start; its end is ignored."""
    return Position(variant.reference_name, variant.start)


def make_range(reference_name: str, start: int, end: int) -> Range:
    return Range(reference_name, start, end)


def range_of(record) -> Range:
    """Range covered by a variant-like record or by an aligned Read.

    A Read's end is derived from its CIGAR rather than stored on the record.
    """
    if isinstance(record, Read):
        return Range(aligned_contig(record), read_start(record), read_end(record))
    return Range(record.reference_name, record.start, record.end)


def range_contains(outer: Range, inner: Range) -> bool:
    """True if inner lies entirely within outer on the same contig.

    A range contains itself. A zero-length inner range is contained only at a
    point of [outer.start, outer.end), since end is exclusive.
    """
    if inner.start == inner.end == outer.end and outer.start < outer.end:
        return False
    return (outer.reference_name == inner.reference_name
            and outer.start <= inner.start
            and inner.end <= outer.end)


def make_interval_str(reference_name: str, start: int, end: int, one_based: bool = True) -> str:
    """Render [start, end) as "contig:start-end".

    With one_based the bounds are shown 1-based inclusive (start + 1, end),
    otherwise as given. Intervals of at most one base render as "contig:pos".
    """
    shown_start = start + 1 if one_based else start
    if end - start <= 1:
        return f"{reference_name}:{shown_start}"
    return f"{reference_name}:{shown_start}-{end}"


def interval_str(record: Union[Position, Range], one_based: bool = True) -> str:
    """Render a Position (a one-base interval) or a Range."""
    if isinstance(record, Position):
        return make_interval_str(record.reference_name, record.position, record.position + 1, one_based)
    return make_interval_str(record.reference_name, record.start, record.end, one_based)


def parse_interval_str(interval: str) -> Range:
    """Parse a 1-based inclusive "contig:start-end" or "contig:pos" string into a Range.

    Raises:
        ValueError: if interval is not in either form
    """
    contig, sep, coords = interval.rpartition(':')
    match = INTERVAL_PATTERN.match(coords.replace(',', ''))
    if not sep or not contig or match is None:
        raise ValueError(f"Malformed interval: {interval!r}")

    start = int(match.group(1))
    end = int(match.group(2)) if match.group(2) else start
    if start < 1 or end < start:
        raise ValueError(f"Malformed interval: {interval!r}")
    return Range(contig, start - 1, end)


def compare_positions(a, b) -> int:
    """Compare two Positions (or variant-like records by their start position).

    Returns:
        A negative number, zero or a positive number as a sorts before, with
        or after b.
    """
    if not isinstance(a, Position):
        a = position_of(a)
    if not isinstance(b, Position):
        b = position_of(b)

    if a.reference_name != b.reference_name:
        return -1 if a.reference_name < b.reference_name else 1
    return (a.position > b.position) - (a.position < b.position)


def _rank(contig_rank: ContigRank, reference_name: str) -> int:
    if callable(contig_rank):
        return contig_rank(reference_name)
    return contig_rank[reference_name]


def compare_variants(lhs, rhs, contig_rank: ContigRank) -> bool:
    """Strict "lhs sorts before rhs" for variant-like records.

    Records on contigs of different rank are ordered by rank alone; records on
    the same contig by start, then end.

    Args:
        lhs, rhs: records with reference_name, start and end
        contig_rank: mapping or callable from contig name to rank

    Raises:
        KeyError: if a contig is missing from a mapping contig_rank
    """
    lhs_rank = _rank(contig_rank, lhs.reference_name)
    rhs_rank = _rank(contig_rank, rhs.reference_name)
    if lhs_rank != rhs_rank:
        return lhs_rank < rhs_rank
    if lhs.start != rhs.start:
        return lhs.start < rhs.start
    return lhs.end < rhs.end


def variant_sort_key(contig_rank: ContigRank):
    """Key function for sorted() that orders records like compare_variants."""
    def cmp(lhs, rhs) -> int:
        if compare_variants(lhs, rhs, contig_rank):
            return -1
        if compare_variants(rhs, lhs, contig_rank):
            return 1
        return 0
    return cmp_to_key(cmp)


def map_contig_name_to_pos_in_fasta(contigs: Iterable[ContigInfo]) -> Dict[str, int]:
    """Map contig name to its pos_in_fasta, for use as a contig rank lookup."""
    return {contig.name: contig.pos_in_fasta for contig in contigs}


def contigs_from_header(header) -> List[ContigInfo]:
    """ContigInfo records, in header order, from a pysam AlignmentHeader or VariantHeader."""
    if isinstance(header, pysam.AlignmentHeader):
        return [ContigInfo(name, length, i)
                for i, (name, length) in enumerate(zip(header.references, header.lengths))]
    return [ContigInfo(name, contig.length or 0, i)
            for i, (name, contig) in enumerate(header.contigs.items())]
