from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Dict, Iterable, List, Pattern, Tuple, Union


class CigarOp(Enum):
    """CIGAR operation kinds, valued by their SAM character."""
    ALIGNMENT_MATCH = 'M'
    INSERT = 'I'
    DELETE = 'D'
    SKIP = 'N'
    CLIP_SOFT = 'S'
    CLIP_HARD = 'H'
    PAD = 'P'
    SEQUENCE_MATCH = '='
    SEQUENCE_MISMATCH = 'X'

    @property
    def code(self) -> int:
        """htslib/pysam integer code for this operation."""
        return _PYSAM_CODES[self]

    @property
    def consumes_reference(self) -> bool:
        return self in REFERENCE_CONSUMING_OPS

    @property
    def consumes_query(self) -> bool:
        return self in QUERY_CONSUMING_OPS

    @classmethod
    def from_code(cls, code: int) -> 'CigarOp':
        try:
            return _OPS_BY_CODE[code]
        except KeyError:
            raise ValueError(f"Unknown CIGAR operation code: {code}")


# Single source of truth for span calculation.
REFERENCE_CONSUMING_OPS = frozenset({
    CigarOp.ALIGNMENT_MATCH,
    CigarOp.DELETE,
    CigarOp.SKIP,
    CigarOp.SEQUENCE_MATCH,
    CigarOp.SEQUENCE_MISMATCH,
})

QUERY_CONSUMING_OPS = frozenset({
    CigarOp.ALIGNMENT_MATCH,
    CigarOp.INSERT,
    CigarOp.CLIP_SOFT,
    CigarOp.SEQUENCE_MATCH,
    CigarOp.SEQUENCE_MISMATCH,
})

# same order as htslib's BAM_CIGAR_STR "MIDNSHP=X"
_PYSAM_CODES: Dict[CigarOp, int] = {op: i for i, op in enumerate(CigarOp)}
_OPS_BY_CODE: Dict[int, CigarOp] = {i: op for op, i in _PYSAM_CODES.items()}


@dataclass
class CigarUnit:
    """One run-length encoded alignment operation."""
    operation: CigarOp
    operation_length: int

    UNIT_PATTERN: ClassVar[Pattern] = re.compile(r'(\d+)([MIDNSHP=X])')

    def __post_init__(self):
        if self.operation_length < 0:
            raise ValueError("operation_length must be non-negative")

    def __str__(self) -> str:
        return f"{self.operation_length}{self.operation.value}"

    def to_tuple(self) -> Tuple[int, int]:
        """Convert to a pysam cigartuple entry."""
        return (self.operation.code, self.operation_length)

    @classmethod
    def from_tuple(cls, cigartuple: Tuple[int, int]) -> 'CigarUnit':
        op, length = cigartuple
        return cls(operation=CigarOp.from_code(op), operation_length=length)


def parse_cigar(cigar: Union[str, Iterable[str]]) -> List[CigarUnit]:
    """Parse a CIGAR string (e.g. "5H1M3I") or a list of unit strings (e.g. ["5H", "1M"]).

    Raises:
        ValueError: if any part of the input is not a valid CIGAR unit
    """
    if isinstance(cigar, str):
        text = cigar
    else:
        text = ''.join(cigar)

    units = []
    consumed = 0
    for match in CigarUnit.UNIT_PATTERN.finditer(text):
        if match.start() != consumed:
            break
        units.append(CigarUnit(CigarOp(match.group(2)), int(match.group(1))))
        consumed = match.end()

    if consumed != len(text):
        raise ValueError(f"Malformed CIGAR: {text!r}")
    return units


def format_cigar(units: Iterable[CigarUnit]) -> str:
    return ''.join(str(unit) for unit in units)
