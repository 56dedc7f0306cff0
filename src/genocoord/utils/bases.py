"""Canonical DNA base checks."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class CanonicalBases(Enum):
    """Alphabets accepted as canonical. Matching is case-sensitive."""
    ACGT = frozenset('ACGT')
    ACGTN = frozenset('ACGTN')


def is_canonical_base(base: str, canon: CanonicalBases = CanonicalBases.ACGT) -> bool:
    """Return True if the single symbol base is in the canon alphabet."""
    return base in canon.value


def find_non_canonical_base(bases: str, canon: CanonicalBases = CanonicalBases.ACGT) -> Optional[int]:
    """Return the index of the first non-canonical symbol in bases, or None if all are canonical.

    Raises:
        ValueError: if bases is empty
    """
    if not bases:
        raise ValueError("bases cannot be empty")

    alphabet = canon.value
    for i, base in enumerate(bases):
        if base not in alphabet:
            return i
    return None


def are_canonical_bases(bases: str, canon: CanonicalBases = CanonicalBases.ACGT) -> bool:
    """Return True if every symbol of bases is canonical.

    Raises:
        ValueError: if bases is empty
    """
    return find_non_canonical_base(bases, canon) is None
