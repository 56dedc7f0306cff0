from __future__ import annotations

from .reads import ReadFilterProcessor
from .vcf import VariantSortProcessor

__all__ = [
    'ReadFilterProcessor',
    'VariantSortProcessor'
]
