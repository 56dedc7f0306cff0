from .ranges import Position, Range, ContigInfo
from .cigar import CigarOp, CigarUnit, parse_cigar, format_cigar
from .reads import Read, LinearAlignment
from .variants import Variant, VariantCall
from .annotations import Value, IntList, FloatList, StringList, ListValue

__all__ = [
    'Position',
    'Range',
    'ContigInfo',
    'CigarOp',
    'CigarUnit',
    'parse_cigar',
    'format_cigar',
    'Read',
    'LinearAlignment',
    'Variant',
    'VariantCall',
    'Value',
    'IntList',
    'FloatList',
    'StringList',
    'ListValue'
]
