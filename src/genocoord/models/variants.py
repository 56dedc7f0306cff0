from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from .annotations import ListValue, make_list_value

logger = logging.getLogger(__name__)

# genotype allele index for a missing call ("." in VCF)
MISSING_ALLELE = -1


@dataclass
class VariantCall:
    """Per-sample call attached to a Variant."""
    call_set_name: str = ""
    genotype: List[int] = field(default_factory=list)
    info: Dict[str, ListValue] = field(default_factory=dict)


@dataclass
class Variant:
    """A variant on a contig, 0-based half-open [start, end)."""
    reference_name: str = ""
    start: int = 0
    end: int = 0
    reference_bases: str = ""
    alternate_bases: List[str] = field(default_factory=list)
    names: List[str] = field(default_factory=list)
    calls: List[VariantCall] = field(default_factory=list)
    info: Dict[str, ListValue] = field(default_factory=dict)

    def __repr__(self) -> str:
        return (f"Variant(chrom={self.reference_name}, start={self.start}, end={self.end}, "
                f"ref={self.reference_bases}, alt={','.join(self.alternate_bases)})")

    @classmethod
    def from_pysam_record(cls, record) -> "Variant":
        """Construct a Variant from a pysam VariantRecord.

        Raises:
            ValueError: if the record cannot be converted
        """
        try:
            calls = []
            for sample_name, sample in record.samples.items():
                genotype = []
                if 'GT' in sample:
                    genotype = [MISSING_ALLELE if a is None else int(a) for a in (sample['GT'] or ())]
                calls.append(VariantCall(
                    call_set_name=str(sample_name),
                    genotype=genotype,
                    info=_annotations_from_pysam(sample.items(), skip=('GT',))
                ))

            return cls(
                reference_name=str(record.chrom),
                start=int(record.start),
                end=int(record.stop),
                reference_bases=str(record.ref),
                alternate_bases=[str(a) for a in (record.alts or ())],
                names=str(record.id).split(';') if record.id is not None else [],
                calls=calls,
                info=_annotations_from_pysam(record.info.items())
            )
        except (KeyError, ValueError, TypeError) as e:
            raise ValueError(f"Invalid VCF record: {str(e)}") from e


def _annotations_from_pysam(items, skip=()) -> Dict[str, ListValue]:
    annotations = {}
    for key, value in items:
        if key in skip or value is None:
            continue
        # flags have no typed list form
        if isinstance(value, bool):
            logger.debug(f"Skipping flag annotation {key}")
            continue
        values = [v for v in value if v is not None] if isinstance(value, tuple) else [value]
        if values:
            annotations[key] = make_list_value(values)
    return annotations
