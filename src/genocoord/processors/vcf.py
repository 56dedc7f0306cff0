from typing import Dict, List, Optional
from pathlib import Path
import logging

import pysam

from ..models.variants import Variant
from ..utils.ranges import contigs_from_header, map_contig_name_to_pos_in_fasta, variant_sort_key


class VariantSortProcessor:
    """Sorts VCF records by the contig order of the file's own header."""

    def __init__(self, vcf_path: Path):
        self.vcf_path = vcf_path
        self._vcf: Optional[pysam.VariantFile] = None
        self.logger = logging.getLogger(__name__)

    def __enter__(self):
        self._vcf = pysam.VariantFile(str(self.vcf_path), 'r')
        self.logger.debug(f"Opened VCF file: {self.vcf_path}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._vcf:
            self._vcf.close()
            self.logger.debug(f"Closed VCF file: {self.vcf_path}")
            self._vcf = None

    def _require_open(self) -> pysam.VariantFile:
        if not self._vcf:
            raise RuntimeError("VCF file not opened. Use with-statement to open file.")
        return self._vcf

    def contig_rank(self) -> Dict[str, int]:
        """Rank of each contig declared in the header, in declaration order."""
        vcf = self._require_open()
        return map_contig_name_to_pos_in_fasta(contigs_from_header(vcf.header))

    def sorted_records(self) -> List[pysam.VariantRecord]:
        """Read every record and return them ordered by (contig rank, start, end).

        Raises:
            RuntimeError: if VCF file not opened
            ValueError: if a record cannot be converted
        """
        vcf = self._require_open()

        keyed = []
        for record in vcf:
            try:
                keyed.append((Variant.from_pysam_record(record), record))
            except ValueError as e:
                raise ValueError(f"Invalid variant record at {record.chrom}:{record.pos}: {str(e)}") from e

        # contigs missing from the header are added by pysam while reading
        sort_key = variant_sort_key(self.contig_rank())
        keyed.sort(key=lambda pair: sort_key(pair[0]))
        self.logger.debug(f"Sorted {len(keyed)} records")
        return [record for _, record in keyed]

    def write_sorted(self, output_path: Path, records: Optional[List[pysam.VariantRecord]] = None) -> int:
        """Write records (sorted_records() by default) to output_path.

        A .gz output is bgzip compressed and tabix indexed.

        Returns:
            Number of records written
        """
        vcf = self._require_open()
        if records is None:
            records = self.sorted_records()

        compress = str(output_path).endswith('.gz')
        with pysam.VariantFile(str(output_path), 'wz' if compress else 'w', header=vcf.header) as out:
            for record in records:
                out.write(record)

        if compress:
            pysam.tabix_index(str(output_path), preset='vcf', force=True)
        return len(records)
