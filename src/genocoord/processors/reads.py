from __future__ import annotations

from typing import Iterator, Optional
from pathlib import Path
import logging

import pysam

from ..models.reads import Read
from ..utils.config import ReadRequirements
from ..utils.ranges import parse_interval_str
from ..utils.reads import read_satisfies_requirements


class ReadFilterProcessor:
    """Streams reads from a SAM/BAM file and keeps those meeting a set of ReadRequirements."""

    def __init__(self, bam_path: Path, requirements: Optional[ReadRequirements] = None,
                 test_mode: Optional[int] = None):
        self.bam_path = bam_path
        self.requirements = requirements if requirements is not None else ReadRequirements()
        self.test_mode = test_mode
        self.logger = logging.getLogger(__name__)
        self._bam: Optional[pysam.AlignmentFile] = None
        self.n_kept = 0
        self.n_rejected = 0

    def __enter__(self):
        self._bam = pysam.AlignmentFile(str(self.bam_path), "r")
        self.logger.debug(f"Opened alignment file: {self.bam_path}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._bam:
            self._bam.close()
            self.logger.debug(f"Closed alignment file: {self.bam_path}")
            self._bam = None

    @property
    def header(self) -> pysam.AlignmentHeader:
        if not self._bam:
            raise RuntimeError("Alignment file not opened. Use with-statement to open file.")
        return self._bam.header

    def _ensure_index(self) -> None:
        index_path = str(self.bam_path) + ".bai"
        if str(self.bam_path).endswith(".bam") and not Path(index_path).exists():
            self.logger.info(f"Index not found for {self.bam_path}, creating index...")
            try:
                pysam.samtools.index(str(self.bam_path))
                self.logger.info("Index created successfully")
            except pysam.utils.SamtoolsError as exc:
                self.logger.error(f"Failed to create BAM index: {exc}")
                raise RuntimeError(f"Failed to create BAM index: {exc}") from exc

    def _fetch(self, region: Optional[str]) -> Iterator[pysam.AlignedSegment]:
        if not self._bam:
            raise RuntimeError("Alignment file not opened. Use with-statement to open file.")

        if region is None:
            return self._bam.fetch(until_eof=True)

        self._ensure_index()
        # reopen so the freshly built index is picked up
        if not self._bam.has_index():
            self._bam.close()
            self._bam = pysam.AlignmentFile(str(self.bam_path), "r")
        # contig names may themselves contain ":"
        if region in self._bam.references:
            return self._bam.fetch(contig=region)
        try:
            interval = parse_interval_str(region)
        except ValueError:
            return self._bam.fetch(contig=region)
        return self._bam.fetch(interval.reference_name, interval.start, interval.end)

    def filter_reads(self, region: Optional[str] = None) -> Iterator[pysam.AlignedSegment]:
        """Yield the reads that satisfy the requirements, optionally restricted to region.

        Args:
            region: "contig", or 1-based "contig:start-end"; all reads
                (unmapped included) when None

        Yields:
            pysam.AlignedSegment objects that were kept
        """
        self.n_kept = 0
        self.n_rejected = 0
        for i, segment in enumerate(self._fetch(region)):
            if self.test_mode is not None and i >= self.test_mode:
                break

            read = Read.from_pysam_read(segment)
            if read_satisfies_requirements(read, self.requirements):
                self.n_kept += 1
                yield segment
            else:
                self.n_rejected += 1

    def write_filtered(self, output_path: Path, region: Optional[str] = None, on_read=None) -> int:
        """Write kept reads to output_path (BAM if it ends with .bam, SAM otherwise).

        Args:
            on_read: optional callback invoked once per kept read

        Returns:
            Number of reads written
        """
        mode = "wb" if str(output_path).endswith(".bam") else "w"
        with pysam.AlignmentFile(str(output_path), mode, header=self.header) as out:
            for segment in self.filter_reads(region):
                out.write(segment)
                if on_read is not None:
                    on_read()

        self.logger.info(f"Kept {self.n_kept} reads, rejected {self.n_rejected} reads")
        return self.n_kept
