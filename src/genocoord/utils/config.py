from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class ReadRequirements:
    """Which reads to keep. Defaults are strict: every filter applies."""
    keep_duplicates: bool = False
    keep_failed_vendor_quality_checks: bool = False
    keep_secondary_alignments: bool = False
    keep_supplementary_alignments: bool = False
    keep_unaligned: bool = False
    keep_improperly_placed: bool = False
    min_mapping_quality: int = 0  # 0 disables the threshold

    def __post_init__(self):
        if self.min_mapping_quality < 0:
            raise ValueError("min_mapping_quality must be non-negative")

    @classmethod
    def from_args(cls, args):
        """Create ReadRequirements instance from parsed command line arguments."""
        return cls(
            keep_duplicates=args.keep_duplicates,
            keep_failed_vendor_quality_checks=args.keep_failed_vendor_qc,
            keep_secondary_alignments=args.keep_secondary,
            keep_supplementary_alignments=args.keep_supplementary,
            keep_unaligned=args.keep_unaligned,
            keep_improperly_placed=args.keep_improperly_placed,
            min_mapping_quality=args.min_mapq
        )


@dataclass
class FilterReadsConfig:
    """Configuration for the filter-reads command."""
    bam_input: Path
    output_path: Path
    requirements: ReadRequirements = field(default_factory=ReadRequirements)

    region: Optional[str] = None
    log_dir: Optional[Path] = None  # output_path.parent/logs if not specified
    debug: bool = False
    console_output: bool = False
    test_mode: Optional[int] = None

    @classmethod
    def from_args(cls, args):
        """Create FilterReadsConfig instance from parsed command line arguments."""
        output_path = Path(args.output)
        return cls(
            bam_input=Path(args.bam),
            output_path=output_path,
            requirements=ReadRequirements.from_args(args),
            region=args.region,
            log_dir=Path(args.logging) if args.logging else output_path.parent / 'logs',
            debug=args.debug,
            console_output=args.console_output,
            test_mode=args.test_mode
        )


@dataclass
class SortVariantsConfig:
    """Configuration for the sort-variants command."""
    vcf_input: Path
    output_path: Path
    log_dir: Optional[Path] = None
    debug: bool = False
    console_output: bool = False

    @classmethod
    def from_args(cls, args):
        """Create SortVariantsConfig instance from parsed command line arguments."""
        output_path = Path(args.output)
        if output_path.resolve() == Path(args.vcf).resolve():
            raise ValueError("Output VCF must differ from the input VCF")

        return cls(
            vcf_input=Path(args.vcf),
            output_path=output_path,
            log_dir=Path(args.logging) if getattr(args, 'logging', None) else output_path.parent / 'logs',
            debug=getattr(args, 'debug', False),
            console_output=getattr(args, 'console_output', False)
        )
