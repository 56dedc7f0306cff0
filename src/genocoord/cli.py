#!/usr/bin/env python3
import os
import argparse
import sys
from rich_argparse import RawDescriptionRichHelpFormatter

from genocoord.commands import run_filter_reads, run_sort_variants
from genocoord.utils import setup_file_logging, FilterReadsConfig, SortVariantsConfig
from genocoord.utils.ranges import parse_interval_str


class GenocoordArgumentParser(argparse.ArgumentParser):
    """Argument parser that shows program-specific help on error."""

    def error(self, message):
        """Upon error, prints help message and error."""
        self.print_help()
        self.exit(2, f'\n\033[31mERROR\033[0m: {message}\n')


def add_logging_args(parser):
    parser.add_argument("--logging",
                        help="Log directory (default: <output dir>/logs)")
    parser.add_argument("--debug", action="store_true",
                        help="Enable debug logging")
    parser.add_argument("--console-output", action="store_true",
                        help="Enable logging to console (default: False)")


def build_parser():
    parser = GenocoordArgumentParser(
        prog='genocoord',
        formatter_class=RawDescriptionRichHelpFormatter,
        epilog="""
    - genocoord filter-reads: keep reads from a SAM/BAM file that pass quality and placement filters.
    - genocoord sort-variants: sort a VCF by the contig order of its header.

    View inputs & arguments for each command with genocoord {command} --help.
        """
    )
    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    # genocoord filter-reads
    filter_parser = subparsers.add_parser('filter-reads',
        help='Filter reads by duplicate/QC/secondary/supplementary flags, placement and mapping quality',
        description='Keep reads that satisfy every enabled read requirement.',
        formatter_class=parser.formatter_class,
        epilog="""
Examples:
  genocoord filter-reads --bam input.bam --output filtered.bam
  genocoord filter-reads --bam input.bam --output filtered.bam --region chr20:10000001-10010000 --min-mapq 20
        """)
    filter_parser.add_argument("--bam", "-b", required=True,
                               help="Input SAM/BAM file (required)")
    filter_parser.add_argument("--output", "-o", required=True,
                               help="Output SAM/BAM file; BAM if it ends with .bam (required)")
    filter_parser.add_argument("--region", "-r", default=None,
                               help="Restrict to a contig or 1-based contig:start-end interval (requires an indexed BAM)")
    filter_parser.add_argument("--test-mode", type=int, default=None,
                               help="Run in test mode with limited reads. Specify the number of reads to process (default: disabled)")

    reqs = filter_parser.add_argument_group('read requirements')
    reqs.add_argument("--min-mapq", type=int, default=0,
                      help="Minimum mapping quality; reads without one always pass (default: 0, disabled)")
    reqs.add_argument("--keep-duplicates", action="store_true",
                      help="Keep reads flagged as duplicates")
    reqs.add_argument("--keep-failed-vendor-qc", action="store_true",
                      help="Keep reads that failed vendor quality checks")
    reqs.add_argument("--keep-secondary", action="store_true",
                      help="Keep secondary alignments")
    reqs.add_argument("--keep-supplementary", action="store_true",
                      help="Keep supplementary alignments")
    reqs.add_argument("--keep-unaligned", action="store_true",
                      help="Keep unaligned reads")
    reqs.add_argument("--keep-improperly-placed", action="store_true",
                      help="Keep paired reads whose mate maps to another contig")
    add_logging_args(filter_parser)

    # genocoord sort-variants
    sort_parser = subparsers.add_parser('sort-variants',
        help='Sort a VCF by header contig order, then start and end',
        description='Sort VCF records by the contig order declared in the VCF header.',
        formatter_class=parser.formatter_class,
        epilog="""
Example:
  genocoord sort-variants --vcf input.vcf --output sorted.vcf.gz
        """)
    sort_parser.add_argument("--vcf", "-v", required=True,
                             help="Input VCF file (required)")
    sort_parser.add_argument("--output", "-o", required=True,
                             help="Output VCF; bgzipped and indexed if it ends with .gz (required)")
    add_logging_args(sort_parser)

    return parser, {'filter-reads': filter_parser, 'sort-variants': sort_parser}


def parse_args(argv=None):
    """Parse command line arguments."""
    parser, subparsers = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    subparser = subparsers[args.command]
    if args.command == 'filter-reads':
        if not os.path.exists(args.bam):
            subparser.error(f"File does not exist: {args.bam}")
        if args.region and not args.bam.endswith(".bam"):
            subparser.error("--region requires a BAM input")
        if args.min_mapq < 0:
            subparser.error("--min-mapq must be non-negative")
        if args.region and ':' in args.region:
            try:
                parse_interval_str(args.region)
            except ValueError as e:
                subparser.error(str(e))
    elif args.command == 'sort-variants':
        if not os.path.exists(args.vcf):
            subparser.error(f"File does not exist: {args.vcf}")

    return args


def main(argv=None):
    args = parse_args(argv)

    if args.command == "filter-reads":
        config = FilterReadsConfig.from_args(args)
        logger = setup_file_logging(config.log_dir, args.command, config.debug, config.console_output)
        run_filter_reads(config, logger)

    elif args.command == "sort-variants":
        try:
            config = SortVariantsConfig.from_args(args)
        except ValueError as e:
            build_parser()[1][args.command].error(str(e))
        logger = setup_file_logging(config.log_dir, args.command, config.debug, config.console_output)
        run_sort_variants(config, logger)


if __name__ == "__main__":
    main()
