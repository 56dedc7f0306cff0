"""Command module for sorting variants by sequence dictionary order."""

import time

from genocoord.processors.vcf import VariantSortProcessor
from genocoord.utils.config import SortVariantsConfig
from genocoord.utils.common import make_progress, setup_output_directory


def run_sort_variants(config: SortVariantsConfig, logger):
    """Run the variant sorting pipeline."""
    setup_output_directory(config.output_path, logger)

    start_time = time.time()
    with make_progress() as progress, VariantSortProcessor(config.vcf_input) as vcf_proc:
        task = progress.add_task("[cyan]Sorting variants...", total=None)
        records = vcf_proc.sorted_records()
        progress.update(task, total=len(records), completed=len(records))
        logger.info(f"Contig order: {', '.join(vcf_proc.contig_rank())}")
        n_written = vcf_proc.write_sorted(config.output_path, records)

    elapsed = time.time() - start_time
    logger.info(f"Sorted {n_written} variants in {elapsed:.2f} seconds")
    print(f"Wrote {n_written} variants to {config.output_path}")
