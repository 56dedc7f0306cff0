"""Command module for read filtering."""

import time

from genocoord.processors.reads import ReadFilterProcessor
from genocoord.utils.config import FilterReadsConfig
from genocoord.utils.common import make_progress, setup_output_directory


def run_filter_reads(config: FilterReadsConfig, logger):
    """Run the read filtering pipeline."""

    if config.test_mode is not None:
        logger.info(f"Running in test mode (limited to {config.test_mode} reads)")
    logger.info(f"Read requirements: {config.requirements}")
    if config.region:
        logger.info(f"Restricting to region {config.region}")

    setup_output_directory(config.output_path, logger)

    start_time = time.time()
    with make_progress() as progress, \
         ReadFilterProcessor(config.bam_input, config.requirements, config.test_mode) as read_proc:
        task = progress.add_task("[cyan]Filtering reads...", total=None)
        n_kept = read_proc.write_filtered(config.output_path, config.region,
                                          on_read=lambda: progress.update(task, advance=1))
        n_total = read_proc.n_kept + read_proc.n_rejected

    elapsed = time.time() - start_time
    logger.info(f"Completed filtering in {elapsed:.2f} seconds")
    if n_total:
        logger.info(f"Kept {n_kept}/{n_total} reads ({n_kept / n_total * 100:.1f}%)")
    else:
        logger.warning("No reads found in input")

    print(f"Wrote {n_kept} reads to {config.output_path}")
