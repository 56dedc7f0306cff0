"""Command modules for the genocoord CLI."""

from __future__ import annotations

from genocoord.commands.filter_reads import run_filter_reads
from genocoord.commands.sort_variants import run_sort_variants

__all__ = ['run_filter_reads', 'run_sort_variants']
