from .config import ReadRequirements, FilterReadsConfig, SortVariantsConfig
from .logging import setup_file_logging
from .common import setup_output_directory, make_progress

__all__ = ['ReadRequirements', 'FilterReadsConfig', 'SortVariantsConfig', 'setup_file_logging', 'setup_output_directory', 'make_progress']
