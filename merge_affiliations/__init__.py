__version__ = "1.0.0"

from .main import main, parse_arguments
from .config import load_config, build_run_settings
from .constants import MatchTier
from .index import MultiValueIndex
from .repository import SubmissionRepository, SearchRepository, aggregate_papers
from .services import MatchingService
from .workflows import MergeProcessor, StatisticsProcessor

__all__ = [
    'main',
    'parse_arguments',
    'load_config',
    'build_run_settings',
    'MatchTier',
    'MultiValueIndex',
    'SubmissionRepository',
    'SearchRepository',
    'aggregate_papers',
    'MatchingService',
    'MergeProcessor',
    'StatisticsProcessor',
]
