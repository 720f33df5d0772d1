from .duplicates import duplicate_summary, submission_statistics, search_statistics

__all__ = [
    'duplicate_summary',
    'submission_statistics',
    'search_statistics',
]
