import sys
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import yaml

from merge_affiliations.constants import (
    DEFAULT_DELIMITER, DEFAULT_ENCODING, DEFAULT_HEADER_LINES, DEFAULT_MEMORY_LIMIT,
    DEFAULT_SORT_KEY_COLUMNS, DELIMITERS, LANG_EN, LANG_JA, SUPPORTED_LANGUAGES,
)


def load_config(config_path):
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
    except Exception as e:
        print(f"Error loading configuration file: {e}")
        sys.exit(1)
    if not isinstance(config, dict):
        print(f"Error loading configuration file: '{config_path}' does not contain a mapping")
        sys.exit(1)
    return config


@dataclass
class RunSettings:
    submission_file: str
    search_files: Dict[str, str]
    output_file: str
    primary_language: str
    secondary_language: Optional[str] = None
    encoding: str = DEFAULT_ENCODING
    header_lines: int = DEFAULT_HEADER_LINES
    delimiter: str = DELIMITERS[DEFAULT_DELIMITER]
    include_passthrough: bool = False
    sort_output: bool = True
    sort_key_columns: List[int] = field(default_factory=lambda: list(DEFAULT_SORT_KEY_COLUMNS))
    memory_limit: str = DEFAULT_MEMORY_LIMIT


def build_run_settings(config):
    """Validate a loaded configuration mapping; raises KeyError or ValueError."""
    submission_file = config['submission_file']
    search_files = config['search_files']
    output_file = config['output_file']

    if not submission_file or not output_file:
        raise ValueError("submission_file and output_file must be non-empty")
    if not isinstance(search_files, dict) or not search_files:
        raise ValueError("search_files must map a language code to a file name")

    unknown = set(search_files) - set(SUPPORTED_LANGUAGES)
    if unknown:
        raise ValueError(f"Unsupported search languages: {sorted(unknown)}")

    primary_language = config.get('primary_language') or (LANG_JA if LANG_JA in search_files else LANG_EN)
    if primary_language not in search_files:
        raise ValueError(f"primary_language '{primary_language}' has no entry in search_files")

    others = [lang for lang in sorted(search_files) if lang != primary_language]
    secondary_language = others[0] if others else None

    delimiter_name = config.get('delimiter', DEFAULT_DELIMITER)
    if delimiter_name not in DELIMITERS:
        raise ValueError(f"delimiter must be one of {sorted(DELIMITERS)}, got '{delimiter_name}'")

    header_lines = int(config.get('header_lines', DEFAULT_HEADER_LINES))
    if header_lines < 0:
        raise ValueError("header_lines cannot be negative")

    sort_key_columns = [int(c) for c in config.get('sort_key_columns', DEFAULT_SORT_KEY_COLUMNS)]

    return RunSettings(
        submission_file=submission_file,
        search_files=dict(search_files),
        output_file=output_file,
        primary_language=primary_language,
        secondary_language=secondary_language,
        encoding=config.get('encoding', DEFAULT_ENCODING),
        header_lines=header_lines,
        delimiter=DELIMITERS[delimiter_name],
        include_passthrough=bool(config.get('include_passthrough', False)),
        sort_output=bool(config.get('sort_output', True)),
        sort_key_columns=sort_key_columns,
        memory_limit=config.get('memory_limit', DEFAULT_MEMORY_LIMIT),
    )
