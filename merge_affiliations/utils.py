import re
import os
import logging

from merge_affiliations.constants import (
    AUTHOR_SEPARATOR, DEFAULT_ENCODING, DEFAULT_HEADER_LINES, FULL_WIDTH_SPACE, SEARCH_AUTHOR_SEPARATOR,
    VOLUME_PATTERN,
)

logger = logging.getLogger(__name__)

VOLUME_REGEX = re.compile(VOLUME_PATTERN, re.ASCII)


def normalize_name(text):
    if not isinstance(text, str):
        return text
    return text.replace(FULL_WIDTH_SPACE, " ")


def split_authors(text, separator=SEARCH_AUTHOR_SEPARATOR):
    if not text:
        return []
    authors = normalize_name(text).split(separator)
    # trailing separators carry no author
    while authors and authors[-1] == "":
        authors.pop()
    return authors


def parse_volume_string(raw):
    if not raw or not isinstance(raw, str):
        return None, None
    match = VOLUME_REGEX.search(raw)
    if not match:
        logger.debug(f"Could not extract volume/issue from '{raw}'")
        return None, None
    return match.group(1), match.group(2)


def volume_no(volume, num):
    if volume is None:
        return None
    return f"{volume.lower()}_{num}_"


def volume_author(volume_key, authors):
    """Join key of the two systems: volume key followed by the authors in order."""
    if volume_key is None:
        return None
    return AUTHOR_SEPARATOR.join([volume_key, *authors])


def read_tsv_rows(file_path, encoding=DEFAULT_ENCODING, header_lines=DEFAULT_HEADER_LINES):
    """Split every data line on tabs; rows may carry different column counts."""
    safe_path = sanitize_file_path(file_path, is_output=False)

    rows = []
    with open(safe_path, 'r', encoding=encoding) as f:
        for line_no, line in enumerate(f):
            if line_no < header_lines:
                continue
            line = line.rstrip("\r\n")
            if line == "":
                continue
            rows.append(line.split("\t"))

    if not rows:
        logger.warning(f"No data rows found in '{safe_path}'")
    logger.info(f"Read {len(rows)} rows from '{safe_path}'")
    return rows


def sanitize_file_path(file_path, is_output=False):
    if not file_path or not isinstance(file_path, str):
        raise ValueError("File path must be a non-empty string")

    file_path = file_path.strip()
    if not file_path:
        raise ValueError("File path cannot be empty or whitespace only")

    abs_path = os.path.abspath(file_path)

    if is_output:
        parent_dir = os.path.dirname(abs_path)
        if parent_dir and not os.path.exists(parent_dir):
            try:
                os.makedirs(parent_dir, exist_ok=True)
                logger.info(f"Created parent directory: {parent_dir}")
            except OSError as e:
                raise OSError(f"Cannot create parent directory {parent_dir}: {e}")

        if parent_dir and not os.access(parent_dir, os.W_OK):
            raise ValueError(f"Parent directory is not writable: {parent_dir}")
    else:
        if not os.path.exists(abs_path):
            raise FileNotFoundError(f"Input file not found: {abs_path}")

        if not os.path.isfile(abs_path):
            raise ValueError(f"Path is not a regular file: {abs_path}")

        if not os.access(abs_path, os.R_OK):
            raise ValueError(f"File is not readable: {abs_path}")

    logger.debug(f"Sanitized {'output' if is_output else 'input'} file path: {abs_path}")
    return abs_path


def validate_memory_limit(memory_limit):
    if not memory_limit or not isinstance(memory_limit, str):
        raise ValueError("Memory limit must be a non-empty string")

    memory_limit = memory_limit.strip().upper()

    memory_pattern = r'^\d+[KMGT]B$'

    if not re.match(memory_pattern, memory_limit):
        raise ValueError(f"Invalid memory limit format. Expected format like '8GB', '512MB', got: {memory_limit}")

    return memory_limit
