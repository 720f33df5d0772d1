"""Writing the review file and the id-ordered post-sort applied to it."""

import os
import logging
import tempfile
import pandas as pd

from merge_affiliations.constants import (
    DEFAULT_ENCODING, DEFAULT_SORT_KEY_COLUMNS, LINE_TERMINATOR, TEMP_TABLE_OUTPUT_LINES, TSV,
)
from merge_affiliations.utils import sanitize_file_path

logger = logging.getLogger(__name__)


def write_rows(output_file, lines, encoding=DEFAULT_ENCODING):
    """Write pre-terminated lines sequentially; returns the number written."""
    safe_output_file = sanitize_file_path(output_file, is_output=True)
    count = 0
    with open(safe_output_file, 'w', encoding=encoding, newline='') as f:
        for line in lines:
            f.write(line)
            count += 1
    logger.info(f"Wrote {count} rows to '{safe_output_file}'")
    return count


def read_output_lines(output_file, encoding=DEFAULT_ENCODING):
    with open(output_file, 'r', encoding=encoding, newline='') as f:
        content = f.read()
    lines = content.split(LINE_TERMINATOR)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def sort_output_file(db_manager, output_file, key_columns=None, delimiter=TSV, encoding=DEFAULT_ENCODING):
    """Stable sort of the output file by the paper-id column(s), in place.

    Rows that compare equal on every key column keep their written order.
    """
    key_columns = list(DEFAULT_SORT_KEY_COLUMNS if key_columns is None else key_columns)
    if not key_columns:
        raise ValueError("At least one sort key column is required")

    safe_output_file = sanitize_file_path(output_file, is_output=False)
    lines = read_output_lines(safe_output_file, encoding)
    if not lines:
        return 0

    key_names = [f"key_{i}" for i in range(len(key_columns))]
    data = {'line_no': list(range(len(lines))), 'line': lines}
    split_lines = [line.split(delimiter) for line in lines]
    for name, column in zip(key_names, key_columns):
        data[name] = [fields[column] if column < len(fields) else "" for fields in split_lines]
    lines_df = pd.DataFrame(data)

    db_manager.register_df(TEMP_TABLE_OUTPUT_LINES, lines_df)
    try:
        order_by = ", ".join(key_names + ['line_no'])
        sorted_df = db_manager.query_df(f"SELECT line FROM {TEMP_TABLE_OUTPUT_LINES} ORDER BY {order_by}")
    finally:
        db_manager.unregister(TEMP_TABLE_OUTPUT_LINES)

    parent_dir = os.path.dirname(safe_output_file)
    fd, temp_path = tempfile.mkstemp(dir=parent_dir, suffix=".sorting")
    try:
        with os.fdopen(fd, 'w', encoding=encoding, newline='') as f:
            for line in sorted_df['line']:
                f.write(f"{line}{LINE_TERMINATOR}")
        os.replace(temp_path, safe_output_file)
    except Exception:
        if os.path.exists(temp_path):
            os.remove(temp_path)
        raise

    logger.info(f"Sorted {len(lines)} rows of '{safe_output_file}' by columns {key_columns}")
    return len(lines)
