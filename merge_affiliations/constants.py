from enum import Enum

# Languages
LANG_JA = "ja"
LANG_EN = "en"
SUPPORTED_LANGUAGES = (LANG_JA, LANG_EN)

# Delimiters
TSV = "\t"
CSV = ","
DELIMITERS = {"tsv": TSV, "csv": CSV}
LINE_TERMINATOR = "\r\n"
AUTHOR_SEPARATOR = "；"
SEARCH_AUTHOR_SEPARATOR = "＠"
NOTE_SEPARATOR = "｜＋｜"
FULL_WIDTH_SPACE = "　"
PROFILE_AFFILIATION_MARK = "＠"
PROFILE_MEMBER_FORMAT = "（{}）"

# Raw "Vol.J93-D,No.3," field of the submission system
VOLUME_PATTERN = r"Vol.(\w+\d+\-\w+),No.(\d+),"

# Output row types
ROW_TYPE_SINGLE = "1"
ROW_TYPE_DUAL = "2"

NO_HINTS = "no hints"


class MatchTier(str, Enum):
    # title and volume-author key both equal in the primary language
    FULL_MATCH = "FULL_MATCH"
    # title and volume-author key both equal in the secondary language
    EN_FULL_MATCH = "EN_FULL_MATCH"
    # volume-author key equal, title differs
    VOL_AUTHOR_MATCH = "VOL_AUTHOR_MATCH"
    EN_VOL_AUTHOR_MATCH = "EN_VOL_AUTHOR_MATCH"
    # several papers share one volume-author key, paired in title order
    MULTI_VOL_AUTHOR_MATCH = "MULTI_VOL_AUTHOR_MATCH"
    NOT_MATCHED = "NOT_MATCHED"


# Submission system export columns
SUBMISSION_COLUMNS = [
    'id1', 'id2', 'soccode', 'title_j', 'title_e', 'volume1', 'inputnum',
    'authorname_j', 'authorname_e', 'membernum', 'orgcode', 'orgname_j', 'orgname_e',
]

# Search system export columns; anything after these is passed through
SEARCH_COLUMNS = [
    'id', 'vol', 'num', 's_page', 'e_page', 'date', 'title', 'author',
    'abstract', 'keyword', 'section', 'category1', 'category2', 'category3',
    'disp_title', 'disp_author_name', 'disp_abstract', 'disp_keyword',
]

# Default configuration values
DEFAULT_ENCODING = "utf-8"
DEFAULT_HEADER_LINES = 2
DEFAULT_DELIMITER = "tsv"
DEFAULT_MEMORY_LIMIT = "1GB"
# 0-based column of the primary paper id in an output row
DEFAULT_SORT_KEY_COLUMNS = [2]

# Database table names
TEMP_TABLE_OUTPUT_LINES = "output_lines"
