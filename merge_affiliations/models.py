"""Records read from the two exports and the paper aggregates built from them."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from merge_affiliations.constants import (
    LANG_EN, LANG_JA, MatchTier, PROFILE_AFFILIATION_MARK, PROFILE_MEMBER_FORMAT,
    SEARCH_COLUMNS, SUBMISSION_COLUMNS,
)
from merge_affiliations.utils import normalize_name, volume_author


def _column(index):
    def getter(self):
        return self._value(index)
    return property(getter)


class _ColumnRecord:
    column_names = []

    def __init__(self, columns):
        if isinstance(columns, str):
            columns = columns.rstrip("\r\n").split("\t")
        self.columns = ["" if value is None else str(value) for value in columns]

    def _value(self, index):
        if index < len(self.columns):
            return self.columns[index]
        return ""

    def as_dict(self):
        return {name: self._value(i) for i, name in enumerate(self.column_names)}

    def __repr__(self):
        return f"{type(self).__name__}({self.columns[:3]!r}...)"


class SubmissionRecord(_ColumnRecord):
    """One author-affiliation line of the submission system export."""

    column_names = SUBMISSION_COLUMNS

    id1 = _column(0)
    id2 = _column(1)
    soccode = _column(2)
    title_j = _column(3)
    title_e = _column(4)
    volume1 = _column(5)
    inputnum = _column(6)
    membernum = _column(9)
    orgcode = _column(10)
    orgname_j = _column(11)
    orgname_e = _column(12)

    @property
    def authorname_j(self):
        return normalize_name(self._value(7))

    @property
    def authorname_e(self):
        return normalize_name(self._value(8))

    @property
    def receipt_id(self):
        return f"{self.id1}-{self.id2}"

    @property
    def is_first_author(self):
        return self.inputnum == "1"

    def _profile(self, orgname):
        member = PROFILE_MEMBER_FORMAT.format(self.membernum) if self.membernum else ""
        return f"{member}{PROFILE_AFFILIATION_MARK}{orgname}"

    @property
    def authorprof_j(self):
        return self._profile(self.orgname_j)

    @property
    def authorprof_e(self):
        return self._profile(self.orgname_e)


class SearchRecord(_ColumnRecord):
    """One paper, in one language, of the search system export."""

    column_names = SEARCH_COLUMNS

    id = _column(0)
    vol = _column(1)
    num = _column(2)
    s_page = _column(3)
    e_page = _column(4)
    date = _column(5)
    title = _column(6)
    author = _column(7)
    abstract = _column(8)
    raw_keyword = _column(9)
    section = _column(10)
    category1 = _column(11)
    category2 = _column(12)
    category3 = _column(13)
    disp_title = _column(14)
    disp_author_name = _column(15)
    disp_abstract = _column(16)
    keyword = _column(17)

    # the author column is the one rendered on the public site
    disp_author = author

    @property
    def passthrough(self):
        return self.columns[len(SEARCH_COLUMNS):]


@dataclass(frozen=True)
class SubmissionPaper:
    title_j: str
    title_e: str
    authors_j: Tuple[str, ...]
    authors_e: Tuple[str, ...]
    authorprofs_j: Tuple[str, ...]
    authorprofs_e: Tuple[str, ...]
    volume_no: Optional[str]
    record: SubmissionRecord

    def title(self, lang):
        return self.title_j if lang == LANG_JA else self.title_e

    def authors(self, lang):
        return self.authors_j if lang == LANG_JA else self.authors_e

    def profiles(self, lang):
        return list(self.authorprofs_j if lang == LANG_JA else self.authorprofs_e)

    def volume_author(self, lang):
        return volume_author(self.volume_no, self.authors(lang))


@dataclass(frozen=True)
class SearchPaper:
    title: str
    authors: Tuple[str, ...]
    volume_no: Optional[str]
    record: SearchRecord

    @property
    def id(self):
        return self.record.id

    @property
    def volume_author(self):
        return volume_author(self.volume_no, self.authors)


@dataclass
class MatchDecision:
    key: str
    tier: MatchTier
    note: str
    primary: SearchPaper
    primary_lang: str
    primary_profiles: List[str] = field(default_factory=list)
    secondary: Optional[SearchPaper] = None
    secondary_lang: Optional[str] = None
    secondary_profiles: List[str] = field(default_factory=list)
    candidate: Optional[SubmissionPaper] = None

    @property
    def is_dual(self):
        return self.secondary is not None


__all__ = [
    'SubmissionRecord', 'SearchRecord', 'SubmissionPaper', 'SearchPaper', 'MatchDecision',
]
