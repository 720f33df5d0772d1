"""Repositories that parse the two exports and index their papers."""

import logging

from merge_affiliations.constants import DEFAULT_ENCODING, DEFAULT_HEADER_LINES, LANG_EN, LANG_JA
from merge_affiliations.index import MultiValueIndex
from merge_affiliations.models import SearchPaper, SearchRecord, SubmissionPaper, SubmissionRecord
from merge_affiliations.utils import parse_volume_string, read_tsv_rows, split_authors, volume_no

logger = logging.getLogger(__name__)


class _PaperAccumulator:
    def __init__(self, record: SubmissionRecord):
        self.record = record
        self.title_j = record.title_j
        self.title_e = record.title_e
        self.volume_no = volume_no(*parse_volume_string(record.volume1))
        self.authors_j = []
        self.authors_e = []
        self.authorprofs_j = []
        self.authorprofs_e = []

    def add_author(self, record: SubmissionRecord):
        self.authors_j.append(record.authorname_j)
        self.authors_e.append(record.authorname_e)
        self.authorprofs_j.append(record.authorprof_j)
        self.authorprofs_e.append(record.authorprof_e)

    def has_authors(self):
        return bool(self.authors_j) or bool(self.authors_e)

    def build(self):
        return SubmissionPaper(
            title_j=self.title_j,
            title_e=self.title_e,
            authors_j=tuple(self.authors_j),
            authors_e=tuple(self.authors_e),
            authorprofs_j=tuple(self.authorprofs_j),
            authorprofs_e=tuple(self.authorprofs_e),
            volume_no=self.volume_no,
            record=self.record,
        )


def aggregate_papers(records):
    """Group contiguous author rows into one SubmissionPaper per first-author row.

    Rows arrive in author order, each paper starting with the row whose
    ``inputnum`` is "1". The paper in progress is flushed when the next
    first-author row arrives and at the end of input.
    """
    papers = []
    current = None

    for record in records:
        if record.is_first_author:
            if current is not None and current.has_authors():
                papers.append(current.build())
            current = _PaperAccumulator(record)
        elif current is None:
            logger.warning(f"Skipping author row {record.receipt_id} that precedes any first-author row")
            continue
        current.add_author(record)

    if current is not None and current.has_authors():
        papers.append(current.build())

    return papers


class SubmissionRepository:
    def __init__(self, filename=None, encoding=DEFAULT_ENCODING, header_lines=DEFAULT_HEADER_LINES):
        self.filename = filename
        self.encoding = encoding
        self.header_lines = header_lines

        self.records = MultiValueIndex()
        self.papers = []
        self.title_j_index = MultiValueIndex()
        self.volume_j_index = MultiValueIndex()
        self.title_e_index = MultiValueIndex()
        self.volume_e_index = MultiValueIndex()

        self.empty_authors_j_count = 0
        self.empty_authors_e_count = 0
        self.unparsed_volume_count = 0
        self._parsed = False

    def already_parsed(self):
        return self._parsed

    def parse(self, rows=None):
        if self.already_parsed():
            logger.info("Submission data already parsed; skipping")
            return False

        if rows is None:
            rows = read_tsv_rows(self.filename, self.encoding, self.header_lines)

        records = [SubmissionRecord(columns) for columns in rows]
        for record in records:
            self.records.add(record.receipt_id, record)
            if record.authorname_j == "":
                self.empty_authors_j_count += 1
            if record.authorname_e == "":
                self.empty_authors_e_count += 1

        self.papers = aggregate_papers(records)
        for paper in self.papers:
            self._index_paper(paper)

        self._parsed = True
        logger.info(
            f"Parsed {len(records)} submission rows into {len(self.papers)} papers "
            f"({self.unparsed_volume_count} without a volume key)"
        )
        return True

    def _index_paper(self, paper: SubmissionPaper):
        self.title_j_index.add(paper.title_j, paper)
        self.title_e_index.add(paper.title_e, paper)

        if paper.volume_no is None:
            self.unparsed_volume_count += 1
            logger.debug(f"Paper {paper.record.receipt_id} has no volume key; not indexed by volume-author")
            return

        self.volume_j_index.add(paper.volume_author(LANG_JA), paper)
        self.volume_e_index.add(paper.volume_author(LANG_EN), paper)

    def title_index(self, lang):
        return self.title_j_index if lang == LANG_JA else self.title_e_index

    def volume_index(self, lang):
        return self.volume_j_index if lang == LANG_JA else self.volume_e_index


class SearchRepository:
    def __init__(self, filenames=None, encoding=DEFAULT_ENCODING, header_lines=DEFAULT_HEADER_LINES):
        self.filenames = dict(filenames or {})
        self.encoding = encoding
        self.header_lines = header_lines

        self.records = {}
        self.title_index = {}
        self.volume_index = {}
        for lang in sorted(self.filenames):
            self._add_language(lang)
        self._parsed = False

    def _add_language(self, lang):
        self.records.setdefault(lang, MultiValueIndex())
        self.title_index.setdefault(lang, MultiValueIndex())
        self.volume_index.setdefault(lang, MultiValueIndex())

    @property
    def languages(self):
        return sorted(self.records)

    def already_parsed(self):
        return self._parsed

    def parse(self, rows_by_language=None):
        if self.already_parsed():
            logger.info("Search data already parsed; skipping")
            return False

        if rows_by_language is None:
            rows_by_language = {
                lang: read_tsv_rows(filename, self.encoding, self.header_lines)
                for lang, filename in self.filenames.items()
            }

        for lang in sorted(rows_by_language):
            self._add_language(lang)
            for columns in rows_by_language[lang]:
                self._index_paper(lang, build_search_paper(SearchRecord(columns)))
            logger.info(f"Indexed {len(self.records[lang])} search papers for '{lang}'")

        self._parsed = True
        return True

    def _index_paper(self, lang, paper: SearchPaper):
        self.records[lang].add(paper.id, paper)
        self.title_index[lang].add(paper.title, paper)
        self.volume_index[lang].add(paper.volume_author, paper)


def build_search_paper(record: SearchRecord):
    return SearchPaper(
        title=record.disp_title,
        authors=tuple(split_authors(record.disp_author)),
        volume_no=volume_no(record.vol, record.num),
        record=record,
    )
