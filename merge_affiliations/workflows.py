import os
import sys
import logging
import traceback

from merge_affiliations.config import RunSettings
from merge_affiliations.constants import MatchTier
from merge_affiliations.db import DatabaseManager
from merge_affiliations.export import sort_output_file, write_rows
from merge_affiliations.formatting import format_line
from merge_affiliations.repository import SearchRepository, SubmissionRepository
from merge_affiliations.services import MatchingService
from merge_affiliations.analysis import search_statistics, submission_statistics

logger = logging.getLogger(__name__)


def _check_input_files(settings: RunSettings):
    missing = [settings.submission_file] if not os.path.exists(settings.submission_file) else []
    missing.extend(path for path in settings.search_files.values() if not os.path.exists(path))
    for path in missing:
        print(f"Error: Input file not found at '{path}'")
    if missing:
        sys.exit(1)


def _build_repositories(settings: RunSettings):
    submission = SubmissionRepository(settings.submission_file, settings.encoding, settings.header_lines)
    search = SearchRepository(settings.search_files, settings.encoding, settings.header_lines)
    return submission, search


class MergeProcessor:
    def __init__(self, settings: RunSettings):
        self.settings = settings
        self.submission, self.search = _build_repositories(settings)
        self.matching_service = None
        self.row_count = 0

    def run(self, output_file=None):
        print("--- Running in Merge Mode ---")
        output_file = output_file or self.settings.output_file

        _check_input_files(self.settings)

        try:
            self._parse_sources()
            decisions = self._match()
            self._write_output(decisions, output_file)
            if self.settings.sort_output:
                self._sort_output(output_file)
            self._print_summary(output_file)

        except Exception as e:
            print(f"An unexpected error occurred: {e}")
            traceback.print_exc()
            if os.path.exists(output_file):
                os.remove(output_file)
            sys.exit(1)

    def _parse_sources(self):
        print(f"Parsing submission system data from '{self.settings.submission_file}'...")
        self.submission.parse()
        print(f"-> {len(self.submission.papers)} papers, "
              f"{len(self.submission.volume_j_index)} Japanese and "
              f"{len(self.submission.volume_e_index)} English volume-author keys.")

        for lang, filename in sorted(self.settings.search_files.items()):
            print(f"Parsing search system data ({lang}) from '{filename}'...")
        self.search.parse()
        for lang in self.search.languages:
            print(f"-> {lang}: {self.search.records[lang].value_count()} papers, "
                  f"{len(self.search.volume_index[lang])} volume-author keys.")

    def _match(self):
        print(f"\nMatching with primary language '{self.settings.primary_language}'"
              + (f" and secondary language '{self.settings.secondary_language}'..."
                 if self.settings.secondary_language else "..."))
        self.matching_service = MatchingService(
            self.submission,
            self.search,
            self.settings.primary_language,
            self.settings.secondary_language,
        )
        return self.matching_service.match_all()

    def _write_output(self, decisions, output_file):
        lines = (
            format_line(decision, self.settings.delimiter, self.settings.include_passthrough)
            for decision in decisions
        )
        self.row_count = write_rows(output_file, lines, self.settings.encoding)

    def _sort_output(self, output_file):
        print(f"Sorting '{output_file}' by columns {self.settings.sort_key_columns}...")
        with DatabaseManager(memory_limit=self.settings.memory_limit) as db_manager:
            sort_output_file(
                db_manager,
                output_file,
                self.settings.sort_key_columns,
                self.settings.delimiter,
                self.settings.encoding,
            )

    def _print_summary(self, output_file):
        stats = self.matching_service.stats
        print("\nProcessing complete.")
        print(f"-> {self.row_count} rows saved to '{output_file}'")
        for tier in MatchTier:
            print(f"   - {tier.value}: {stats['by_tier'].get(tier, 0)}")
        if stats['unpaired']:
            print(f"-> {stats['unpaired']} papers sharing a key had no submission candidate left to pair with")


class StatisticsProcessor:
    def __init__(self, settings: RunSettings):
        self.settings = settings
        self.submission, self.search = _build_repositories(settings)

    def run(self):
        print("--- Running in Statistics Mode ---")
        _check_input_files(self.settings)

        try:
            self.submission.parse()
            self.search.parse()
        except Exception as e:
            sys.exit(f"An error occurred while parsing input files: {e}")

        src = submission_statistics(self.submission)
        print("\nSubmission System")
        print("-" * 50)
        print(f"  Papers: {src['papers']:,}")
        print(f"  Empty Japanese author names: {src['empty_authors_j']:,}")
        print(f"  Empty English author names: {src['empty_authors_e']:,}")
        print(f"  Unparseable volume strings: {src['unparsed_volumes']:,}")
        self._print_duplicates("Japanese title", src['title_j'])
        self._print_duplicates("English title", src['title_e'])
        self._print_duplicates("Japanese volume-author", src['volume_j'])
        self._print_duplicates("English volume-author", src['volume_e'])

        for lang, dst in search_statistics(self.search).items():
            print(f"\nPaper Search System ({lang})")
            print("-" * 50)
            print(f"  Papers: {dst['papers']:,}")
            self._print_duplicates("title", dst['title'])
            self._print_duplicates("volume-author", dst['volume'])

        print("\n" + "=" * 50)
        print("Statistics complete!")

    @staticmethod
    def _print_duplicates(label, summary):
        line = (f"  {label}: {summary['keys']:,} keys, {summary['duplicate_keys']:,} shared by "
                f"{summary['duplicate_values']:,} papers")
        if summary['unique_titles'] is not None:
            line += f" ({summary['unique_titles']:,} unique titles)"
        print(line)
