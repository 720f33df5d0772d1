import unittest

from merge_affiliations.constants import CSV, NO_HINTS, MatchTier
from merge_affiliations.formatting import (
    format_decision, format_line, line_format, merge_authors_and_affiliations, note_format, notes,
)
from merge_affiliations.models import MatchDecision, SearchRecord, SubmissionRecord
from merge_affiliations.repository import aggregate_papers, build_search_paper
from tests.helpers import search_row, submission_row


def _search_paper(paper_id="p1", title="題目", authors=("田中", "佐藤"), passthrough=None):
    return build_search_paper(SearchRecord(search_row(paper_id, "J93-D", "3", title, list(authors),
                                                      passthrough=passthrough)))


def _submission_paper():
    rows = [
        submission_row("0001", "題目", "Title", "Vol.J93-D,No.3,", "1", "田中", "Tanaka", membernum="7"),
        submission_row("0001", "題目", "Title", "Vol.J93-D,No.3,", "2", "佐藤", "Sato"),
    ]
    return aggregate_papers([SubmissionRecord(row) for row in rows])[0]


class MergeAuthorsTests(unittest.TestCase):
    def test_profiles_are_appended_to_names(self) -> None:
        self.assertEqual(
            merge_authors_and_affiliations(["田中", "佐藤"], ["（7）＠東大", "＠京大"]),
            "田中（7）＠東大；佐藤＠京大",
        )

    def test_missing_profiles_leave_names_bare(self) -> None:
        self.assertEqual(merge_authors_and_affiliations(["田中", "佐藤"], []), "田中；佐藤")
        self.assertEqual(merge_authors_and_affiliations(["田中", "佐藤"], ["＠東大"]), "田中＠東大；佐藤")


class NoteFormatTests(unittest.TestCase):
    def test_note_summarizes_the_submission_paper(self) -> None:
        note = note_format(_submission_paper())
        self.assertEqual(note, "｜＋｜".join([
            "2010", "0001", "j93-d_3_", "題目", "Title",
            "田中（7）＠東京大学；佐藤＠東京大学",
            "Tanaka（7）＠Univ. of Tokyo；Sato＠Univ. of Tokyo",
        ]))

    def test_notes_triple_ends_with_line_terminator(self) -> None:
        self.assertEqual(notes(MatchTier.NOT_MATCHED, NO_HINTS), ["NOT_MATCHED", "no hints", "\r\n"])

    def test_notes_rejects_unknown_tiers(self) -> None:
        with self.assertRaises(ValueError):
            notes("PARTIAL_MATCH", NO_HINTS)


class FormatDecisionTests(unittest.TestCase):
    def test_single_language_row(self) -> None:
        decision = MatchDecision(
            key="k", tier=MatchTier.NOT_MATCHED, note=NO_HINTS,
            primary=_search_paper(), primary_lang="ja",
        )
        line = format_line(decision)

        self.assertEqual(line, "\t".join([
            "1", "ja", "p1", "J93-D", "3", "1", "10", "2010/03", "題目", "田中；佐藤",
            "abstract", "kw", "論文", "Pattern Recognition", "NOT_MATCHED", "no hints", "\r\n",
        ]))

    def test_dual_language_row_with_profiles(self) -> None:
        candidate = _submission_paper()
        decision = MatchDecision(
            key="k", tier=MatchTier.FULL_MATCH, note=note_format(candidate),
            primary=_search_paper(), primary_lang="ja",
            primary_profiles=candidate.profiles("ja"),
            secondary=_search_paper(title="Title", authors=("Tanaka", "Sato")), secondary_lang="en",
            secondary_profiles=candidate.profiles("en"),
            candidate=candidate,
        )
        fields = format_decision(decision)

        self.assertEqual(fields[0], "2")
        self.assertEqual(len(fields), 1 + 13 + 13 + 3)
        self.assertEqual(fields[9], "田中（7）＠東京大学；佐藤＠東京大学")
        self.assertEqual(fields[14], "en")
        self.assertEqual(fields[22], "Tanaka（7）＠Univ. of Tokyo；Sato＠Univ. of Tokyo")
        self.assertEqual(fields[-3:], ["FULL_MATCH", decision.note, "\r\n"])

    def test_passthrough_columns_follow_the_fixed_fields(self) -> None:
        decision = MatchDecision(
            key="k", tier=MatchTier.NOT_MATCHED, note=NO_HINTS,
            primary=_search_paper(passthrough=["erratum-1", "1"]), primary_lang="ja",
        )
        fields = format_decision(decision, include_passthrough=True)
        self.assertEqual(fields[14:16], ["erratum-1", "1"])

    def test_line_format_delimiters(self) -> None:
        self.assertEqual(line_format(["a", "b"], CSV), "a,b")
        with self.assertRaises(ValueError):
            line_format(["a"], ";")


if __name__ == "__main__":
    unittest.main()
