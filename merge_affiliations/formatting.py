"""Renders match decisions into the positional rows of the review file."""

from merge_affiliations.constants import (
    AUTHOR_SEPARATOR, CSV, LINE_TERMINATOR, NOTE_SEPARATOR, ROW_TYPE_DUAL,
    ROW_TYPE_SINGLE, TSV, MatchTier,
)
from merge_affiliations.models import MatchDecision, SearchPaper, SubmissionPaper


def merge_authors_and_affiliations(authors, affiliations=None):
    affiliations = affiliations or []
    result = []
    for i, author in enumerate(authors):
        profile = affiliations[i] if i < len(affiliations) else ""
        result.append(f"{author}{profile}")
    return AUTHOR_SEPARATOR.join(result)


def line_format(data, delimiter=TSV):
    if delimiter not in (TSV, CSV):
        raise ValueError(f"Unsupported delimiter: {delimiter!r}")
    return delimiter.join(data)


def data_format(lang, paper: SearchPaper, affiliations, include_passthrough=False):
    record = paper.record
    fields = [
        lang,
        record.id,
        record.vol,
        record.num,
        record.s_page,
        record.e_page,
        record.date,
        record.disp_title,
        merge_authors_and_affiliations(paper.authors, affiliations),
        record.disp_abstract,
        record.keyword,
        record.category1,
        record.category3,
    ]
    if include_passthrough:
        fields.extend(record.passthrough)
    return fields


def note_format(paper: SubmissionPaper):
    return NOTE_SEPARATOR.join([
        paper.record.id1,
        paper.record.id2,
        paper.volume_no or "",
        paper.title_j,
        paper.title_e,
        merge_authors_and_affiliations(paper.authors_j, paper.authorprofs_j),
        merge_authors_and_affiliations(paper.authors_e, paper.authorprofs_e),
    ])


def notes(tier: MatchTier, note):
    # trailing empty column ends every row
    return [MatchTier(tier).value, note, LINE_TERMINATOR]


def format_decision(decision: MatchDecision, include_passthrough=False):
    fields = [ROW_TYPE_DUAL if decision.is_dual else ROW_TYPE_SINGLE]
    fields.extend(data_format(
        decision.primary_lang, decision.primary, decision.primary_profiles, include_passthrough
    ))
    if decision.is_dual:
        fields.extend(data_format(
            decision.secondary_lang, decision.secondary, decision.secondary_profiles, include_passthrough
        ))
    fields.extend(notes(decision.tier, decision.note))
    return fields


def format_line(decision: MatchDecision, delimiter=TSV, include_passthrough=False):
    return line_format(format_decision(decision, include_passthrough), delimiter)


__all__ = [
    'merge_authors_and_affiliations', 'line_format', 'data_format', 'note_format',
    'notes', 'format_decision', 'format_line',
]
