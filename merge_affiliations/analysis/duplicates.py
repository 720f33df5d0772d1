"""Collision diagnostics over the lookup indices."""


def duplicate_summary(index, title_of=None):
    """Count values sharing a key, and the distinct titles among them.

    ``title_of`` maps an indexed paper to its title; when omitted the unique
    title count is not computed.
    """
    duplicates = index.duplicates()
    summary = {
        'keys': len(index),
        'duplicate_keys': len(duplicates),
        'duplicate_values': sum(len(values) for values in duplicates.values()),
        'unique_titles': None,
    }
    if title_of is not None:
        summary['unique_titles'] = sum(
            len({title_of(value) for value in values}) for values in duplicates.values()
        )
    return summary


def submission_statistics(submission_repository):
    return {
        'papers': len(submission_repository.papers),
        'empty_authors_j': submission_repository.empty_authors_j_count,
        'empty_authors_e': submission_repository.empty_authors_e_count,
        'unparsed_volumes': submission_repository.unparsed_volume_count,
        'title_j': duplicate_summary(submission_repository.title_j_index),
        'title_e': duplicate_summary(submission_repository.title_e_index),
        'volume_j': duplicate_summary(submission_repository.volume_j_index, lambda p: p.title_j),
        'volume_e': duplicate_summary(submission_repository.volume_e_index, lambda p: p.title_e),
    }


def search_statistics(search_repository):
    stats = {}
    for lang in search_repository.languages:
        stats[lang] = {
            'papers': search_repository.records[lang].value_count(),
            'title': duplicate_summary(search_repository.title_index[lang]),
            'volume': duplicate_summary(search_repository.volume_index[lang], lambda p: p.title),
        }
    return stats
