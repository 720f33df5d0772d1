import logging
from collections import Counter

from merge_affiliations.constants import NO_HINTS, MatchTier
from merge_affiliations.formatting import note_format
from merge_affiliations.models import MatchDecision
from merge_affiliations.utils import volume_author

logger = logging.getLogger(__name__)


class MatchingService:
    """Links each search-system paper to its submission-system counterpart.

    Papers are visited in ascending volume-author key order of the primary
    language. Candidates are looked up by the same key in the submission
    index, falling back to the secondary language's key when the primary key
    has no submission entry.
    """

    def __init__(self, submission_repository, search_repository, primary_language, secondary_language=None):
        self.primary_language = primary_language
        self.secondary_language = secondary_language

        self.src_volume = submission_repository.volume_index(primary_language)
        self.dst_volume = search_repository.volume_index[primary_language]

        self.src_volume_secondary = None
        self.dst_records_secondary = None
        if secondary_language:
            self.src_volume_secondary = submission_repository.volume_index(secondary_language)
            self.dst_records_secondary = search_repository.records.get(secondary_language)

        self.stats = {"total": 0, "by_tier": Counter(), "unpaired": 0}

    def match_all(self):
        self.stats = {"total": 0, "by_tier": Counter(), "unpaired": 0}
        decisions = []
        for key in self.dst_volume.sorted_keys():
            decisions.extend(self.match_key(key))
        return decisions

    def match_key(self, key):
        search_papers = self.dst_volume.get(key)
        candidates = self.src_volume.get(key)

        if not candidates:
            decisions = [self._match_via_secondary(key, paper) for paper in self._sort_search(search_papers)]
        elif self.dst_volume.has_multiple_values(key):
            decisions = self._match_multiple(key, search_papers, candidates)
        else:
            decisions = [self._match_single(key, search_papers[0], candidates)]

        for decision in decisions:
            self.stats["total"] += 1
            self.stats["by_tier"][decision.tier] += 1
        return decisions

    def _match_via_secondary(self, key, paper):
        counterpart = self._secondary_counterpart(paper)
        if counterpart is None:
            return self._decision(key, MatchTier.NOT_MATCHED, paper)

        secondary_key = volume_author(counterpart.volume_no, counterpart.authors)
        candidates = self.src_volume_secondary.get(secondary_key)
        if not candidates:
            return self._decision(key, MatchTier.NOT_MATCHED, paper, counterpart=counterpart)

        candidate = self._pick_candidate(candidates, self.secondary_language, counterpart.title)
        if candidate.title(self.secondary_language) == counterpart.title:
            tier = MatchTier.EN_FULL_MATCH
        else:
            tier = MatchTier.EN_VOL_AUTHOR_MATCH
        return self._decision(key, tier, paper, candidate, counterpart)

    def _match_multiple(self, key, search_papers, candidates):
        search_sorted = self._sort_search(search_papers)
        candidates_sorted = self._sort_candidates(candidates, self.primary_language)

        if len(search_sorted) > len(candidates_sorted):
            logger.warning(
                f"Key '{key}': {len(search_sorted)} search papers but only "
                f"{len(candidates_sorted)} submission candidates; extra papers left unpaired"
            )

        decisions = []
        for i, paper in enumerate(search_sorted):
            counterpart = self._secondary_counterpart(paper)
            if i >= len(candidates_sorted):
                self.stats["unpaired"] += 1
                decisions.append(self._decision(key, MatchTier.NOT_MATCHED, paper, counterpart=counterpart))
                continue

            candidate = candidates_sorted[i]
            # single-author papers are listed without affiliations
            attach = len(paper.authors) > 1
            decisions.append(self._decision(
                key, MatchTier.MULTI_VOL_AUTHOR_MATCH, paper, candidate, counterpart, attach_profiles=attach
            ))
        return decisions

    def _match_single(self, key, paper, candidates):
        if len(candidates) > 1:
            logger.debug(f"Key '{key}': choosing among {len(candidates)} submission candidates by title")

        candidate = self._pick_candidate(candidates, self.primary_language, paper.title)
        if candidate.title(self.primary_language) == paper.title:
            tier = MatchTier.FULL_MATCH
        else:
            tier = MatchTier.VOL_AUTHOR_MATCH
        return self._decision(key, tier, paper, candidate, self._secondary_counterpart(paper))

    def _secondary_counterpart(self, paper):
        if self.dst_records_secondary is None:
            return None
        if self.dst_records_secondary.has_multiple_values(paper.id):
            logger.warning(f"Duplicate '{self.secondary_language}' records for id {paper.id}; using the first")
        return self.dst_records_secondary.first(paper.id)

    def _pick_candidate(self, candidates, lang, title):
        for candidate in self._sort_candidates(candidates, lang):
            if candidate.title(lang) == title:
                return candidate
        return self._sort_candidates(candidates, lang)[0]

    @staticmethod
    def _sort_search(papers):
        return sorted(papers, key=lambda p: p.title)

    @staticmethod
    def _sort_candidates(candidates, lang):
        return sorted(candidates, key=lambda p: p.title(lang))

    def _decision(self, key, tier, paper, candidate=None, counterpart=None, attach_profiles=True):
        decision = MatchDecision(
            key=key,
            tier=tier,
            note=note_format(candidate) if candidate is not None else NO_HINTS,
            primary=paper,
            primary_lang=self.primary_language,
            candidate=candidate,
        )
        if candidate is not None and attach_profiles:
            decision.primary_profiles = candidate.profiles(self.primary_language)
        if counterpart is not None:
            decision.secondary = counterpart
            decision.secondary_lang = self.secondary_language
            if candidate is not None and attach_profiles:
                decision.secondary_profiles = candidate.profiles(self.secondary_language)
        return decision
