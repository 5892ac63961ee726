"""Cross-repository aggregation of contributor scores."""

from typing import Dict, List, NamedTuple

from .models import EMAIL_NOT_AVAILABLE, ContributorRecord, RepositoryAnalysis


class RankedContributor(NamedTuple):
    identity: str
    email: str
    score: int


class ContributorAggregator:
    """Folds repository analyses into global commit, review and activity scores.

    One instance is created per run; identities are not namespaced by
    repository, so equal logins from different repositories are merged.
    """

    def __init__(self):
        self.commit_scores: Dict[str, int] = {}
        self.review_scores: Dict[str, int] = {}
        self.activity_scores: Dict[str, int] = {}
        self.emails: Dict[str, str] = {}

    def add(self, repository: str, analysis: RepositoryAnalysis):
        """Fold one repository's engagement maps into the score tables."""
        self._fold(analysis.pr_authors, self.commit_scores)
        self._fold(analysis.reviewers, self.review_scores)

    def add_all(self, analyses: Dict[str, RepositoryAnalysis]) -> 'ContributorAggregator':
        for repository, analysis in analyses.items():
            self.add(repository, analysis)
        return self

    def _fold(self, records: Dict[str, ContributorRecord], scores: Dict[str, int]):
        for identity, record in records.items():
            scores[identity] = scores.get(identity, 0) + record.count
            self.activity_scores[identity] = self.activity_scores.get(identity, 0) + record.count
            self.emails[identity] = record.email

    def _rank(self, scores: Dict[str, int]) -> List[RankedContributor]:
        # sorted() is stable, so ties keep insertion order
        ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)
        return [RankedContributor(identity, self.emails.get(identity, EMAIL_NOT_AVAILABLE), score)
                for identity, score in ranked]

    def top_committers(self) -> List[RankedContributor]:
        return self._rank(self.commit_scores)

    def top_reviewers(self) -> List[RankedContributor]:
        return self._rank(self.review_scores)

    def top_overall(self) -> List[RankedContributor]:
        return self._rank(self.activity_scores)
