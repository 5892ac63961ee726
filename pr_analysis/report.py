"""CSV reports for engagement, metrics and top contributors."""

import csv
import logging
import os
from typing import Dict, List

from .aggregator import ContributorAggregator
from .models import RepositoryAnalysis

ENGAGEMENT_REPORT = 'engagement_report.csv'
METRICS_REPORT = 'metrics_report.csv'
TOP_CONTRIBUTORS_REPORT = 'top_contributors.csv'

ENGAGEMENT_COLUMNS = ['repository', 'category', 'author', 'email', 'count']
METRICS_COLUMNS = ['repository', 'metric', 'value']
TOP_CONTRIBUTORS_COLUMNS = ['category', 'author', 'email', 'score']

# Metric label -> RepositoryAnalysis attribute, in report order
METRICS = [
    ('Average Cycle Time (hrs)', 'average_cycle_time'),
    ('Average Review Time (hrs)', 'average_review_time'),
    ('Adjusted Review Time (hrs)', 'adjusted_review_time'),
    ('Average PR Size (LOC)', 'average_pr_size'),
    ('Average Files per PR', 'average_files_per_pr'),
]


def engagement_rows(analyses: Dict[str, RepositoryAnalysis]) -> List[Dict]:
    rows = []
    for repository, analysis in analyses.items():
        for category, records in (('PR Authors', analysis.pr_authors), ('Reviewers', analysis.reviewers)):
            for identity, record in records.items():
                rows.append({
                    'repository': repository,
                    'category': category,
                    'author': identity,
                    'email': record.email,
                    'count': record.count
                })
    return rows


def metrics_rows(analyses: Dict[str, RepositoryAnalysis]) -> List[Dict]:
    return [
        {'repository': repository, 'metric': label, 'value': str(getattr(analysis, attribute))}
        for repository, analysis in analyses.items()
        for label, attribute in METRICS
    ]


def top_contributor_rows(aggregator: ContributorAggregator, top_committers: int = 5,
                         top_reviewers: int = 5, top_overall: int = 10) -> List[Dict]:
    """Build the ranked rows, truncating each category to its limit."""
    sections = [
        ('Top Committers', aggregator.top_committers()[:top_committers]),
        ('Top Reviewers', aggregator.top_reviewers()[:top_reviewers]),
        ('Top Overall', aggregator.top_overall()[:top_overall]),
    ]

    rows = []
    for category, ranked in sections:
        for contributor in ranked:
            rows.append({
                'category': category,
                'author': contributor.identity,
                'email': contributor.email,
                'score': contributor.score
            })
    return rows


def write_csv(file_path: str, columns: List[str], rows: List[Dict]):
    with open(file_path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=columns, quoting=csv.QUOTE_MINIMAL)
        writer.writeheader()
        writer.writerows(rows)
    logging.info(f"Wrote {len(rows)} rows to {file_path}")


class ReportWriter:
    """Writes the three CSV reports of a run."""

    def __init__(self, output_dir: str = '.', top_committers: int = 5,
                 top_reviewers: int = 5, top_overall: int = 10):
        """Initialize the report writer.

        Args:
            output_dir: Directory the CSV files are written to
            top_committers: Rows in the "Top Committers" section
            top_reviewers: Rows in the "Top Reviewers" section
            top_overall: Rows in the "Top Overall" section
        """
        self.output_dir = output_dir
        self.top_committers = top_committers
        self.top_reviewers = top_reviewers
        self.top_overall = top_overall

    def write(self, analyses: Dict[str, RepositoryAnalysis],
              aggregator: ContributorAggregator) -> List[str]:
        """Write all reports.

        Returns:
            Paths of the written files
        """
        os.makedirs(self.output_dir, exist_ok=True)
        reports = [
            (ENGAGEMENT_REPORT, ENGAGEMENT_COLUMNS, engagement_rows(analyses)),
            (METRICS_REPORT, METRICS_COLUMNS, metrics_rows(analyses)),
            (TOP_CONTRIBUTORS_REPORT, TOP_CONTRIBUTORS_COLUMNS,
             top_contributor_rows(aggregator, self.top_committers, self.top_reviewers, self.top_overall)),
        ]

        paths = []
        for file_name, columns, rows in reports:
            path = os.path.join(self.output_dir, file_name)
            write_csv(path, columns, rows)
            paths.append(path)

        print(f"Reports saved: {', '.join(paths)}")
        return paths
