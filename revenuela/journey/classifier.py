"""
Keyword-bucket stage classification.

A StageClassifier holds an ordered table of stage -> keywords and a default
stage. classify() lower-cases the raw text and returns the first stage with a
keyword that occurs anywhere in it, so tool-specific vocabularies like
"Closed Won - Annual" or "meeting_booked" still land in a bucket.

Three instances are in use, each owned by one consumer:

  STATUS_CLASSIFIER     — canonical funnel stage of a lead's free-text status
  DASHBOARD_BUCKETER    — dashboard funnel chart (own keyword table)
  DEAL_OUTCOME          — won / lost / pipeline outcome of a closed deal
"""
from typing import Dict, List, Optional, Sequence, Tuple

STAGE_IDS = ['prospecting', 'engaged', 'meeting', 'proposal', 'won', 'lost']

STAGE_LABELS = {
    'prospecting': 'Prospecting',
    'engaged': 'Engaged',
    'meeting': 'Meetings',
    'proposal': 'Proposals',
    'won': 'Closed Won',
    'lost': 'Lost',
}

WON_KEYWORDS = ['won', 'closed_won', 'customer']
LOST_KEYWORDS = ['lost', 'closed_lost', 'churn', 'disqualified']


class StageClassifier:
    """Ordered keyword table with a fallback stage. First match wins."""

    def __init__(self, buckets: Sequence[Tuple[str, Sequence[str]]], default: str):
        self.buckets: List[Tuple[str, Tuple[str, ...]]] = [
            (stage, tuple(k.lower() for k in keywords)) for stage, keywords in buckets
        ]
        self.default = default

    @property
    def stages(self) -> List[str]:
        stages = [stage for stage, _ in self.buckets]
        if self.default not in stages:
            stages.append(self.default)
        return stages

    def classify(self, raw_status: Optional[str]) -> str:
        if raw_status is None:
            return self.default
        status = str(raw_status).lower()
        for stage, keywords in self.buckets:
            if any(k in status for k in keywords):
                return stage
        return self.default

    def counts(self, statuses) -> Dict[str, int]:
        """Bucket an iterable of raw statuses into per-stage counts."""
        totals = {stage: 0 for stage in self.stages}
        for status in statuses:
            totals[self.classify(status)] += 1
        return totals


STATUS_CLASSIFIER = StageClassifier([
    ('prospecting', ['new', 'cold', 'prospect']),
    ('engaged', ['engaged', 'reply', 'responded', 'opened', 'active']),
    ('meeting', ['meeting', 'demo', 'call', 'scheduled']),
    ('proposal', ['proposal', 'negotiation', 'quote']),
    ('won', WON_KEYWORDS),
    ('lost', LOST_KEYWORDS),
], default='prospecting')

# Kept separate from STATUS_CLASSIFIER: the chart also treats manually entered
# leads as prospecting and nurture leads as lost.
DASHBOARD_BUCKETER = StageClassifier([
    ('prospecting', ['new', 'cold', 'prospect', 'prospecting', 'manual']),
    ('engaged', ['engaged', 'reply', 'responded', 'opened', 'active']),
    ('meeting', ['meeting', 'demo', 'call', 'scheduled']),
    ('proposal', ['proposal', 'negotiation', 'quote']),
    ('won', ['won', 'customer', 'closed_won']),
    ('lost', ['lost', 'churn', 'closed_lost', 'disqualified', 'nurture']),
], default='prospecting')

DEAL_OUTCOME = StageClassifier([
    ('won', WON_KEYWORDS),
    ('lost', LOST_KEYWORDS),
], default='pipeline')


def classify(raw_status: Optional[str]) -> str:
    """Canonical stage id for a free-text status. Never raises."""
    return STATUS_CLASSIFIER.classify(raw_status)


def bucket_dashboard_status(raw_status: Optional[str]) -> str:
    return DASHBOARD_BUCKETER.classify(raw_status)
