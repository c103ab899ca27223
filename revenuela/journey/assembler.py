"""
Journey assembly — one Journey record per lead.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from revenuela.journey.attribution import resolve_attribution, dedupe_deals
from revenuela.journey.steps import resolve_steps, UNKNOWN_SOURCE

PENDING_OUTBOUND = 'Pending'


@dataclass
class Journey:
    id: str
    source: str
    outbound: str
    status: str
    steps: List[str] = field(default_factory=list)
    mrr: Optional[str] = None

    def to_dict(self):
        data = {
            'id': self.id,
            'source': self.source,
            'outbound': self.outbound,
            'status': self.status,
            'steps': list(self.steps),
        }
        if self.mrr is not None:
            data['mrr'] = self.mrr
        return data


def assemble_journey(lead, related_deals, sequence_enrollments) -> Journey:
    deals = dedupe_deals(related_deals or [])
    enrollments = list(sequence_enrollments or [])

    attribution = resolve_attribution(deals, getattr(lead, 'status', None))
    steps = resolve_steps(lead, deals, enrollments, attribution.status) or [UNKNOWN_SOURCE]

    return Journey(
        id=lead.id,
        source=steps[0],
        outbound=steps[1] if len(steps) > 1 else PENDING_OUTBOUND,
        status=attribution.status,
        steps=steps,
        mrr=attribution.mrr,
    )


def assemble_journeys(leads, deals_by_lead: Dict[str, list],
                      enrollments_by_lead: Optional[Dict[str, list]] = None) -> List[Journey]:
    """Assemble a batch, keeping the caller's lead order."""
    enrollments_by_lead = enrollments_by_lead or {}
    return [
        assemble_journey(
            lead,
            deals_by_lead.get(lead.id, []),
            enrollments_by_lead.get(lead.id, getattr(lead, 'sequence_enrollments', None) or []),
        )
        for lead in leads
    ]
