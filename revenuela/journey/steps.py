"""
Journey step resolution — the ordered list of tools a lead passed through.

A curated list stored on the lead always wins. Without one, the path is
synthesized from what the lead is attached to: its source, any outbound
sequence enrollment, any CRM deal, and billing once a deal is won.
"""
import json
import logging
from typing import Any, List, Optional

logger = logging.getLogger('journey.steps')

UNKNOWN_SOURCE = 'Unknown'
OUTBOUND_STEP = 'Outbound'
CRM_STEP = 'CRM'
BILLING_STEP = 'Stripe'


def lead_source(lead) -> str:
    return getattr(lead, 'source', None) or UNKNOWN_SOURCE


def parse_journey_steps(raw: Any, lead_id: Optional[str] = None) -> Optional[List[str]]:
    """
    Decode a stored journey_steps payload.

    Returns a non-empty list of step names, or None when the payload is
    missing, malformed, not a list, or empty.
    """
    if raw is None or raw == '':
        return None
    if isinstance(raw, (list, tuple)):
        parsed = list(raw)
    else:
        try:
            parsed = json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.warning("Failed to parse journey steps for lead %s: %s", lead_id, e)
            return None

    if not isinstance(parsed, list) or not parsed:
        return None
    return [str(step) for step in parsed]


def resolve_steps(lead, related_deals, sequence_enrollments, status: str) -> List[str]:
    """Ordered, non-empty list of tool names for one lead."""
    source = lead_source(lead)

    curated = parse_journey_steps(getattr(lead, 'journey_steps', None), getattr(lead, 'id', None))
    if curated:
        if curated[0] != source and source != UNKNOWN_SOURCE:
            return [source] + curated
        return curated

    steps = [source]
    if sequence_enrollments:
        steps.append(OUTBOUND_STEP)
    if related_deals:
        steps.append(CRM_STEP)
        if status == 'won':
            steps.append(BILLING_STEP)
    return steps
