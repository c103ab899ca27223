"""
Revenue attribution — which deal speaks for a lead and what it says.

The most recently updated related deal decides the lead's outcome. A deal only
counts as won or lost once it is closed; an open deal is pipeline no matter
what its stage text says. Leads without deals fall back to their manual status.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from revenuela.journey.classifier import DEAL_OUTCOME
from revenuela.journey.currency import finite_amount, format_currency

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass
class Attribution:
    status: str                      # won | pipeline | lost
    amount: Optional[float] = None
    currency: Optional[str] = None

    @property
    def mrr(self) -> Optional[str]:
        if self.amount is None:
            return None
        return format_currency(self.amount, self.currency)


def _sort_key(deal) -> datetime:
    updated = getattr(deal, 'updated_at', None)
    if updated is None:
        return _EPOCH
    if updated.tzinfo is None:
        # SQLite hands back naive datetimes
        return updated.replace(tzinfo=timezone.utc)
    return updated


def dedupe_deals(deals: Iterable) -> List:
    """Drop repeats of the same deal (matched by id), keeping first-seen order."""
    seen = set()
    unique = []
    for deal in deals:
        key = getattr(deal, 'id', None)
        if key is None:
            key = id(deal)
        if key in seen:
            continue
        seen.add(key)
        unique.append(deal)
    return unique


def latest_deal(deals: List):
    """Deal with the greatest updated_at; the first of equal maxima wins."""
    latest = None
    for deal in deals:
        if latest is None or _sort_key(deal) > _sort_key(latest):
            latest = deal
    return latest


def deal_outcome(deal) -> str:
    if getattr(deal, 'closed_at', None) is None:
        return 'pipeline'
    return DEAL_OUTCOME.classify(getattr(deal, 'stage', None) or '')


def status_from_lead(lead_status: Optional[str]) -> str:
    if lead_status == 'won':
        return 'won'
    if lead_status == 'lost':
        return 'lost'
    return 'pipeline'


def resolve_attribution(related_deals, lead_status: Optional[str] = None) -> Attribution:
    """Outcome and amount for a lead from its related deals."""
    deals = dedupe_deals(related_deals or [])
    if not deals:
        return Attribution(status=status_from_lead(lead_status))

    deal = latest_deal(deals)
    return Attribution(
        status=deal_outcome(deal),
        amount=finite_amount(deal.amount),
        currency=getattr(deal, 'currency', None),
    )
