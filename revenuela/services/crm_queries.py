"""
Read-side queries that feed the journey engine.

Each helper takes an open session and returns plain model instances; callers
own the session lifecycle.
"""
import logging
from collections import defaultdict
from typing import Dict, List

from sqlalchemy import func, or_
from sqlalchemy.orm import selectinload

from revenuela.config import STATUS_CONNECTED
from revenuela.journey.attribution import dedupe_deals
from revenuela.models.crm import Deal
from revenuela.models.integration import IntegrationConnection
from revenuela.models.lead import Lead
from revenuela.models.sequence import SequenceEnrollment

logger = logging.getLogger('services.crm_queries')


def recent_leads(session, workspace_id: str, limit: int) -> List[Lead]:
    """Newest leads first, with enrollments preloaded."""
    return (
        session.query(Lead)
        .options(selectinload(Lead.sequence_enrollments).joinedload(SequenceEnrollment.sequence))
        .filter(Lead.workspace_id == workspace_id)
        .order_by(Lead.created_at.desc(), Lead.id)
        .limit(limit)
        .all()
    )


def related_deals_by_lead(session, workspace_id: str, leads) -> Dict[str, List[Deal]]:
    """
    Map lead id -> deals reachable through the lead's account or contact.

    A deal linked through both is listed once.
    """
    account_ids = {lead.account_id for lead in leads if lead.account_id}
    contact_ids = {lead.contact_id for lead in leads if lead.contact_id}
    if not account_ids and not contact_ids:
        return {lead.id: [] for lead in leads}

    clauses = []
    if account_ids:
        clauses.append(Deal.account_id.in_(account_ids))
    if contact_ids:
        clauses.append(Deal.primary_contact_id.in_(contact_ids))

    deals = (
        session.query(Deal)
        .filter(Deal.workspace_id == workspace_id, or_(*clauses))
        .order_by(Deal.updated_at.desc())
        .all()
    )

    by_account = defaultdict(list)
    by_contact = defaultdict(list)
    for deal in deals:
        if deal.account_id:
            by_account[deal.account_id].append(deal)
        if deal.primary_contact_id:
            by_contact[deal.primary_contact_id].append(deal)

    result = {}
    for lead in leads:
        candidates = []
        if lead.account_id:
            candidates.extend(by_account.get(lead.account_id, []))
        if lead.contact_id:
            candidates.extend(by_contact.get(lead.contact_id, []))
        result[lead.id] = dedupe_deals(candidates)

    logger.debug("Matched %d deals to %d leads", len(deals), len(leads))
    return result


def connected_providers(session, workspace_id: str) -> List[str]:
    rows = (
        session.query(IntegrationConnection.provider)
        .filter(
            IntegrationConnection.workspace_id == workspace_id,
            IntegrationConnection.status == STATUS_CONNECTED,
        )
        .all()
    )
    return [row.provider.lower() for row in rows if row.provider]


def count_leads(session, workspace_id: str) -> int:
    return session.query(func.count(Lead.id)).filter(Lead.workspace_id == workspace_id).scalar() or 0


def won_deals(session, workspace_id: str) -> List[Deal]:
    """Deals whose stage is exactly 'won' (case-insensitive)."""
    return (
        session.query(Deal)
        .filter(Deal.workspace_id == workspace_id, func.lower(Deal.stage) == 'won')
        .order_by(Deal.created_at, Deal.id)
        .all()
    )


def lead_statuses(session, workspace_id: str) -> List:
    rows = session.query(Lead.status).filter(Lead.workspace_id == workspace_id).all()
    return [row.status for row in rows]


def imports_by_source(session, workspace_id: str):
    """(source, count) pairs for leads with a known source."""
    return (
        session.query(Lead.source, func.count(Lead.id).label('imports'))
        .filter(Lead.workspace_id == workspace_id, Lead.source.isnot(None))
        .group_by(Lead.source)
        .order_by(Lead.source)
        .all()
    )


def integrations(session, workspace_id: str) -> List[IntegrationConnection]:
    return (
        session.query(IntegrationConnection)
        .filter(IntegrationConnection.workspace_id == workspace_id)
        .order_by(IntegrationConnection.provider)
        .all()
    )
