"""
Lead write paths — manual creation, CSV import, journey editing.

Every lead gets an RVN-XXXXXXXX id at creation. Imports skip rows without an
email and rows that collide with an existing (workspace, email) pair.
"""
import csv
import io
import json
import logging
import uuid
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.exc import IntegrityError

from revenuela.config import LEAD_ID_PREFIX, SOURCE_MANUAL, SOURCE_CSV_IMPORT
from revenuela.journey.steps import parse_journey_steps
from revenuela.models.crm import Account, Contact
from revenuela.models.lead import Lead

logger = logging.getLogger('services.leads')

# Accepted spellings per field, first non-empty wins
CSV_COLUMNS = {
    'email': ['Email', 'email', 'E-mail'],
    'first_name': ['First Name', 'firstName'],
    'last_name': ['Last Name', 'lastName'],
    'company': ['Company', 'company', 'Account'],
    'title': ['Title', 'title', 'Job Title'],
}

MINT_ATTEMPTS = 5


class LeadNotFoundError(LookupError):
    pass


class LeadIdExhaustedError(RuntimeError):
    pass


def mint_lead_id() -> str:
    """New immutable lead id, e.g. RVN-1A2B3C4D."""
    return LEAD_ID_PREFIX + uuid.uuid4().hex[:8].upper()


def new_lead_id(session) -> str:
    """Mint an id that no stored lead already uses."""
    for _ in range(MINT_ATTEMPTS):
        lead_id = mint_lead_id()
        if session.get(Lead, lead_id) is None:
            return lead_id
        logger.warning("Minted lead id %s is taken, minting again", lead_id)
    raise LeadIdExhaustedError(f"No free lead id after {MINT_ATTEMPTS} attempts")


def _full_name(first_name: str, last_name: str, fallback: str) -> str:
    return f"{first_name or ''} {last_name or ''}".strip() or fallback


def create_lead(session, workspace_id: str, email: str, first_name: str = '',
                last_name: str = '', company: str = '', title: str = '') -> Lead:
    """
    Create a manual lead, reusing the workspace's contact (by email) and
    account (by name) when they already exist. Commits.
    """
    contact = session.query(Contact).filter_by(workspace_id=workspace_id, email=email).first()
    if contact is None:
        contact = Contact(
            id=str(uuid.uuid4()),
            workspace_id=workspace_id,
            first_name=first_name or '',
            last_name=last_name or '',
            email=email,
            job_title=title or '',
        )
        session.add(contact)

    account_id = None
    if company:
        account = session.query(Account).filter_by(workspace_id=workspace_id, name=company).first()
        if account is None:
            account = Account(id=str(uuid.uuid4()), workspace_id=workspace_id, name=company)
            session.add(account)
        account_id = account.id

    lead = Lead(
        id=new_lead_id(session),
        workspace_id=workspace_id,
        email=email,
        full_name=_full_name(first_name, last_name, email),
        first_name=first_name,
        last_name=last_name,
        company=company,
        title=title,
        contact_id=contact.id,
        account_id=account_id,
        source=SOURCE_MANUAL,
        status='new',
    )
    session.add(lead)
    session.commit()
    logger.info("Created lead %s in workspace %s", lead.id, workspace_id)
    return lead


def _pick(row: Dict[str, Any], keys: List[str]) -> str:
    for key in keys:
        value = row.get(key)
        if value:
            return str(value).strip()
    return ''


def normalize_csv_row(row: Dict[str, Any]) -> Optional[Dict[str, str]]:
    """Map a CSV row with any accepted header spelling onto lead fields."""
    fields = {name: _pick(row, keys) for name, keys in CSV_COLUMNS.items()}
    if not fields['email']:
        return None
    return fields


def import_rows(session, workspace_id: str, rows: Iterable[Dict[str, Any]],
                source: str = SOURCE_CSV_IMPORT) -> int:
    """Insert one lead per valid row. Returns the number created."""
    created = 0
    for row in rows:
        fields = normalize_csv_row(row)
        if fields is None:
            continue

        lead = Lead(
            id=new_lead_id(session),
            workspace_id=workspace_id,
            email=fields['email'],
            full_name=_full_name(fields['first_name'], fields['last_name'], fields['email']),
            first_name=fields['first_name'],
            last_name=fields['last_name'],
            company=fields['company'],
            title=fields['title'],
            source=source,
            status='new',
        )
        try:
            session.add(lead)
            session.commit()
            created += 1
        except IntegrityError:
            session.rollback()
            logger.debug("Duplicate skipped: %s", fields['email'])

    logger.info("Imported %d leads into workspace %s from %s", created, workspace_id, source)
    return created


def read_csv(data: bytes) -> List[Dict[str, str]]:
    text = data.decode('utf-8-sig', errors='replace')
    return list(csv.DictReader(io.StringIO(text)))


def set_journey_steps(session, lead_id: str, steps: List[Any]) -> Lead:
    """Store a curated journey and mark the lead active. Commits."""
    lead = session.get(Lead, lead_id)
    if lead is None:
        raise LeadNotFoundError(lead_id)
    lead.journey_steps = json.dumps([str(s) for s in steps])
    lead.status = 'active'
    session.commit()
    return lead


def serialize_lead(lead: Lead) -> Dict[str, Any]:
    """API view of a lead with display fallbacks from its contact/account."""
    contact = lead.contact
    account = lead.account

    name = (
        lead.full_name
        or (contact.display_name if contact else '')
        or lead.email
        or 'Unnamed Lead'
    )
    if lead.fit_score is not None:
        score = lead.fit_score
    elif lead.lead_score is not None:
        score = lead.lead_score
    else:
        score = 0

    return {
        'id': lead.id,
        'name': name,
        'title': lead.title or (contact.job_title if contact else '') or '',
        'company': lead.company or (account.name if account else '') or '',
        'source': lead.source or 'Unknown',
        'score': score,
        'owner': 'Unassigned',
        'status': lead.status,
        'journeySteps': parse_journey_steps(lead.journey_steps, lead.id),
        'email': lead.email,
    }
