#!/usr/bin/env python3
"""
Seed a demo workspace for checking the journeys, performance and dashboard pages.

Creates leads covering the main journey scenarios:
  1. Clay lead with a closed-won deal on its account
  2. Apollo lead enrolled in a sequence, deal still open
  3. Lead with curated steps (Clay -> HeyReach -> CRM)
  4. Lead whose latest deal (via contact) is closed-lost
  5. CSV lead with no related records
  6. Lead with a broken journey_steps payload

Usage:
    python scripts/seed_demo_data.py          # seed workspace "demo"
    python scripts/seed_demo_data.py --clear  # wipe the demo workspace first

Requires: DATABASE_URL set (or defaults to sqlite:///local.db).
"""
import sys
import os
import json
import uuid
import argparse
from datetime import datetime, timezone, timedelta

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from revenuela import create_app
from revenuela.database import get_session, engine, Base
from revenuela.models.crm import Account, Contact, Deal
from revenuela.models.integration import IntegrationConnection
from revenuela.models.lead import Lead
from revenuela.models.sequence import Sequence, SequenceEnrollment
from revenuela.services.leads import new_lead_id

WORKSPACE_ID = 'demo'

CONNECTED = ['clay', 'apollo', 'heyreach', 'hubspot', 'stripe']


def _id():
    return str(uuid.uuid4())


def _lead(session, now, minutes_ago, **fields):
    lead = Lead(
        id=new_lead_id(session),
        workspace_id=WORKSPACE_ID,
        created_at=now - timedelta(minutes=minutes_ago),
        **fields,
    )
    session.add(lead)
    session.flush()
    return lead


def seed(session):
    now = datetime.now(timezone.utc)

    for provider in CONNECTED:
        session.add(IntegrationConnection(workspace_id=WORKSPACE_ID, provider=provider, status='connected'))
    session.add(IntegrationConnection(workspace_id=WORKSPACE_ID, provider='lemlist', status='not_connected'))

    acme = Account(id=_id(), workspace_id=WORKSPACE_ID, name='Acme GmbH', domain='acme.de')
    globex = Account(id=_id(), workspace_id=WORKSPACE_ID, name='Globex')
    hooli = Contact(id=_id(), workspace_id=WORKSPACE_ID, first_name='Gavin', last_name='Belson',
                    email='gavin@hooli.com', job_title='CEO')
    session.add_all([acme, globex, hooli])
    session.flush()

    won = _lead(session, now, 60, email='anna@acme.de', full_name='Anna Schmidt', company='Acme GmbH',
                source='Clay', status='closed_won', account_id=acme.id)
    session.add(Deal(id=_id(), workspace_id=WORKSPACE_ID, account_id=acme.id, name='Acme annual',
                     stage='won', closed_at=now - timedelta(days=2), amount=1490, currency='EUR',
                     updated_at=now - timedelta(days=2)))
    print(f'  [1] Won via account:      {won.id}')

    seq = Sequence(workspace_id=WORKSPACE_ID, name='Founders outreach')
    session.add(seq)
    session.flush()
    open_lead = _lead(session, now, 50, email='bob@globex.com', full_name='Bob Jones', company='Globex',
                      source='Apollo', status='engaged', account_id=globex.id)
    session.add(SequenceEnrollment(lead_id=open_lead.id, sequence_id=seq.id))
    session.add(Deal(id=_id(), workspace_id=WORKSPACE_ID, account_id=globex.id, name='Globex pilot',
                     stage='proposal', amount=600, currency='EUR', updated_at=now - timedelta(days=1)))
    print(f'  [2] Enrolled, open deal:  {open_lead.id}')

    curated = _lead(session, now, 40, email='cara@initech.com', full_name='Cara Lee', source='Clay',
                    status='active', journey_steps=json.dumps(['Clay', 'HeyReach', 'CRM']))
    print(f'  [3] Curated steps:        {curated.id}')

    lost = _lead(session, now, 30, email='gavin@hooli.com', source='HubSpot', status='meeting',
                 contact_id=hooli.id)
    session.add(Deal(id=_id(), workspace_id=WORKSPACE_ID, primary_contact_id=hooli.id, name='Hooli',
                     stage='closed_lost', closed_at=now - timedelta(hours=5), amount=2000, currency='USD',
                     updated_at=now - timedelta(hours=5)))
    print(f'  [4] Lost via contact:     {lost.id}')

    bare = _lead(session, now, 20, email='dan@example.com', full_name='Dan Brown', source='CSV Import',
                 status='new')
    print(f'  [5] No related records:   {bare.id}')

    broken = _lead(session, now, 10, email='eve@example.com', full_name='Eve Adams', source='Clay',
                   status='nurture', journey_steps='["Clay", "HeyReach"')
    print(f'  [6] Broken steps payload: {broken.id}')


def clear_workspace(session):
    """Remove every row that belongs to the demo workspace."""
    lead_ids = [row.id for row in session.query(Lead.id).filter(Lead.workspace_id == WORKSPACE_ID)]
    if lead_ids:
        session.query(SequenceEnrollment).filter(
            SequenceEnrollment.lead_id.in_(lead_ids)
        ).delete(synchronize_session=False)
    deleted = {}
    for model in (Lead, Deal, Sequence, Contact, Account, IntegrationConnection):
        deleted[model.__tablename__] = session.query(model).filter(
            model.workspace_id == WORKSPACE_ID
        ).delete(synchronize_session=False)
    session.commit()
    print('Cleared ' + ', '.join(f'{n} {table}' for table, n in deleted.items()))


def main():
    parser = argparse.ArgumentParser(description='Seed a demo workspace')
    parser.add_argument('--clear', action='store_true', help='Clear the demo workspace before seeding')
    parser.add_argument('--clear-only', action='store_true', help='Only clear, do not re-seed')
    args = parser.parse_args()

    app = create_app()
    with app.app_context():
        # Ensure tables exist (for SQLite local dev)
        Base.metadata.create_all(engine)

        session = get_session()
        try:
            if args.clear or args.clear_only:
                clear_workspace(session)
                if args.clear_only:
                    return

            print('Seeding demo workspace...')
            seed(session)
            session.commit()
            print(f'\nDone! GET /api/journeys?workspaceId={WORKSPACE_ID} to verify.')

        except Exception as e:
            session.rollback()
            print(f'Error: {e}')
            raise
        finally:
            session.close()


if __name__ == '__main__':
    main()
