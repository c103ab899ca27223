"""Shared test fixtures."""
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from revenuela import load_models
from revenuela.database import Base

ROUTE_MODULES = [
    'revenuela.routes.dashboard',
    'revenuela.routes.journeys',
    'revenuela.routes.leads',
    'revenuela.routes.performance',
]

BASE_TIME = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def db_engine():
    """In-memory SQLite engine with schema created."""
    engine = create_engine('sqlite:///:memory:')
    load_models()
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """SQLAlchemy session bound to in-memory SQLite. Rolls back after each test."""
    Session = sessionmaker(bind=db_engine)
    session = Session()
    yield session
    session.rollback()
    session.close()


@pytest.fixture(autouse=True)
def patch_get_session(db_session):
    """Route every get_session() call to the test session.

    Route modules bind get_session at import time, so each one is patched
    where it was imported. close() is disabled so handlers closing their
    session in a finally block don't detach the shared test session.
    """
    _real_close = db_session.close
    db_session.close = lambda: None
    patchers = [patch('revenuela.database.get_session', return_value=db_session)]
    patchers += [patch(f'{name}.get_session', return_value=db_session) for name in ROUTE_MODULES]
    for p in patchers:
        p.start()
    yield db_session
    for p in reversed(patchers):
        p.stop()
    db_session.close = _real_close


@pytest.fixture
def app():
    """Flask test app."""
    from revenuela import create_app
    app = create_app()
    app.config['TESTING'] = True
    yield app


@pytest.fixture
def client(app):
    """Flask test client."""
    with app.test_client() as c:
        yield c


@pytest.fixture
def make_lead(db_session):
    """Factory fixture — persists a Lead. created_at increases per call."""
    from revenuela.models.lead import Lead
    counter = {'n': 0}

    def _make(**overrides):
        counter['n'] += 1
        n = counter['n']
        defaults = dict(
            id=f'RVN-{n:08X}',
            workspace_id='ws-1',
            email=f'lead{n}@example.com',
            full_name=f'Lead {n}',
            source='Clay',
            status='new',
            journey_steps=None,
            created_at=BASE_TIME + timedelta(minutes=n),
        )
        defaults.update(overrides)
        lead = Lead(**defaults)
        db_session.add(lead)
        db_session.commit()
        return lead
    return _make


@pytest.fixture
def make_deal(db_session):
    """Factory fixture — persists a Deal. updated_at increases per call."""
    from revenuela.models.crm import Deal
    counter = {'n': 0}

    def _make(**overrides):
        counter['n'] += 1
        n = counter['n']
        defaults = dict(
            id=f'deal-{n}',
            workspace_id='ws-1',
            name=f'Deal {n}',
            stage='open',
            closed_at=None,
            amount=None,
            currency='EUR',
            updated_at=BASE_TIME + timedelta(hours=n),
        )
        defaults.update(overrides)
        deal = Deal(**defaults)
        db_session.add(deal)
        db_session.commit()
        return deal
    return _make


@pytest.fixture
def make_account(db_session):
    from revenuela.models.crm import Account
    counter = {'n': 0}

    def _make(**overrides):
        counter['n'] += 1
        defaults = dict(id=f'acc-{counter["n"]}', workspace_id='ws-1', name=f'Account {counter["n"]}')
        defaults.update(overrides)
        account = Account(**defaults)
        db_session.add(account)
        db_session.commit()
        return account
    return _make


@pytest.fixture
def make_contact(db_session):
    from revenuela.models.crm import Contact
    counter = {'n': 0}

    def _make(**overrides):
        counter['n'] += 1
        n = counter['n']
        defaults = dict(
            id=f'con-{n}',
            workspace_id='ws-1',
            first_name='Ada',
            last_name=f'Contact{n}',
            email=f'contact{n}@example.com',
        )
        defaults.update(overrides)
        contact = Contact(**defaults)
        db_session.add(contact)
        db_session.commit()
        return contact
    return _make


@pytest.fixture
def connect(db_session):
    """Factory fixture — records an IntegrationConnection."""
    from revenuela.models.integration import IntegrationConnection

    def _make(provider, status='connected', workspace_id='ws-1'):
        conn = IntegrationConnection(workspace_id=workspace_id, provider=provider, status=status)
        db_session.add(conn)
        db_session.commit()
        return conn
    return _make
