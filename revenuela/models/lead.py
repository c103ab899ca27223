"""
Lead model — one row per prospect, keyed by the minted RVN-XXXXXXXX id.

The id is the join key across every connected tool and never changes once
minted. journey_steps holds a JSON-encoded list of tool names when a person or
agent has curated the path explicitly.
"""
from sqlalchemy import Column, Integer, Float, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from revenuela.database import Base


class Lead(Base):
    __tablename__ = 'leads'
    __table_args__ = (
        UniqueConstraint('workspace_id', 'email', name='uq_lead_workspace_email'),
    )

    id = Column(Text, primary_key=True)                  # RVN-XXXXXXXX
    workspace_id = Column(Text, nullable=False, index=True)
    email = Column(Text, nullable=True)
    full_name = Column(Text, nullable=True)
    first_name = Column(Text, nullable=True)
    last_name = Column(Text, nullable=True)
    company = Column(Text, nullable=True)
    title = Column(Text, nullable=True)
    source = Column(Text, nullable=True)
    status = Column(Text, nullable=True)                 # free text, re-bucketed on read
    journey_steps = Column(Text, nullable=True)          # JSON array of tool names
    fit_score = Column(Integer, nullable=True)
    lead_score = Column(Float, nullable=True)
    account_id = Column(Text, ForeignKey('accounts.id'), nullable=True)
    contact_id = Column(Text, ForeignKey('contacts.id'), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    account = relationship('Account', lazy='joined')
    contact = relationship('Contact', lazy='joined')
    sequence_enrollments = relationship('SequenceEnrollment', back_populates='lead')
