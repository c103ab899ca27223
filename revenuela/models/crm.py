"""
CRM records — contacts, accounts and deals.

Deals are related to leads through the lead's account and/or contact; a lead
never references a deal directly.
"""
from sqlalchemy import Column, Float, Text, DateTime, ForeignKey
from sqlalchemy.sql import func

from revenuela.database import Base


class Contact(Base):
    __tablename__ = 'contacts'

    id = Column(Text, primary_key=True)
    workspace_id = Column(Text, nullable=False, index=True)
    first_name = Column(Text, default='')
    last_name = Column(Text, default='')
    email = Column(Text, nullable=True)
    job_title = Column(Text, default='')
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def display_name(self):
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


class Account(Base):
    __tablename__ = 'accounts'

    id = Column(Text, primary_key=True)
    workspace_id = Column(Text, nullable=False, index=True)
    name = Column(Text, nullable=False)
    domain = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Deal(Base):
    __tablename__ = 'deals'

    id = Column(Text, primary_key=True)
    workspace_id = Column(Text, nullable=False, index=True)
    account_id = Column(Text, ForeignKey('accounts.id'), nullable=True, index=True)
    primary_contact_id = Column(Text, ForeignKey('contacts.id'), nullable=True, index=True)
    name = Column(Text, default='')
    stage = Column(Text, nullable=True)                  # tool-specific vocabulary
    closed_at = Column(DateTime(timezone=True), nullable=True)
    amount = Column(Float, nullable=True)
    currency = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
