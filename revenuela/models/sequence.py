"""
Outbound sequences and the enrollments that attach leads to them.
"""
from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from revenuela.database import Base


class Sequence(Base):
    __tablename__ = 'sequences'

    id = Column(Integer, primary_key=True, autoincrement=True)
    workspace_id = Column(Text, nullable=False, index=True)
    name = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class SequenceEnrollment(Base):
    __tablename__ = 'sequence_enrollments'

    id = Column(Integer, primary_key=True, autoincrement=True)
    lead_id = Column(Text, ForeignKey('leads.id'), nullable=False, index=True)
    sequence_id = Column(Integer, ForeignKey('sequences.id'), nullable=False)
    enrolled_at = Column(DateTime(timezone=True), server_default=func.now())

    lead = relationship('Lead', back_populates='sequence_enrollments')
    sequence = relationship('Sequence', lazy='joined')
