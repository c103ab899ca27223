"""
IntegrationConnection model — whether a provider is connected for a workspace.
"""
from sqlalchemy import Column, Integer, Text, DateTime, UniqueConstraint
from sqlalchemy.sql import func

from revenuela.config import STATUS_NOT_CONNECTED
from revenuela.database import Base


class IntegrationConnection(Base):
    __tablename__ = 'integration_connections'
    __table_args__ = (
        UniqueConstraint('workspace_id', 'provider', name='uq_integration_workspace_provider'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    workspace_id = Column(Text, nullable=False, index=True)
    provider = Column(Text, nullable=False)              # lowercase slug, e.g. "heyreach"
    status = Column(Text, nullable=False, default=STATUS_NOT_CONNECTED)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
