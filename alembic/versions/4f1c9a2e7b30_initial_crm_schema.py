"""Initial CRM schema: accounts, contacts, leads, deals, integrations, sequences

Revision ID: 4f1c9a2e7b30
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f1c9a2e7b30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('accounts',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('workspace_id', sa.Text(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('domain', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_accounts_workspace_id', 'accounts', ['workspace_id'])

    op.create_table('contacts',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('workspace_id', sa.Text(), nullable=False),
        sa.Column('first_name', sa.Text(), nullable=True),
        sa.Column('last_name', sa.Text(), nullable=True),
        sa.Column('email', sa.Text(), nullable=True),
        sa.Column('job_title', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_contacts_workspace_id', 'contacts', ['workspace_id'])

    op.create_table('leads',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('workspace_id', sa.Text(), nullable=False),
        sa.Column('email', sa.Text(), nullable=True),
        sa.Column('full_name', sa.Text(), nullable=True),
        sa.Column('first_name', sa.Text(), nullable=True),
        sa.Column('last_name', sa.Text(), nullable=True),
        sa.Column('company', sa.Text(), nullable=True),
        sa.Column('title', sa.Text(), nullable=True),
        sa.Column('source', sa.Text(), nullable=True),
        sa.Column('status', sa.Text(), nullable=True),
        sa.Column('journey_steps', sa.Text(), nullable=True),
        sa.Column('fit_score', sa.Integer(), nullable=True),
        sa.Column('lead_score', sa.Float(), nullable=True),
        sa.Column('account_id', sa.Text(), nullable=True),
        sa.Column('contact_id', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.ForeignKeyConstraint(['account_id'], ['accounts.id']),
        sa.ForeignKeyConstraint(['contact_id'], ['contacts.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('workspace_id', 'email', name='uq_lead_workspace_email'),
    )
    op.create_index('ix_leads_workspace_id', 'leads', ['workspace_id'])

    op.create_table('deals',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('workspace_id', sa.Text(), nullable=False),
        sa.Column('account_id', sa.Text(), nullable=True),
        sa.Column('primary_contact_id', sa.Text(), nullable=True),
        sa.Column('name', sa.Text(), nullable=True),
        sa.Column('stage', sa.Text(), nullable=True),
        sa.Column('closed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('amount', sa.Float(), nullable=True),
        sa.Column('currency', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.ForeignKeyConstraint(['account_id'], ['accounts.id']),
        sa.ForeignKeyConstraint(['primary_contact_id'], ['contacts.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_deals_workspace_id', 'deals', ['workspace_id'])
    op.create_index('ix_deals_account_id', 'deals', ['account_id'])
    op.create_index('ix_deals_primary_contact_id', 'deals', ['primary_contact_id'])

    op.create_table('integration_connections',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('workspace_id', sa.Text(), nullable=False),
        sa.Column('provider', sa.Text(), nullable=False),
        sa.Column('status', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('workspace_id', 'provider', name='uq_integration_workspace_provider'),
    )
    op.create_index('ix_integration_connections_workspace_id', 'integration_connections', ['workspace_id'])

    op.create_table('sequences',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('workspace_id', sa.Text(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_sequences_workspace_id', 'sequences', ['workspace_id'])

    op.create_table('sequence_enrollments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('lead_id', sa.Text(), nullable=False),
        sa.Column('sequence_id', sa.Integer(), nullable=False),
        sa.Column('enrolled_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.ForeignKeyConstraint(['lead_id'], ['leads.id']),
        sa.ForeignKeyConstraint(['sequence_id'], ['sequences.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_sequence_enrollments_lead_id', 'sequence_enrollments', ['lead_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_sequence_enrollments_lead_id', 'sequence_enrollments')
    op.drop_table('sequence_enrollments')
    op.drop_index('ix_sequences_workspace_id', 'sequences')
    op.drop_table('sequences')
    op.drop_index('ix_integration_connections_workspace_id', 'integration_connections')
    op.drop_table('integration_connections')
    op.drop_index('ix_deals_primary_contact_id', 'deals')
    op.drop_index('ix_deals_account_id', 'deals')
    op.drop_index('ix_deals_workspace_id', 'deals')
    op.drop_table('deals')
    op.drop_index('ix_leads_workspace_id', 'leads')
    op.drop_table('leads')
    op.drop_index('ix_contacts_workspace_id', 'contacts')
    op.drop_table('contacts')
    op.drop_index('ix_accounts_workspace_id', 'accounts')
    op.drop_table('accounts')
