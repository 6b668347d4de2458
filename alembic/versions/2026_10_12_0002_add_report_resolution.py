"""add is_resolved and resolved_at to reports

Revision ID: 0002_report_resolution
Revises: 0001_initial
Create Date: 2026-10-12
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0002_report_resolution'
down_revision = '0001_initial'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.add_column('reports', sa.Column('is_resolved', sa.Boolean(), nullable=False, server_default=sa.false()))
    op.add_column('reports', sa.Column('resolved_at', sa.DateTime(timezone=True), nullable=True))
    op.create_index('ix_reports_is_resolved', 'reports', ['is_resolved'])


def downgrade() -> None:
    op.drop_index('ix_reports_is_resolved', table_name='reports')
    op.drop_column('reports', 'resolved_at')
    op.drop_column('reports', 'is_resolved')
