"""evaluation_schema

Revision ID: 001
Revises: 
Create Date: 2024-05-01 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Crawl snapshots, one row per scanned URL
    op.create_table(
        'scan_pages',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('domain', sa.String(255), nullable=False),
        sa.Column('date_of_scan', sa.String(32), nullable=False),
        sa.Column('url_id', sa.String(255), nullable=False),
        sa.Column('page_url', sa.String(2048), nullable=True),
        sa.Column('meta', sa.JSON(), nullable=False),
        sa.Column('body', sa.JSON(), nullable=False),
        sa.Column('social', sa.JSON(), nullable=False),
        sa.Column('schema', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('domain', 'date_of_scan', 'url_id', name='uq_scan_pages_scan_url')
    )
    op.create_index(op.f('ix_scan_pages_id'), 'scan_pages', ['id'], unique=False)
    op.create_index(op.f('ix_scan_pages_domain'), 'scan_pages', ['domain'], unique=False)
    op.create_index(op.f('ix_scan_pages_date_of_scan'), 'scan_pages', ['date_of_scan'], unique=False)
    op.create_index('idx_scan_pages_scan', 'scan_pages', ['domain', 'date_of_scan'], unique=False)

    # Issue bundles, one row per evaluated URL
    op.create_table(
        'scan_issues',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('domain', sa.String(255), nullable=False),
        sa.Column('date_of_scan', sa.String(32), nullable=False),
        sa.Column('url_id', sa.String(255), nullable=False),
        sa.Column('meta', sa.JSON(), nullable=False),
        sa.Column('body', sa.JSON(), nullable=False),
        sa.Column('social', sa.JSON(), nullable=False),
        sa.Column('schema', sa.JSON(), nullable=False),
        sa.Column('critical_issues_count', sa.Integer(), nullable=False),
        sa.Column('warning_issues_count', sa.Integer(), nullable=False),
        sa.Column('evaluated_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('domain', 'date_of_scan', 'url_id', name='uq_scan_issues_scan_url')
    )
    op.create_index(op.f('ix_scan_issues_id'), 'scan_issues', ['id'], unique=False)
    op.create_index(op.f('ix_scan_issues_domain'), 'scan_issues', ['domain'], unique=False)
    op.create_index(op.f('ix_scan_issues_date_of_scan'), 'scan_issues', ['date_of_scan'], unique=False)
    op.create_index('idx_scan_issues_scan', 'scan_issues', ['domain', 'date_of_scan'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_scan_issues_scan', table_name='scan_issues')
    op.drop_index(op.f('ix_scan_issues_date_of_scan'), table_name='scan_issues')
    op.drop_index(op.f('ix_scan_issues_domain'), table_name='scan_issues')
    op.drop_index(op.f('ix_scan_issues_id'), table_name='scan_issues')
    op.drop_table('scan_issues')

    op.drop_index('idx_scan_pages_scan', table_name='scan_pages')
    op.drop_index(op.f('ix_scan_pages_date_of_scan'), table_name='scan_pages')
    op.drop_index(op.f('ix_scan_pages_domain'), table_name='scan_pages')
    op.drop_index(op.f('ix_scan_pages_id'), table_name='scan_pages')
    op.drop_table('scan_pages')
