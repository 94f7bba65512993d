"""create pages and widgets tables

Revision ID: 3f9c1d2a7b10
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '3f9c1d2a7b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'pages',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('route', sa.Text(), nullable=False),
        sa.Column('is_home', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('route', name='uq_pages_route'),
        schema='public'
    )
    op.create_index('ix_pages_created_at', 'pages', ['created_at'], schema='public')
    # At most one home page: unique over the rows where is_home is true
    op.create_index(
        'uq_pages_single_home',
        'pages',
        ['is_home'],
        unique=True,
        schema='public',
        postgresql_where=sa.text('is_home'),
    )

    op.create_table(
        'widgets',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('page_id', sa.Text(), nullable=False),
        sa.Column('type', sa.Text(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column(
            'config',
            postgresql.JSONB(astext_type=sa.Text()),
            server_default=sa.text("'{}'::jsonb"),
            nullable=False,
        ),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['page_id'], ['public.pages.id'], name='fk_widgets_page_id', ondelete='CASCADE'
        ),
        schema='public'
    )
    op.create_index('ix_widgets_page_id_position', 'widgets', ['page_id', 'position'], schema='public')


def downgrade() -> None:
    op.drop_index('ix_widgets_page_id_position', table_name='widgets', schema='public')
    op.drop_table('widgets', schema='public')
    op.drop_index('uq_pages_single_home', table_name='pages', schema='public')
    op.drop_index('ix_pages_created_at', table_name='pages', schema='public')
    op.drop_table('pages', schema='public')
