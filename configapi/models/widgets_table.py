# configapi/models/widgets_table.py
# Widgets: ordered UI components owned by a page

from sqlalchemy import Table, Column, Text, Integer, TIMESTAMP, Index, ForeignKey, text
from sqlalchemy.dialects.postgresql import JSONB

from configapi.db.base import metadata


PAGE_FOREIGN_KEY = 'fk_widgets_page_id'


widgets = Table(
    'widgets',
    metadata,
    Column('id', Text, primary_key=True),  # uuid4 string
    Column(
        'page_id',
        Text,
        ForeignKey('public.pages.id', ondelete='CASCADE', name=PAGE_FOREIGN_KEY),
        nullable=False,
    ),
    Column('type', Text, nullable=False),
    Column('position', Integer, nullable=False),
    Column('config', JSONB, nullable=False, server_default=text("'{}'::jsonb")),  # opaque client payload
    Column('created_at', TIMESTAMP(timezone=True), nullable=False),
    Column('updated_at', TIMESTAMP(timezone=True), nullable=False),
    Index('ix_widgets_page_id_position', 'page_id', 'position'),
    schema='public',
)
