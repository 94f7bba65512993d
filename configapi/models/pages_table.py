# configapi/models/pages_table.py
# Pages: routable app screens, at most one flagged as home

from sqlalchemy import Table, Column, Text, Boolean, TIMESTAMP, Index, UniqueConstraint, text, false

from configapi.db.base import metadata


# Constraint names are matched by the repositories to pick the conflict message.
ROUTE_CONSTRAINT = 'uq_pages_route'
SINGLE_HOME_INDEX = 'uq_pages_single_home'


pages = Table(
    'pages',
    metadata,
    Column('id', Text, primary_key=True),  # uuid4 string
    Column('name', Text, nullable=False),
    Column('route', Text, nullable=False),
    Column('is_home', Boolean, nullable=False, server_default=false()),
    Column('created_at', TIMESTAMP(timezone=True), nullable=False),
    Column('updated_at', TIMESTAMP(timezone=True), nullable=False),
    UniqueConstraint('route', name=ROUTE_CONSTRAINT),
    # Partial unique index: only one row may carry is_home = true
    Index(SINGLE_HOME_INDEX, 'is_home', unique=True, postgresql_where=text('is_home')),
    Index('ix_pages_created_at', 'created_at'),
    schema='public',
)
