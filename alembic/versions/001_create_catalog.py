"""001: create catalog tables

Revision ID: 001
Revises:
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE burgers (
            id              VARCHAR(32)     PRIMARY KEY,
            name            VARCHAR(128)    NOT NULL,
            description     TEXT            NOT NULL DEFAULT '',
            price           NUMERIC(10,2)   NOT NULL,
            image_ref       VARCHAR(255)    NOT NULL DEFAULT '',
            CONSTRAINT ck_burgers_price_non_negative CHECK (price >= 0)
        );
    """)
    op.execute("""
        CREATE TABLE toppings (
            id              VARCHAR(32)     PRIMARY KEY,
            name            VARCHAR(128)    NOT NULL,
            description     TEXT            NOT NULL DEFAULT '',
            category        VARCHAR(32)     NOT NULL,
            price           NUMERIC(10,2)   NOT NULL,
            image_ref       VARCHAR(255)    NOT NULL DEFAULT '',
            CONSTRAINT ck_toppings_price_non_negative CHECK (price >= 0),
            CONSTRAINT ck_toppings_category CHECK (
                category IN ('vegetable', 'meat', 'cheese', 'sauce', 'extras')
            )
        );
    """)
    op.execute("CREATE INDEX idx_toppings_category ON toppings (category);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS toppings CASCADE;")
    op.execute("DROP TABLE IF EXISTS burgers CASCADE;")
