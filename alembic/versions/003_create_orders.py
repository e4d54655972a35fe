"""003: create orders table

Revision ID: 003
Revises: 002
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE orders (
            id                      VARCHAR(64)     PRIMARY KEY,
            user_id                 VARCHAR(128)    NOT NULL,
            items                   JSONB           NOT NULL,
            status                  VARCHAR(20)     NOT NULL DEFAULT 'pending',
            total                   NUMERIC(10,2)   NOT NULL,
            nickname                VARCHAR(100),
            created_at              TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            estimated_completion_at TIMESTAMPTZ     NOT NULL,
            ready_at                TIMESTAMPTZ,
            completed_at            TIMESTAMPTZ,
            CONSTRAINT ck_orders_status CHECK (
                status IN ('pending', 'in-preparation', 'ready', 'completed', 'cancelled')
            ),
            CONSTRAINT ck_orders_total_non_negative CHECK (total >= 0),
            CONSTRAINT ck_orders_items_array CHECK (jsonb_typeof(items) = 'array')
        );
    """)
    # No FK to users: registrations come from a separate app
    op.execute("CREATE INDEX idx_orders_user_created ON orders (user_id, created_at DESC);")
    op.execute("CREATE INDEX idx_orders_status ON orders (status);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS orders CASCADE;")
