"""004: seed catalog

Revision ID: 004
Revises: 003
Create Date: 2026-10-17
"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

from src.cb_catalog.infrastructure.seed import load_burgers, load_toppings

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_INSERT_BURGER = sa.text("""
    INSERT INTO burgers (id, name, description, price, image_ref)
    VALUES (:id, :name, :description, :price, :image_ref)
    ON CONFLICT (id) DO NOTHING
""")

_INSERT_TOPPING = sa.text("""
    INSERT INTO toppings (id, name, description, category, price, image_ref)
    VALUES (:id, :name, :description, :category, :price, :image_ref)
    ON CONFLICT (id) DO NOTHING
""")


def upgrade() -> None:
    bind = op.get_bind()
    for b in load_burgers():
        bind.execute(
            _INSERT_BURGER,
            {
                "id": b.id,
                "name": b.name,
                "description": b.description,
                "price": b.price,
                "image_ref": b.image_ref,
            },
        )
    for t in load_toppings():
        bind.execute(
            _INSERT_TOPPING,
            {
                "id": t.id,
                "name": t.name,
                "description": t.description,
                "category": t.category,
                "price": t.price,
                "image_ref": t.image_ref,
            },
        )


def downgrade() -> None:
    op.execute("DELETE FROM toppings;")
    op.execute("DELETE FROM burgers;")
