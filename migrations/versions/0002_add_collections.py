"""Add curated collections.

Revision ID: 0002_add_collections
Revises: 0001_init
Create Date: 2026-09-09 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0002_add_collections"
down_revision = "0001_init"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "collections",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("slug", sa.String(length=128), nullable=False),
        sa.Column("title", sa.String(length=256), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.text("NOW()")
        ),
    )
    op.create_index("ix_collections_slug", "collections", ["slug"], unique=True)

    op.create_table(
        "collection_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "collection_id",
            sa.Integer(),
            sa.ForeignKey("collections.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "title_id",
            sa.String(length=32),
            sa.ForeignKey("titles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="0"),
        sa.UniqueConstraint("collection_id", "title_id", name="uq_collection_title"),
    )
    op.create_index(
        "ix_collection_items_collection_id", "collection_items", ["collection_id"]
    )
    op.create_index("ix_collection_items_title_id", "collection_items", ["title_id"])


def downgrade() -> None:
    op.drop_table("collection_items")
    op.drop_table("collections")
