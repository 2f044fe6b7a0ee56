"""init catalog schema

Revision ID: 0001_init
Revises:
Create Date: 2026-09-02

"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "titles",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("provider", sa.String(length=32), nullable=False),
        sa.Column("provider_id", sa.String(length=64), nullable=False),
        sa.Column("type", sa.String(length=10), nullable=False),
        sa.Column("title", sa.String(length=512), nullable=False),
        sa.Column("original_title", sa.String(length=512), nullable=True),
        sa.Column("year", sa.Integer(), nullable=True),
        sa.Column("runtime_minutes", sa.Integer(), nullable=True),
        sa.Column("overview", sa.Text(), nullable=True),
        sa.Column("poster_url", sa.String(length=1024), nullable=True),
        sa.Column("backdrop_url", sa.String(length=1024), nullable=True),
        sa.Column(
            "genres",
            postgresql.ARRAY(sa.String(length=64)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "countries",
            postgresql.ARRAY(sa.String(length=8)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "languages",
            postgresql.ARRAY(sa.String(length=16)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.text("NOW()")
        ),
        sa.UniqueConstraint("provider", "provider_id", name="uq_title_provider"),
    )
    op.create_index("ix_titles_title", "titles", ["title"])
    op.create_index("ix_titles_year", "titles", ["year"])
    op.create_index(
        "ix_titles_created_at_id",
        "titles",
        [sa.text("created_at DESC"), sa.text("id DESC")],
    )
    for column in ("genres", "countries", "languages"):
        op.create_index(
            f"ix_titles_{column}", "titles", [column], postgresql_using="gin"
        )

    op.create_table(
        "trailers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "title_id",
            sa.String(length=32),
            sa.ForeignKey("titles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("source", sa.String(length=32), nullable=False),
        sa.Column("source_video_id", sa.String(length=128), nullable=False),
        sa.Column("kind", sa.String(length=32), nullable=False),
        sa.Column(
            "is_official", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column("language", sa.String(length=16), nullable=True),
        sa.Column("duration_seconds", sa.Integer(), nullable=True),
        sa.UniqueConstraint(
            "source", "source_video_id", name="uq_trailer_source_video"
        ),
    )
    op.create_index("ix_trailers_title_id", "trailers", ["title_id"])


def downgrade():
    op.drop_table("trailers")
    op.drop_table("titles")
