"""Create movie, review and revalidation event tables.

Revision ID: a1c7e2f90b34
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "a1c7e2f90b34"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "movie",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=True),
        sa.Column("director", sa.String(), nullable=True),
        sa.Column("cast", sa.String(), nullable=True),
        sa.Column("year", sa.Integer(), nullable=True),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("language", sa.String(), nullable=True),
        sa.Column("rating", sa.Float(), nullable=False),
        sa.Column("vote_count", sa.Integer(), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("image_preview_url", sa.String(), nullable=True),
        sa.Column("image_url", sa.String(), nullable=True),
        sa.Column("url", sa.String(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_movie_title"), "movie", ["title"], unique=False)
    op.create_index(op.f("ix_movie_slug"), "movie", ["slug"], unique=True)
    op.create_index(op.f("ix_movie_updated_at"), "movie", ["updated_at"], unique=False)

    op.create_table(
        "review",
        sa.Column("pk", sa.Uuid(), nullable=False),
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("content", sa.String(), nullable=True),
        sa.Column("film_title", sa.String(), nullable=True),
        sa.Column("director", sa.String(), nullable=True),
        sa.Column("year", sa.Integer(), nullable=True),
        sa.Column("rating", sa.Float(), nullable=True),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("author_id", sa.String(), nullable=True),
        sa.Column("created_at", sa.String(), nullable=False),
        sa.Column("updated_at", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("pk"),
    )
    op.create_index(op.f("ix_review_id"), "review", ["id"], unique=True)
    op.create_index(op.f("ix_review_slug"), "review", ["slug"], unique=False)

    op.create_table(
        "revalidationevent",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("tag", sa.String(), nullable=False),
        sa.Column("reason", sa.String(), nullable=False),
        sa.Column(
            "status",
            sa.Enum(
                "PENDING",
                "APPLIED",
                "FAILED",
                name="revalidationstatus",
                native_enum=False,
            ),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("applied_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("error", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_revalidationevent_tag"), "revalidationevent", ["tag"], unique=False
    )
    op.create_index(
        op.f("ix_revalidationevent_status"),
        "revalidationevent",
        ["status"],
        unique=False,
    )


def downgrade():
    op.drop_index(op.f("ix_revalidationevent_status"), table_name="revalidationevent")
    op.drop_index(op.f("ix_revalidationevent_tag"), table_name="revalidationevent")
    op.drop_table("revalidationevent")
    op.drop_index(op.f("ix_review_slug"), table_name="review")
    op.drop_index(op.f("ix_review_id"), table_name="review")
    op.drop_table("review")
    op.drop_index(op.f("ix_movie_updated_at"), table_name="movie")
    op.drop_index(op.f("ix_movie_slug"), table_name="movie")
    op.drop_index(op.f("ix_movie_title"), table_name="movie")
    op.drop_table("movie")
