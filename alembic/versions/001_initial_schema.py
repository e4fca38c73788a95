"""Initial schema — users, bootcamps, reviews.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="user"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "bootcamps",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("name", sa.String(50), nullable=False, unique=True),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("website", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("address", sa.String(255), nullable=True),
        sa.Column("careers", sa.JSON, nullable=False),
        sa.Column("average_rating", sa.Float, nullable=True),
        sa.Column("average_cost", sa.Integer, nullable=True),
        sa.Column("housing", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("job_assistance", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("job_guarantee", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("accept_gi", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("user_id", sa.Uuid, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_bootcamps_user_id", "bootcamps", ["user_id"])

    op.create_table(
        "reviews",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("text", sa.Text, nullable=False),
        sa.Column("rating", sa.Integer, nullable=False),
        sa.Column("bootcamp_id", sa.Uuid, sa.ForeignKey("bootcamps.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.Uuid, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("bootcamp_id", "user_id", name="uq_reviews_bootcamp_user"),
        sa.CheckConstraint("rating >= 1 AND rating <= 10", name="ck_reviews_rating"),
    )
    op.create_index("ix_reviews_bootcamp_id", "reviews", ["bootcamp_id"])


def downgrade() -> None:
    op.drop_index("ix_reviews_bootcamp_id", table_name="reviews")
    op.drop_table("reviews")
    op.drop_index("ix_bootcamps_user_id", table_name="bootcamps")
    op.drop_table("bootcamps")
    op.drop_table("users")
