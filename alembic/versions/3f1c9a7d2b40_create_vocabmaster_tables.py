"""create users, vocabulary, assignments, submissions and refresh tokens

Revision ID: 3f1c9a7d2b40
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    tables = set(inspector.get_table_names())

    if "users" not in tables:
        op.create_table(
            "users",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("username", sa.String(length=50), nullable=False),
            sa.Column("password_hash", sa.String(length=255), nullable=False),
            sa.Column("name", sa.String(length=100), nullable=False),
            sa.Column("email", sa.String(length=255), nullable=True),
            sa.Column("role", sa.String(length=10), nullable=False, server_default="user"),
            sa.Column("words_per_day", sa.Integer(), nullable=False, server_default="5"),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
            sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
            sa.CheckConstraint("role IN ('admin', 'user')", name="ck_users_role"),
        )
        op.create_index("ix_users_username", "users", ["username"], unique=True)
        op.create_index("ix_users_email", "users", ["email"], unique=True)

    if "vocabulary" not in tables:
        op.create_table(
            "vocabulary",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("word", sa.String(length=100), nullable=False),
            sa.Column("cefr", sa.String(length=2), nullable=False),
            sa.Column("part_of_speech", sa.String(length=50), nullable=False),
            sa.Column("pronunciation", sa.String(length=100), nullable=True),
            sa.Column("definition", sa.Text(), nullable=False),
            sa.Column("examples", sa.JSON(), nullable=False),
            sa.Column("audio_url", sa.String(length=255), nullable=True),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
            sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
            sa.CheckConstraint("cefr IN ('A1', 'A2', 'B1', 'B2', 'C1', 'C2')", name="ck_vocabulary_cefr"),
        )
        op.create_index("ix_vocabulary_word", "vocabulary", ["word"])
        op.create_index("ix_vocabulary_cefr", "vocabulary", ["cefr"])

    if "user_vocabulary" not in tables:
        op.create_table(
            "user_vocabulary",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
            sa.Column(
                "vocabulary_id",
                sa.Integer(),
                sa.ForeignKey("vocabulary.id", ondelete="CASCADE"),
                nullable=False,
            ),
            sa.Column("assigned_date", sa.Date(), nullable=False),
            sa.Column("is_learned", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("last_practiced", sa.DateTime(timezone=True), nullable=True),
            sa.UniqueConstraint("user_id", "vocabulary_id", name="uq_user_vocabulary_user_vocabulary"),
        )
        op.create_index("ix_user_vocabulary_user_id", "user_vocabulary", ["user_id"])
        op.create_index("ix_user_vocabulary_vocabulary_id", "user_vocabulary", ["vocabulary_id"])
        op.create_index("ix_user_vocabulary_assigned_date", "user_vocabulary", ["assigned_date"])

    if "submissions" not in tables:
        op.create_table(
            "submissions",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
            sa.Column(
                "vocabulary_id",
                sa.Integer(),
                sa.ForeignKey("vocabulary.id", ondelete="CASCADE"),
                nullable=False,
            ),
            sa.Column("sentences", sa.JSON(), nullable=False),
            sa.Column("status", sa.String(length=10), nullable=False, server_default="pending"),
            sa.Column("feedback", sa.Text(), nullable=True),
            sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
            sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
            sa.Column("reviewed_by", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
            sa.CheckConstraint("status IN ('pending', 'approved', 'rejected')", name="ck_submissions_status"),
        )
        op.create_index("ix_submissions_user_id", "submissions", ["user_id"])
        op.create_index("ix_submissions_vocabulary_id", "submissions", ["vocabulary_id"])
        op.create_index("ix_submissions_status", "submissions", ["status"])

    if "refresh_tokens" not in tables:
        op.create_table(
            "refresh_tokens",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
            sa.Column("jti", sa.String(length=64), nullable=False),
            sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
            sa.Column("revoked", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        )
        op.create_index("ix_refresh_tokens_user_id", "refresh_tokens", ["user_id"])
        op.create_index("ix_refresh_tokens_jti", "refresh_tokens", ["jti"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_refresh_tokens_jti", table_name="refresh_tokens")
    op.drop_index("ix_refresh_tokens_user_id", table_name="refresh_tokens")
    op.drop_table("refresh_tokens")
    op.drop_index("ix_submissions_status", table_name="submissions")
    op.drop_index("ix_submissions_vocabulary_id", table_name="submissions")
    op.drop_index("ix_submissions_user_id", table_name="submissions")
    op.drop_table("submissions")
    op.drop_index("ix_user_vocabulary_assigned_date", table_name="user_vocabulary")
    op.drop_index("ix_user_vocabulary_vocabulary_id", table_name="user_vocabulary")
    op.drop_index("ix_user_vocabulary_user_id", table_name="user_vocabulary")
    op.drop_table("user_vocabulary")
    op.drop_index("ix_vocabulary_cefr", table_name="vocabulary")
    op.drop_index("ix_vocabulary_word", table_name="vocabulary")
    op.drop_table("vocabulary")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
