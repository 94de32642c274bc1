"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00

"""
from alembic import op
import sqlalchemy as sa


revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "admin_users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("user_role", sa.String(20), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_admin_users_username", "admin_users", ["username"], unique=True)

    op.create_table(
        "news",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("timezone", sa.String(10), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("excerpt", sa.Text(), nullable=False),
        sa.Column("link", sa.String(500), nullable=True),
        sa.Column("featured", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_news_date", "news", ["date"])
    op.create_index("ix_news_category", "news", ["category"])
    op.create_index("ix_news_featured", "news", ["featured"])

    op.create_table(
        "community_arts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("image", sa.String(500), nullable=False, unique=True),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("category", sa.String(200), nullable=False),
        sa.Column("artist", sa.String(200), nullable=False),
        sa.Column("xHandle", sa.String(200), nullable=True),
        sa.Column("xUrl", sa.String(500), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_community_arts_category", "community_arts", ["category"])
    op.create_index("ix_community_arts_artist", "community_arts", ["artist"])

    op.create_table(
        "news_categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_table(
        "art_categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "youtube_video",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column("video_id", sa.String(50), nullable=False),
        sa.Column("video_url", sa.String(500), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("id = 1", name="ck_youtube_video_singleton"),
    )

    op.create_table(
        "asset_cleanup_failures",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("image_path", sa.String(500), nullable=False),
        sa.Column("backend", sa.String(20), nullable=False),
        sa.Column("error", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_asset_cleanup_failures_image_path", "asset_cleanup_failures", ["image_path"])


def downgrade() -> None:
    op.drop_table("asset_cleanup_failures")
    op.drop_table("youtube_video")
    op.drop_table("art_categories")
    op.drop_table("news_categories")
    op.drop_table("community_arts")
    op.drop_table("news")
    op.drop_table("admin_users")
