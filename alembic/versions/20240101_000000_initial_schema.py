"""
Initial schema: users, DIYs, comments, likes and saved DIYs.

Revision ID: 20240101_000000_initial_schema
Revises:
Create Date: 2024-01-01 00:00:00
"""

import sqlalchemy as sa

from alembic import op  # type: ignore[reportMissingImports]

# revision identifiers, used by Alembic.
revision = "20240101_000000_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("CURRENT_TIMESTAMP"),
    )


def upgrade() -> None:
    # users
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="users_pkey"),
        sa.UniqueConstraint("username", name="users_username_key"),
        sa.UniqueConstraint("email", name="users_email_key"),
    )

    # diys
    op.create_table(
        "diys",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("materials_used", sa.JSON(), nullable=False),
        sa.Column("instructions", sa.Text(), nullable=False),
        sa.Column("images", sa.JSON(), nullable=False),
        _created_at(),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], ondelete="CASCADE", name="diys_user_id_fkey"
        ),
        sa.PrimaryKeyConstraint("id", name="diys_pkey"),
    )
    op.create_index("idx_diys_user", "diys", ["user_id"], unique=False)
    op.create_index("idx_diys_created_at", "diys", ["created_at"], unique=False)

    # comments
    op.create_table(
        "comments",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("diy_id", sa.Uuid(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], ondelete="CASCADE", name="comments_user_id_fkey"
        ),
        sa.ForeignKeyConstraint(
            ["diy_id"], ["diys.id"], ondelete="CASCADE", name="comments_diy_id_fkey"
        ),
        sa.PrimaryKeyConstraint("id", name="comments_pkey"),
    )
    op.create_index("idx_comments_diy", "comments", ["diy_id"], unique=False)
    op.create_index("idx_comments_user", "comments", ["user_id"], unique=False)

    # likes
    op.create_table(
        "likes",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("diy_id", sa.Uuid(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], ondelete="CASCADE", name="likes_user_id_fkey"
        ),
        sa.ForeignKeyConstraint(
            ["diy_id"], ["diys.id"], ondelete="CASCADE", name="likes_diy_id_fkey"
        ),
        sa.PrimaryKeyConstraint("id", name="likes_pkey"),
        sa.UniqueConstraint("user_id", "diy_id", name="likes_user_id_diy_id_key"),
    )
    op.create_index("idx_likes_diy", "likes", ["diy_id"], unique=False)

    # saved_diys
    op.create_table(
        "saved_diys",
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("diy_id", sa.Uuid(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], ondelete="CASCADE", name="saved_diys_user_id_fkey"
        ),
        sa.ForeignKeyConstraint(
            ["diy_id"], ["diys.id"], ondelete="CASCADE", name="saved_diys_diy_id_fkey"
        ),
        sa.PrimaryKeyConstraint("user_id", "diy_id", name="saved_diys_pkey"),
    )


def downgrade() -> None:
    # drop in reverse dependency order
    op.drop_table("saved_diys")

    op.drop_index("idx_likes_diy", table_name="likes")
    op.drop_table("likes")

    op.drop_index("idx_comments_user", table_name="comments")
    op.drop_index("idx_comments_diy", table_name="comments")
    op.drop_table("comments")

    op.drop_index("idx_diys_created_at", table_name="diys")
    op.drop_index("idx_diys_user", table_name="diys")
    op.drop_table("diys")

    op.drop_table("users")
