"""create view categories

Revision ID: 4f2c9a7d1b3e
Revises:
Create Date: 2026-10-19 09:12:31.504117

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4f2c9a7d1b3e"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("create_at", sa.BigInteger(), nullable=False),
        sa.Column("update_at", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)

    op.create_table(
        "boards",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("team_id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("created_by", sa.String(length=36), nullable=False),
        sa.Column("create_at", sa.BigInteger(), nullable=False),
        sa.Column("update_at", sa.BigInteger(), nullable=False),
        sa.Column("delete_at", sa.BigInteger(), server_default="0", nullable=False),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_boards_team_id"), "boards", ["team_id"], unique=False)
    op.create_index(op.f("ix_boards_created_by"), "boards", ["created_by"], unique=False)
    op.create_index(op.f("ix_boards_delete_at"), "boards", ["delete_at"], unique=False)

    op.create_table(
        "board_members",
        sa.Column("board_id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("create_at", sa.BigInteger(), nullable=False),
        sa.Column("update_at", sa.BigInteger(), nullable=False),
        sa.ForeignKeyConstraint(["board_id"], ["boards.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("board_id", "user_id"),
    )
    op.create_index(op.f("ix_board_members_user_id"), "board_members", ["user_id"], unique=False)

    op.create_table(
        "view_categories",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("board_id", sa.String(length=36), nullable=False),
        sa.Column("create_at", sa.BigInteger(), nullable=False),
        sa.Column("update_at", sa.BigInteger(), nullable=False),
        sa.Column("delete_at", sa.BigInteger(), server_default="0", nullable=False),
        sa.Column("collapsed", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("sort_order", sa.Integer(), server_default="0", nullable=False),
        sa.Column("type", sa.String(length=20), server_default="custom", nullable=False),
        sa.ForeignKeyConstraint(["board_id"], ["boards.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_view_categories_user_id"), "view_categories", ["user_id"], unique=False)
    op.create_index(
        op.f("ix_view_categories_board_id"), "view_categories", ["board_id"], unique=False
    )
    op.create_index(
        op.f("ix_view_categories_delete_at"), "view_categories", ["delete_at"], unique=False
    )

    # category_id is not a foreign key: "" marks an uncategorized view
    op.create_table(
        "view_category_views",
        sa.Column("view_id", sa.String(length=36), nullable=False),
        sa.Column("category_id", sa.String(length=36), nullable=False),
        sa.Column("hidden", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("sort_order", sa.Integer(), server_default="0", nullable=False),
        sa.PrimaryKeyConstraint("view_id"),
    )
    op.create_index(
        op.f("ix_view_category_views_category_id"),
        "view_category_views",
        ["category_id"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_view_category_views_category_id"), table_name="view_category_views")
    op.drop_table("view_category_views")
    op.drop_index(op.f("ix_view_categories_delete_at"), table_name="view_categories")
    op.drop_index(op.f("ix_view_categories_board_id"), table_name="view_categories")
    op.drop_index(op.f("ix_view_categories_user_id"), table_name="view_categories")
    op.drop_table("view_categories")
    op.drop_index(op.f("ix_board_members_user_id"), table_name="board_members")
    op.drop_table("board_members")
    op.drop_index(op.f("ix_boards_delete_at"), table_name="boards")
    op.drop_index(op.f("ix_boards_created_by"), table_name="boards")
    op.drop_index(op.f("ix_boards_team_id"), table_name="boards")
    op.drop_table("boards")
    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_table("users")
