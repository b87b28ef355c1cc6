"""init_schema

Revision ID: 3f1c2a9d7b10
Revises: 
Create Date: 2026-10-17 09:12:41.518204

"""
from alembic import op
import sqlalchemy as sa
import sqlmodel


revision = '3f1c2a9d7b10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column("password_hash", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_user_username", "user", ["username"], unique=True)

    op.create_table(
        "taskitem",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column("description", sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.Column("due_date", sa.DateTime(), nullable=True),
        sa.Column("is_completed", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_taskitem_created_at", "taskitem", ["created_at"], unique=False)
    op.create_index("ix_taskitem_user_id", "taskitem", ["user_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_taskitem_user_id", table_name="taskitem")
    op.drop_index("ix_taskitem_created_at", table_name="taskitem")
    op.drop_table("taskitem")
    op.drop_index("ix_user_username", table_name="user")
    op.drop_table("user")
