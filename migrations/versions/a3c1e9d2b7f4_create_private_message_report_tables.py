"""create person, private_message and private_message_report tables

Revision ID: a3c1e9d2b7f4
Revises:
Create Date: 2024-06-01 00:00:00.000000
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a3c1e9d2b7f4"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "person",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False, unique=True),
        sa.Column("display_name", sa.String(length=255), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("local", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("banned", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("bot_account", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "published", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.Column("updated", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "private_message",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "creator_id",
            sa.Integer(),
            sa.ForeignKey("person.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "recipient_id",
            sa.Integer(),
            sa.ForeignKey("person.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("local", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column(
            "published", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.Column("updated", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_private_message_creator_id", "private_message", ["creator_id"])
    op.create_index("ix_private_message_recipient_id", "private_message", ["recipient_id"])

    op.create_table(
        "private_message_report",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "creator_id",
            sa.Integer(),
            sa.ForeignKey("person.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "private_message_id",
            sa.Integer(),
            sa.ForeignKey("private_message.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("original_pm_text", sa.Text(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("resolved", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "resolver_id",
            sa.Integer(),
            sa.ForeignKey("person.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column(
            "published", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.Column("updated", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint(
            "private_message_id", "creator_id", name="uq_private_message_report_message_creator"
        ),
        sa.CheckConstraint(
            "(resolved AND resolver_id IS NOT NULL) OR (NOT resolved AND resolver_id IS NULL)",
            name="ck_private_message_report_resolver_matches_resolved",
        ),
    )
    op.create_index(
        "ix_private_message_report_creator_id", "private_message_report", ["creator_id"]
    )
    op.create_index(
        "ix_private_message_report_private_message_id",
        "private_message_report",
        ["private_message_id"],
    )
    op.create_index("ix_private_message_report_resolved", "private_message_report", ["resolved"])
    op.create_index(
        "ix_private_message_report_published", "private_message_report", ["published"]
    )


def downgrade() -> None:
    op.drop_index("ix_private_message_report_published", table_name="private_message_report")
    op.drop_index("ix_private_message_report_resolved", table_name="private_message_report")
    op.drop_index(
        "ix_private_message_report_private_message_id", table_name="private_message_report"
    )
    op.drop_index("ix_private_message_report_creator_id", table_name="private_message_report")
    op.drop_table("private_message_report")
    op.drop_index("ix_private_message_recipient_id", table_name="private_message")
    op.drop_index("ix_private_message_creator_id", table_name="private_message")
    op.drop_table("private_message")
    op.drop_table("person")
