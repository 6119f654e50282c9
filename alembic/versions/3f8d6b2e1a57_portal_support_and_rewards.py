"""company portal, promotional materials, support and rewards

Revision ID: 3f8d6b2e1a57
Revises: 7c1e2a9b4d30
Create Date: 2026-01-15 00:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '3f8d6b2e1a57'
down_revision: Union[str, None] = '7c1e2a9b4d30'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column('id', sa.UUID(), nullable=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'company_users',
        _id(),
        sa.Column('company_id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(150), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('email_verified_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )

    op.create_table(
        'promotional_materials',
        _id(),
        sa.Column('title', sa.String(150), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(30), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('file_url', sa.String(255), nullable=False),
        sa.Column('file_name', sa.String(150), nullable=False),
        sa.Column('file_size', sa.Integer(), nullable=False),
        sa.Column('thumbnail_url', sa.String(255), nullable=True),
        sa.Column('preview_url', sa.String(255), nullable=True),
        sa.Column('dimensions', sa.String(20), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('download_count', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('title'),
    )

    op.create_table(
        'support_tickets',
        _id(),
        sa.Column('ticket_code', sa.String(20), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('subject', sa.String(255), nullable=False),
        sa.Column('category', sa.String(30), nullable=False),
        sa.Column('priority', sa.String(10), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('assigned_to_id', sa.UUID(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['assigned_to_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('ticket_code'),
    )

    op.create_table(
        'support_messages',
        _id(),
        sa.Column('support_ticket_id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('is_admin_reply', sa.Boolean(), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['support_ticket_id'], ['support_tickets.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'lucky_draw_entries',
        _id(),
        sa.Column('lucky_draw_id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('payment_id', sa.UUID(), nullable=True),
        sa.Column('base_entries', sa.Integer(), nullable=False),
        sa.Column('bonus_entries', sa.Integer(), nullable=False),
        sa.Column('is_winner', sa.Boolean(), nullable=False),
        sa.Column('prize_rank', sa.Integer(), nullable=True),
        sa.Column('prize_amount', sa.Numeric(12, 2), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('base_entries > 0', name='ck_lucky_draw_entries_base_positive'),
        sa.ForeignKeyConstraint(['lucky_draw_id'], ['lucky_draws.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['payment_id'], ['payments.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('lucky_draw_id', 'user_id'),
    )

    op.create_table(
        'profit_shares',
        _id(),
        sa.Column('period_name', sa.String(20), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('total_pool', sa.Numeric(14, 2), nullable=False),
        sa.Column('net_profit', sa.Numeric(14, 2), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('admin_id', sa.UUID(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['admin_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('period_name'),
    )

    op.create_table(
        'user_profit_shares',
        _id(),
        sa.Column('profit_share_id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['profit_share_id'], ['profit_shares.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('profit_share_id', 'user_id'),
    )


def downgrade() -> None:
    op.drop_table('user_profit_shares')
    op.drop_table('profit_shares')
    op.drop_table('lucky_draw_entries')
    op.drop_table('support_messages')
    op.drop_table('support_tickets')
    op.drop_table('promotional_materials')
    op.drop_table('company_users')
