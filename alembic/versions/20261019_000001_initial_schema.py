"""Initial schema: users, earnings, referrals, payments, withdrawals

Revision ID: 20261019_000001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

MONEY = sa.DECIMAL(18, 2)


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('telegram_id', sa.BigInteger(), nullable=False),
        sa.Column('username', sa.String(length=32), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('investment', MONEY, nullable=False, server_default='0'),
        sa.Column('balance', MONEY, nullable=False, server_default='0'),
        sa.Column('referred_by_id', sa.Integer(), nullable=True),
        sa.Column(
            'can_withdraw_override', sa.Boolean(),
            nullable=False, server_default=sa.false()
        ),
        sa.Column(
            'is_banned', sa.Boolean(),
            nullable=False, server_default=sa.false()
        ),
        sa.Column('payout_platform', sa.String(length=32), nullable=True),
        sa.Column('payout_account_holder', sa.String(length=255), nullable=True),
        sa.Column('payout_account_number', sa.String(length=64), nullable=True),
        sa.Column('registration_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_earning_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('balance >= 0', name='check_user_balance_non_negative'),
        sa.CheckConstraint(
            'investment >= 0', name='check_user_investment_non_negative'
        ),
        sa.ForeignKeyConstraint(
            ['referred_by_id'], ['users.id'], ondelete='SET NULL'
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_telegram_id', 'users', ['telegram_id'], unique=True)
    op.create_index(
        'uq_users_username_lower', 'users', [sa.text('lower(username)')],
        unique=True
    )
    op.create_index(
        'uq_users_email_lower', 'users', [sa.text('lower(email)')], unique=True
    )
    op.create_index(
        'ix_users_referred_by_id', 'users', ['referred_by_id'], unique=False
    )

    op.create_table(
        'earnings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('amount', MONEY, nullable=False),
        sa.Column('type', sa.String(length=32), nullable=False),
        sa.Column('earned_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('amount > 0', name='check_earning_amount_positive'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_earnings_user_id', 'earnings', ['user_id'], unique=False)
    op.create_index(
        'idx_earning_user_date', 'earnings', ['user_id', 'earned_at'], unique=False
    )

    op.create_table(
        'referrals',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('referrer_id', sa.Integer(), nullable=False),
        sa.Column('referral_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            'referrer_id <> referral_id', name='check_referral_not_self'
        ),
        sa.ForeignKeyConstraint(
            ['referrer_id'], ['users.id'], ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['referral_id'], ['users.id'], ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('referral_id'),
    )
    op.create_index(
        'ix_referrals_referrer_id', 'referrals', ['referrer_id'], unique=False
    )

    op.create_table(
        'payment_requests',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('telegram_id', sa.BigInteger(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('account_holder_name', sa.String(length=255), nullable=False),
        sa.Column('account_number', sa.String(length=64), nullable=False),
        sa.Column('screenshot_file_id', sa.String(length=255), nullable=False),
        sa.Column(
            'status', sa.String(length=20),
            nullable=False, server_default='pending'
        ),
        sa.Column(
            'timeout_notified', sa.Boolean(),
            nullable=False, server_default=sa.false()
        ),
        sa.Column('submitted_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('reviewed_by', sa.BigInteger(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_payment_requests_telegram_id', 'payment_requests',
        ['telegram_id'], unique=False
    )
    op.create_index(
        'ix_payment_requests_user_id', 'payment_requests',
        ['user_id'], unique=False
    )
    op.create_index(
        'ix_payment_requests_status', 'payment_requests',
        ['status'], unique=False
    )
    op.create_index(
        'idx_payment_submitter_status', 'payment_requests',
        ['telegram_id', 'status'], unique=False
    )

    op.create_table(
        'withdrawal_requests',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('amount', MONEY, nullable=False),
        sa.Column(
            'status', sa.String(length=20),
            nullable=False, server_default='processing'
        ),
        sa.Column('payout_platform', sa.String(length=32), nullable=False),
        sa.Column('payout_account_holder', sa.String(length=255), nullable=False),
        sa.Column('payout_account_number', sa.String(length=64), nullable=False),
        sa.Column('submitted_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('processed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('processed_by', sa.BigInteger(), nullable=True),
        sa.Column('reject_reason', sa.Text(), nullable=True),
        sa.CheckConstraint(
            'amount > 0', name='check_withdrawal_amount_positive'
        ),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_withdrawal_requests_user_id', 'withdrawal_requests',
        ['user_id'], unique=False
    )
    op.create_index(
        'ix_withdrawal_requests_status', 'withdrawal_requests',
        ['status'], unique=False
    )


def downgrade() -> None:
    op.drop_index('ix_withdrawal_requests_status', table_name='withdrawal_requests')
    op.drop_index('ix_withdrawal_requests_user_id', table_name='withdrawal_requests')
    op.drop_table('withdrawal_requests')

    op.drop_index('idx_payment_submitter_status', table_name='payment_requests')
    op.drop_index('ix_payment_requests_status', table_name='payment_requests')
    op.drop_index('ix_payment_requests_user_id', table_name='payment_requests')
    op.drop_index('ix_payment_requests_telegram_id', table_name='payment_requests')
    op.drop_table('payment_requests')

    op.drop_index('ix_referrals_referrer_id', table_name='referrals')
    op.drop_table('referrals')

    op.drop_index('idx_earning_user_date', table_name='earnings')
    op.drop_index('ix_earnings_user_id', table_name='earnings')
    op.drop_table('earnings')

    op.drop_index('ix_users_referred_by_id', table_name='users')
    op.drop_index('uq_users_email_lower', table_name='users')
    op.drop_index('uq_users_username_lower', table_name='users')
    op.drop_index('ix_users_telegram_id', table_name='users')
    op.drop_table('users')
