"""initial schema

Revision ID: 7c1e2a9b4d30
Revises:
Create Date: 2026-01-01 00:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '7c1e2a9b4d30'
down_revision: Union[str, None] = None
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
    # -- foundation ---------------------------------------------------------
    op.create_table(
        'settings',
        _id(),
        sa.Column('key', sa.String(100), nullable=False),
        sa.Column('value', sa.Text(), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('group', sa.String(50), nullable=False),
        sa.Column('description', sa.String(255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('key'),
    )

    op.create_table(
        'permissions',
        _id(),
        sa.Column('name', sa.String(100), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'roles',
        _id(),
        sa.Column('name', sa.String(50), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'role_permissions',
        sa.Column('role_id', sa.UUID(), nullable=False),
        sa.Column('permission_id', sa.UUID(), nullable=False),
        sa.ForeignKeyConstraint(['role_id'], ['roles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['permission_id'], ['permissions.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('role_id', 'permission_id'),
    )

    op.create_table(
        'sectors',
        _id(),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('slug', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug'),
    )

    op.create_table(
        'feature_flags',
        _id(),
        sa.Column('key', sa.String(100), nullable=False),
        sa.Column('name', sa.String(150), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_enabled', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('key'),
    )

    op.create_table(
        'kyc_rejection_templates',
        _id(),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('title', sa.String(150), nullable=False),
        sa.Column('category', sa.String(50), nullable=False),
        sa.Column('reason', sa.Text(), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'legal_agreements',
        _id(),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('version', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('effective_date', sa.Date(), nullable=False),
        sa.Column('require_signature', sa.Boolean(), nullable=False),
        sa.Column('is_template', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('type'),
    )

    # -- identity -----------------------------------------------------------
    op.create_table(
        'users',
        _id(),
        sa.Column('username', sa.String(50), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('mobile', sa.String(20), nullable=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('referral_code', sa.String(20), nullable=False),
        sa.Column('referred_by_id', sa.UUID(), nullable=True),
        sa.Column('email_verified_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('mobile_verified_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['referred_by_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
        sa.UniqueConstraint('email'),
        sa.UniqueConstraint('referral_code'),
    )

    op.create_table(
        'user_roles',
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('role_id', sa.UUID(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['role_id'], ['roles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('user_id', 'role_id'),
    )

    op.create_table(
        'user_profiles',
        _id(),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('dob', sa.Date(), nullable=True),
        sa.Column('gender', sa.String(10), nullable=True),
        sa.Column('address_line_1', sa.String(255), nullable=True),
        sa.Column('address_line_2', sa.String(255), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('state', sa.String(100), nullable=True),
        sa.Column('pincode', sa.String(10), nullable=True),
        sa.Column('country', sa.String(100), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )

    op.create_table(
        'user_kyc',
        _id(),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('pan_number', sa.String(10), nullable=False),
        sa.Column('aadhaar_number', sa.String(12), nullable=False),
        sa.Column('bank_account', sa.String(20), nullable=False),
        sa.Column('bank_ifsc', sa.String(11), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('submitted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('verified_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )

    op.create_table(
        'user_settings',
        _id(),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('theme', sa.String(20), nullable=False),
        sa.Column('language', sa.String(10), nullable=False),
        sa.Column('timezone', sa.String(50), nullable=False),
        sa.Column('email_notifications', sa.Boolean(), nullable=False),
        sa.Column('sms_notifications', sa.Boolean(), nullable=False),
        sa.Column('push_notifications', sa.Boolean(), nullable=False),
        sa.Column('marketing_emails', sa.Boolean(), nullable=False),
        sa.Column('two_factor_enabled', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )

    # -- ledger -------------------------------------------------------------
    op.create_table(
        'wallets',
        _id(),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('balance_paise', sa.BigInteger(), nullable=False),
        sa.Column('locked_balance_paise', sa.BigInteger(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('balance_paise >= 0', name='ck_wallets_balance_non_negative'),
        sa.CheckConstraint('locked_balance_paise >= 0', name='ck_wallets_locked_non_negative'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )

    op.create_table(
        'transactions',
        _id(),
        sa.Column('transaction_id', sa.String(100), nullable=False),
        sa.Column('wallet_id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('amount_paise', sa.BigInteger(), nullable=False),
        sa.Column('balance_before_paise', sa.BigInteger(), nullable=False),
        sa.Column('balance_after_paise', sa.BigInteger(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('reference_type', sa.String(50), nullable=True),
        sa.Column('reference_id', sa.UUID(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('amount_paise > 0', name='ck_transactions_amount_positive'),
        sa.ForeignKeyConstraint(['wallet_id'], ['wallets.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('transaction_id'),
    )
    op.create_index(
        'ix_transactions_wallet_id_status',
        'transactions',
        ['wallet_id', 'status'],
    )

    op.create_table(
        'admin_ledger_entries',
        _id(),
        sa.Column('entry_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('entry_type', sa.String(10), nullable=False),
        sa.Column('category', sa.String(50), nullable=False),
        sa.Column('subcategory', sa.String(50), nullable=True),
        sa.Column('amount_paise', sa.BigInteger(), nullable=False),
        sa.Column('balance_after_paise', sa.BigInteger(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('reference_type', sa.String(50), nullable=True),
        sa.Column('reference_id', sa.UUID(), nullable=True),
        sa.Column('metadata', postgresql.JSONB(), nullable=True),
        sa.Column('entry_pair_id', sa.UUID(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['entry_pair_id'], ['admin_ledger_entries.id']),
        sa.PrimaryKeyConstraint('id'),
    )

    # -- catalog ------------------------------------------------------------
    op.create_table(
        'companies',
        _id(),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('slug', sa.String(200), nullable=False),
        sa.Column('sector_id', sa.UUID(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('website', sa.String(255), nullable=True),
        sa.Column('founded_year', sa.Integer(), nullable=True),
        sa.Column('headquarters', sa.String(150), nullable=True),
        sa.Column('employees_count', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('is_featured', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['sector_id'], ['sectors.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug'),
    )

    op.create_table(
        'products',
        _id(),
        sa.Column('company_id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('slug', sa.String(200), nullable=False),
        sa.Column('description', postgresql.JSONB(), nullable=True),
        sa.Column('category', sa.String(50), nullable=False),
        sa.Column('price_per_share', sa.Numeric(12, 2), nullable=False),
        sa.Column('min_investment', sa.Numeric(14, 2), nullable=False),
        sa.Column('max_investment', sa.Numeric(14, 2), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_featured', sa.Boolean(), nullable=False),
        sa.Column('listing_date', sa.Date(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('price_per_share >= 0', name='ck_products_price_non_negative'),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug'),
    )

    op.create_table(
        'product_highlights',
        _id(),
        sa.Column('product_id', sa.UUID(), nullable=False),
        sa.Column('highlight_text', sa.String(255), nullable=False),
        sa.Column('display_order', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('product_id', 'highlight_text'),
    )

    op.create_table(
        'product_founders',
        _id(),
        sa.Column('product_id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(150), nullable=False),
        sa.Column('role', sa.String(100), nullable=False),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('display_order', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('product_id', 'name'),
    )

    op.create_table(
        'product_funding_rounds',
        _id(),
        sa.Column('product_id', sa.UUID(), nullable=False),
        sa.Column('round_type', sa.String(50), nullable=False),
        sa.Column('amount_raised', sa.Numeric(16, 2), nullable=False),
        sa.Column('valuation', sa.Numeric(16, 2), nullable=False),
        sa.Column('funded_at', sa.Date(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('product_id', 'round_type'),
    )

    op.create_table(
        'product_key_metrics',
        _id(),
        sa.Column('product_id', sa.UUID(), nullable=False),
        sa.Column('metric_name', sa.String(100), nullable=False),
        sa.Column('metric_value', sa.String(100), nullable=False),
        sa.Column('display_order', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('product_id', 'metric_name'),
    )

    op.create_table(
        'product_risk_disclosures',
        _id(),
        sa.Column('product_id', sa.UUID(), nullable=False),
        sa.Column('risk_type', sa.String(50), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('severity', sa.String(20), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('product_id', 'risk_type'),
    )

    op.create_table(
        'product_price_history',
        _id(),
        sa.Column('product_id', sa.UUID(), nullable=False),
        sa.Column('price_per_share', sa.Numeric(12, 2), nullable=False),
        sa.Column('effective_date', sa.Date(), nullable=False),
        sa.Column('reason', sa.String(255), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('product_id', 'effective_date'),
    )

    op.create_table(
        'bulk_purchases',
        _id(),
        sa.Column('product_id', sa.UUID(), nullable=False),
        sa.Column('company_id', sa.UUID(), nullable=False),
        sa.Column('admin_id', sa.UUID(), nullable=False),
        sa.Column('total_quantity', sa.Integer(), nullable=False),
        sa.Column('quantity_allocated', sa.Integer(), nullable=False),
        sa.Column('price_per_unit', sa.Numeric(12, 2), nullable=False),
        sa.Column('discount_percentage', sa.Numeric(5, 2), nullable=False),
        sa.Column('actual_cost_paid', sa.Numeric(16, 2), nullable=False),
        sa.Column('total_value_received', sa.Numeric(16, 2), nullable=False),
        sa.Column('value_remaining', sa.Numeric(16, 2), nullable=False),
        sa.Column('purchase_date', sa.Date(), nullable=False),
        sa.Column('source_type', sa.String(50), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('approved_by_admin_id', sa.UUID(), nullable=True),
        sa.Column('approved_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('quantity_allocated <= total_quantity', name='ck_bulk_purchases_quantity'),
        sa.CheckConstraint('value_remaining >= 0', name='ck_bulk_purchases_value_non_negative'),
        sa.ForeignKeyConstraint(['product_id'], ['products.id']),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id']),
        sa.ForeignKeyConstraint(['admin_id'], ['users.id']),
        sa.ForeignKeyConstraint(['approved_by_admin_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('product_id', 'company_id'),
    )

    op.create_table(
        'company_share_listings',
        _id(),
        sa.Column('company_id', sa.UUID(), nullable=False),
        sa.Column('product_id', sa.UUID(), nullable=False),
        sa.Column('share_type', sa.String(20), nullable=False),
        sa.Column('total_shares_available', sa.Integer(), nullable=False),
        sa.Column('shares_allocated', sa.Integer(), nullable=False),
        sa.Column('price_per_share', sa.Numeric(12, 2), nullable=False),
        sa.Column('listing_status', sa.String(20), nullable=False),
        sa.Column('approved_by_admin_id', sa.UUID(), nullable=True),
        sa.Column('approved_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id']),
        sa.ForeignKeyConstraint(['product_id'], ['products.id']),
        sa.ForeignKeyConstraint(['approved_by_admin_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('company_id'),
    )

    op.create_table(
        'disclosure_modules',
        _id(),
        sa.Column('code', sa.String(50), nullable=False),
        sa.Column('name', sa.String(150), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('help_text', sa.Text(), nullable=True),
        sa.Column('is_required', sa.Boolean(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('display_order', sa.Integer(), nullable=False),
        sa.Column('tier', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(20), nullable=False),
        sa.Column('document_type', sa.String(30), nullable=False),
        sa.Column('expected_update_days', sa.Integer(), nullable=True),
        sa.Column('stability_window_days', sa.Integer(), nullable=True),
        sa.Column('max_changes_per_window', sa.Integer(), nullable=True),
        sa.Column('freshness_weight', sa.Numeric(4, 2), nullable=False),
        sa.Column('icon', sa.String(50), nullable=True),
        sa.Column('color', sa.String(20), nullable=True),
        sa.Column('json_schema', postgresql.JSONB(), nullable=False),
        sa.Column('default_data', postgresql.JSONB(), nullable=True),
        sa.Column('sebi_category', sa.String(100), nullable=True),
        sa.Column('regulatory_references', postgresql.JSONB(), nullable=True),
        sa.Column('requires_admin_approval', sa.Boolean(), nullable=False),
        sa.Column('min_approval_reviews', sa.Integer(), nullable=False),
        sa.Column('approval_checklist', postgresql.JSONB(), nullable=True),
        sa.Column('created_by_id', sa.UUID(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['created_by_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('code'),
    )

    # -- plans --------------------------------------------------------------
    op.create_table(
        'plans',
        _id(),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('slug', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('monthly_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('duration_months', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_featured', sa.Boolean(), nullable=False),
        sa.Column('display_order', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug'),
    )

    op.create_table(
        'plan_features',
        _id(),
        sa.Column('plan_id', sa.UUID(), nullable=False),
        sa.Column('feature_text', sa.String(255), nullable=False),
        sa.Column('display_order', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['plan_id'], ['plans.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('plan_id', 'feature_text'),
    )

    op.create_table(
        'plan_configs',
        _id(),
        sa.Column('plan_id', sa.UUID(), nullable=False),
        sa.Column('config_key', sa.String(100), nullable=False),
        sa.Column('value', postgresql.JSONB(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['plan_id'], ['plans.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('plan_id', 'config_key'),
    )

    op.create_table(
        'menus',
        _id(),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('slug', sa.String(100), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug'),
    )

    op.create_table(
        'menu_items',
        _id(),
        sa.Column('menu_id', sa.UUID(), nullable=False),
        sa.Column('label', sa.String(100), nullable=False),
        sa.Column('url', sa.String(255), nullable=False),
        sa.Column('display_order', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['menu_id'], ['menus.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('menu_id', 'label'),
    )

    # -- communication ------------------------------------------------------
    op.create_table(
        'email_templates',
        _id(),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('slug', sa.String(100), nullable=False),
        sa.Column('subject', sa.String(255), nullable=False),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('variables', postgresql.JSONB(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug'),
    )

    op.create_table(
        'sms_templates',
        _id(),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('slug', sa.String(100), nullable=False),
        sa.Column('body', sa.String(320), nullable=False),
        sa.Column('variables', postgresql.JSONB(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug'),
    )

    op.create_table(
        'canned_responses',
        _id(),
        sa.Column('title', sa.String(150), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('title'),
    )

    op.create_table(
        'kb_categories',
        _id(),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('slug', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('icon', sa.String(50), nullable=True),
        sa.Column('display_order', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug'),
    )

    op.create_table(
        'kb_articles',
        _id(),
        sa.Column('kb_category_id', sa.UUID(), nullable=False),
        sa.Column('author_id', sa.UUID(), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('slug', sa.String(255), nullable=False),
        sa.Column('summary', sa.String(255), nullable=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('last_updated', sa.Date(), nullable=True),
        sa.Column('views', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['kb_category_id'], ['kb_categories.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['author_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug'),
    )

    op.create_table(
        'referral_campaigns',
        _id(),
        sa.Column('name', sa.String(150), nullable=False),
        sa.Column('code', sa.String(50), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('bonus_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('min_investment_required', sa.Numeric(12, 2), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('max_redemptions', sa.Integer(), nullable=True),
        sa.Column('current_redemptions', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('code'),
    )

    op.create_table(
        'campaigns',
        _id(),
        sa.Column('name', sa.String(150), nullable=False),
        sa.Column('code', sa.String(50), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('discount_type', sa.String(20), nullable=False),
        sa.Column('discount_value', sa.Numeric(12, 2), nullable=False),
        sa.Column('min_investment', sa.Numeric(12, 2), nullable=False),
        sa.Column('max_discount_amount', sa.Numeric(12, 2), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('max_redemptions', sa.Integer(), nullable=True),
        sa.Column('current_redemptions', sa.Integer(), nullable=False),
        sa.Column('terms', postgresql.JSONB(), nullable=True),
        sa.Column('features', postgresql.JSONB(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('code'),
    )

    op.create_table(
        'lucky_draws',
        _id(),
        sa.Column('name', sa.String(150), nullable=False),
        sa.Column('code', sa.String(50), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('prize_pool', sa.Numeric(12, 2), nullable=False),
        sa.Column('min_investment_required', sa.Numeric(12, 2), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('draw_date', sa.Date(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('prizes', postgresql.JSONB(), nullable=False),
        sa.Column('entry_rules', postgresql.JSONB(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('code'),
    )

    # -- activity -----------------------------------------------------------
    op.create_table(
        'subscriptions',
        _id(),
        sa.Column('subscription_code', sa.String(50), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('plan_id', sa.UUID(), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('next_payment_date', sa.Date(), nullable=True),
        sa.Column('consecutive_payments_count', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['plan_id'], ['plans.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('subscription_code'),
        sa.UniqueConstraint('user_id', 'plan_id'),
    )

    op.create_table(
        'investments',
        _id(),
        sa.Column('subscription_id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('product_id', sa.UUID(), nullable=False),
        sa.Column('company_id', sa.UUID(), nullable=False),
        sa.Column('investment_code', sa.String(50), nullable=False),
        sa.Column('total_amount', sa.Numeric(14, 2), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('invested_at', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['subscription_id'], ['subscriptions.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['product_id'], ['products.id']),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('subscription_id'),
        sa.UniqueConstraint('investment_code'),
    )

    op.create_table(
        'payments',
        _id(),
        sa.Column('subscription_id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('installment_number', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('gateway', sa.String(30), nullable=False),
        sa.Column('gateway_payment_id', sa.String(100), nullable=False),
        sa.Column('paid_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('amount > 0', name='ck_payments_amount_positive'),
        sa.ForeignKeyConstraint(['subscription_id'], ['subscriptions.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('subscription_id', 'installment_number'),
        sa.UniqueConstraint('gateway_payment_id'),
    )

    op.create_table(
        'user_investments',
        _id(),
        sa.Column('payment_id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('product_id', sa.UUID(), nullable=False),
        sa.Column('bulk_purchase_id', sa.UUID(), nullable=False),
        sa.Column('units', sa.Integer(), nullable=False),
        sa.Column('price_per_unit', sa.Numeric(12, 2), nullable=False),
        sa.Column('value_allocated', sa.Numeric(14, 2), nullable=False),
        sa.Column('source', sa.String(30), nullable=False),
        sa.Column('is_reversed', sa.Boolean(), nullable=False),
        sa.Column('allocated_at', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('units > 0', name='ck_user_investments_units_positive'),
        sa.ForeignKeyConstraint(['payment_id'], ['payments.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['product_id'], ['products.id']),
        sa.ForeignKeyConstraint(['bulk_purchase_id'], ['bulk_purchases.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('payment_id'),
    )

    op.create_table(
        'bonus_transactions',
        _id(),
        sa.Column('subscription_id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('bonus_type', sa.String(30), nullable=False),
        sa.Column('base_amount', sa.Numeric(14, 2), nullable=False),
        sa.Column('rate_percentage', sa.Numeric(5, 2), nullable=False),
        sa.Column('gross_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('tds_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('net_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['subscription_id'], ['subscriptions.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('subscription_id', 'bonus_type'),
    )

    op.create_table(
        'referrals',
        _id(),
        sa.Column('referrer_id', sa.UUID(), nullable=False),
        sa.Column('referred_id', sa.UUID(), nullable=False),
        sa.Column('referral_campaign_id', sa.UUID(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('bonus_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['referrer_id'], ['users.id']),
        sa.ForeignKeyConstraint(['referred_id'], ['users.id']),
        sa.ForeignKeyConstraint(['referral_campaign_id'], ['referral_campaigns.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('referrer_id', 'referred_id'),
    )

    op.create_table(
        'withdrawals',
        _id(),
        sa.Column('reference', sa.String(50), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('wallet_id', sa.UUID(), nullable=False),
        sa.Column('amount_paise', sa.BigInteger(), nullable=False),
        sa.Column('fee_paise', sa.BigInteger(), nullable=False),
        sa.Column('net_amount_paise', sa.BigInteger(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('bank_details', postgresql.JSONB(), nullable=True),
        sa.Column('requested_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('processed_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('amount_paise > 0', name='ck_withdrawals_amount_positive'),
        sa.CheckConstraint(
            'net_amount_paise = amount_paise - fee_paise',
            name='ck_withdrawals_net_amount',
        ),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['wallet_id'], ['wallets.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('reference'),
    )


def downgrade() -> None:
    op.drop_table('withdrawals')
    op.drop_table('referrals')
    op.drop_table('bonus_transactions')
    op.drop_table('user_investments')
    op.drop_table('payments')
    op.drop_table('investments')
    op.drop_table('subscriptions')
    op.drop_table('lucky_draws')
    op.drop_table('campaigns')
    op.drop_table('referral_campaigns')
    op.drop_table('kb_articles')
    op.drop_table('kb_categories')
    op.drop_table('canned_responses')
    op.drop_table('sms_templates')
    op.drop_table('email_templates')
    op.drop_table('menu_items')
    op.drop_table('menus')
    op.drop_table('plan_configs')
    op.drop_table('plan_features')
    op.drop_table('plans')
    op.drop_table('disclosure_modules')
    op.drop_table('company_share_listings')
    op.drop_table('bulk_purchases')
    op.drop_table('product_price_history')
    op.drop_table('product_risk_disclosures')
    op.drop_table('product_key_metrics')
    op.drop_table('product_funding_rounds')
    op.drop_table('product_founders')
    op.drop_table('product_highlights')
    op.drop_table('products')
    op.drop_table('companies')
    op.drop_table('admin_ledger_entries')
    op.drop_index('ix_transactions_wallet_id_status', table_name='transactions')
    op.drop_table('transactions')
    op.drop_table('wallets')
    op.drop_table('user_settings')
    op.drop_table('user_kyc')
    op.drop_table('user_profiles')
    op.drop_table('user_roles')
    op.drop_table('users')
    op.drop_table('legal_agreements')
    op.drop_table('kyc_rejection_templates')
    op.drop_table('feature_flags')
    op.drop_table('sectors')
    op.drop_table('role_permissions')
    op.drop_table('roles')
    op.drop_table('permissions')
    op.drop_table('settings')
