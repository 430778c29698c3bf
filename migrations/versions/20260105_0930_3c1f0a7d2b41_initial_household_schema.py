"""initial household schema

Revision ID: 3c1f0a7d2b41
Revises:
Create Date: 2026-01-05 09:30:12.418203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3c1f0a7d2b41'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
    ]


def upgrade():
    # Lookup tables
    op.create_table(
        'fee_types',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_system', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='50'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )
    op.create_table(
        'activity_types',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('icon', sa.String(length=50), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_system', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='50'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )
    op.create_table(
        'frequencies',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('per_year_multiplier', sa.Numeric(6, 2), nullable=True),
        sa.Column('is_system', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='50'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )

    # Family
    op.create_table(
        'family_members',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('member_type', sa.String(length=16), nullable=False),
        sa.Column('relationship', sa.String(length=32), nullable=True),
        sa.Column('gender', sa.String(length=32), nullable=True),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.Column('medicare_number', sa.String(length=32), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('is_primary', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('avatar_url', sa.String(length=512), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint("member_type IN ('adult','child')", name='ck_family_members_member_type')
    )
    op.create_index('ix_family_members_type_name', 'family_members', ['member_type', 'name'])

    # Schools, years and terms
    op.create_table(
        'schools',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('school_type', sa.String(length=16), nullable=True),
        sa.Column('sector', sa.String(length=16), nullable=True),
        sa.Column('address', sa.String(length=256), nullable=True),
        sa.Column('suburb', sa.String(length=64), nullable=True),
        sa.Column('state', sa.String(length=3), nullable=False, server_default='QLD'),
        sa.Column('postcode', sa.String(length=8), nullable=True),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('website', sa.String(length=255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint("state IN ('QLD','NSW','VIC','SA','WA','TAS','NT','ACT')", name='ck_schools_state')
    )
    op.create_table(
        'school_years',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('school_id', sa.Uuid(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('year_start', sa.Date(), nullable=True),
        sa.Column('year_end', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['school_id'], ['schools.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('school_id', 'year', name='uix_school_year')
    )
    op.create_index('ix_school_years_school_id', 'school_years', ['school_id'])
    op.create_table(
        'school_terms',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('school_year_id', sa.Uuid(), nullable=False),
        sa.Column('term_type', sa.String(length=16), nullable=False, server_default='term'),
        sa.Column('term_number', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=64), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('fees_due_date', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['school_year_id'], ['school_years.id'], ondelete='CASCADE'),
        sa.CheckConstraint("term_type IN ('term','semester','trimester','quarter')", name='ck_school_terms_term_type'),
        sa.CheckConstraint('end_date >= start_date', name='ck_school_terms_dates'),
        sa.UniqueConstraint('school_year_id', 'term_number', name='uix_school_term_number')
    )
    op.create_index('ix_school_terms_school_year_id', 'school_terms', ['school_year_id'])
    op.create_index('ix_school_terms_dates', 'school_terms', ['start_date', 'end_date'])

    # Enrolments and fees
    op.create_table(
        'school_enrolments',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('family_member_id', sa.Uuid(), nullable=False),
        sa.Column('school_id', sa.Uuid(), nullable=False),
        sa.Column('year_level', sa.String(length=16), nullable=True),
        sa.Column('enrolment_date', sa.Date(), nullable=True),
        sa.Column('expected_graduation', sa.Date(), nullable=True),
        sa.Column('student_id', sa.String(length=64), nullable=True),
        sa.Column('house', sa.String(length=64), nullable=True),
        sa.Column('is_current', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['family_member_id'], ['family_members.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['school_id'], ['schools.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('family_member_id', 'school_id', name='uix_enrolment_member_school')
    )
    op.create_index('ix_school_enrolments_family_member_id', 'school_enrolments', ['family_member_id'])
    op.create_index('ix_school_enrolments_school_id', 'school_enrolments', ['school_id'])
    op.create_table(
        'school_fees',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('enrolment_id', sa.Uuid(), nullable=False),
        sa.Column('fee_type_id', sa.Uuid(), nullable=True),
        sa.Column('frequency_id', sa.Uuid(), nullable=True),
        sa.Column('school_term_id', sa.Uuid(), nullable=True),
        sa.Column('description', sa.String(length=255), nullable=False),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('is_paid', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('paid_date', sa.Date(), nullable=True),
        sa.Column('paid_amount', sa.Numeric(10, 2), nullable=True),
        sa.Column('payment_method', sa.String(length=16), nullable=True),
        sa.Column('invoice_number', sa.String(length=64), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['enrolment_id'], ['school_enrolments.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['fee_type_id'], ['fee_types.id']),
        sa.ForeignKeyConstraint(['frequency_id'], ['frequencies.id']),
        sa.ForeignKeyConstraint(['school_term_id'], ['school_terms.id'], ondelete='SET NULL'),
        sa.CheckConstraint('amount > 0', name='ck_school_fees_amount_positive'),
        sa.CheckConstraint(
            "payment_method IS NULL OR payment_method IN ('bank_transfer','bpay','credit_card','direct_debit','cash','other')",
            name='ck_school_fees_payment_method'
        )
    )
    op.create_index('ix_school_fees_enrolment_id', 'school_fees', ['enrolment_id'])
    op.create_index('ix_school_fees_year_due', 'school_fees', ['year', 'due_date'])
    op.create_index('ix_school_fees_unpaid_due', 'school_fees', ['is_paid', 'due_date'])

    # Extracurricular activities
    op.create_table(
        'extracurriculars',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('family_member_id', sa.Uuid(), nullable=False),
        sa.Column('activity_type_id', sa.Uuid(), nullable=True),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('provider', sa.String(length=128), nullable=True),
        sa.Column('venue', sa.String(length=255), nullable=True),
        sa.Column('day_of_week', sa.JSON(), nullable=True),
        sa.Column('time_start', sa.Time(), nullable=True),
        sa.Column('time_end', sa.Time(), nullable=True),
        sa.Column('season_start', sa.Date(), nullable=True),
        sa.Column('season_end', sa.Date(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('cost_amount', sa.Numeric(10, 2), nullable=True),
        sa.Column('cost_frequency_id', sa.Uuid(), nullable=True),
        sa.Column('registration_fee', sa.Numeric(10, 2), nullable=True),
        sa.Column('equipment_cost', sa.Numeric(10, 2), nullable=True),
        sa.Column('uniform_cost', sa.Numeric(10, 2), nullable=True),
        sa.Column('other_costs', sa.Numeric(10, 2), nullable=True),
        sa.Column('other_costs_description', sa.String(length=255), nullable=True),
        sa.Column('contact_name', sa.String(length=128), nullable=True),
        sa.Column('contact_phone', sa.String(length=32), nullable=True),
        sa.Column('contact_email', sa.String(length=255), nullable=True),
        sa.Column('website', sa.String(length=255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['family_member_id'], ['family_members.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['activity_type_id'], ['activity_types.id']),
        sa.ForeignKeyConstraint(['cost_frequency_id'], ['frequencies.id'])
    )
    op.create_index('ix_extracurriculars_family_member_id', 'extracurriculars', ['family_member_id'])
    op.create_index('ix_extracurriculars_member_active', 'extracurriculars', ['family_member_id', 'is_active'])

    # Documents
    op.create_table(
        'documents',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('original_filename', sa.String(length=255), nullable=True),
        sa.Column('storage_path', sa.String(length=512), nullable=True),
        sa.Column('file_type', sa.String(length=128), nullable=True),
        sa.Column('file_size', sa.BigInteger(), nullable=True),
        sa.Column('entity_type', sa.String(length=16), nullable=False, server_default='personal'),
        sa.Column('document_type', sa.String(length=32), nullable=False, server_default='other'),
        sa.Column('financial_year', sa.String(length=7), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint("entity_type IN ('personal','smsf','trust')", name='ck_documents_entity_type')
    )
    op.create_index('ix_documents_entity_fy', 'documents', ['entity_type', 'financial_year'])
    op.create_table(
        'member_documents',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('family_member_id', sa.Uuid(), nullable=False),
        sa.Column('document_id', sa.Uuid(), nullable=False),
        sa.Column('document_category', sa.String(length=32), nullable=False, server_default='other'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['family_member_id'], ['family_members.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['document_id'], ['documents.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('family_member_id', 'document_id', name='uix_member_document')
    )
    op.create_index('ix_member_documents_family_member_id', 'member_documents', ['family_member_id'])
    op.create_index('ix_member_documents_document_id', 'member_documents', ['document_id'])

    # Tax tracker
    op.create_table(
        'income',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('person', sa.String(length=32), nullable=False),
        sa.Column('source', sa.String(length=255), nullable=False),
        sa.Column('income_type', sa.String(length=32), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('financial_year', sa.String(length=7), nullable=False),
        sa.Column('franking_credits', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('tax_withheld', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('is_taxable', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('amount > 0', name='ck_income_amount_positive'),
        sa.CheckConstraint('franking_credits >= 0', name='ck_income_franking_non_negative'),
        sa.CheckConstraint('tax_withheld >= 0', name='ck_income_withheld_non_negative')
    )
    op.create_index('ix_income_fy_person', 'income', ['financial_year', 'person'])
    op.create_table(
        'deductions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('person', sa.String(length=32), nullable=False),
        sa.Column('category', sa.String(length=32), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('financial_year', sa.String(length=7), nullable=False),
        sa.Column('is_approved', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('receipt_url', sa.String(length=512), nullable=True),
        sa.Column('calculation_method', sa.String(length=32), nullable=True),
        sa.Column('calculation_details', sa.JSON(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('amount > 0', name='ck_deductions_amount_positive')
    )
    op.create_index('ix_deductions_fy_person', 'deductions', ['financial_year', 'person'])
    op.create_table(
        'super_contributions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('person', sa.String(length=32), nullable=False),
        sa.Column('contribution_type', sa.String(length=32), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('financial_year', sa.String(length=7), nullable=False),
        sa.Column('fund_name', sa.String(length=128), nullable=True),
        sa.Column('fund_abn', sa.String(length=14), nullable=True),
        sa.Column('employer_name', sa.String(length=128), nullable=True),
        sa.Column('is_concessional', sa.Boolean(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('amount > 0', name='ck_super_contributions_amount_positive')
    )
    op.create_index('ix_super_contributions_fy_person', 'super_contributions', ['financial_year', 'person'])
    op.create_table(
        'super_accounts',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('person', sa.String(length=32), nullable=False),
        sa.Column('fund_name', sa.String(length=128), nullable=False),
        sa.Column('member_number', sa.String(length=64), nullable=True),
        sa.Column('balance', sa.Numeric(14, 2), nullable=False, server_default='0'),
        sa.Column('balance_date', sa.Date(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('balance >= 0', name='ck_super_accounts_balance_non_negative'),
        sa.UniqueConstraint('person', 'fund_name', name='uix_super_account_person_fund')
    )


def downgrade():
    op.drop_table('super_accounts')
    op.drop_index('ix_super_contributions_fy_person', table_name='super_contributions')
    op.drop_table('super_contributions')
    op.drop_index('ix_deductions_fy_person', table_name='deductions')
    op.drop_table('deductions')
    op.drop_index('ix_income_fy_person', table_name='income')
    op.drop_table('income')
    op.drop_index('ix_member_documents_document_id', table_name='member_documents')
    op.drop_index('ix_member_documents_family_member_id', table_name='member_documents')
    op.drop_table('member_documents')
    op.drop_index('ix_documents_entity_fy', table_name='documents')
    op.drop_table('documents')
    op.drop_index('ix_extracurriculars_member_active', table_name='extracurriculars')
    op.drop_index('ix_extracurriculars_family_member_id', table_name='extracurriculars')
    op.drop_table('extracurriculars')
    op.drop_index('ix_school_fees_unpaid_due', table_name='school_fees')
    op.drop_index('ix_school_fees_year_due', table_name='school_fees')
    op.drop_index('ix_school_fees_enrolment_id', table_name='school_fees')
    op.drop_table('school_fees')
    op.drop_index('ix_school_enrolments_school_id', table_name='school_enrolments')
    op.drop_index('ix_school_enrolments_family_member_id', table_name='school_enrolments')
    op.drop_table('school_enrolments')
    op.drop_index('ix_school_terms_dates', table_name='school_terms')
    op.drop_index('ix_school_terms_school_year_id', table_name='school_terms')
    op.drop_table('school_terms')
    op.drop_index('ix_school_years_school_id', table_name='school_years')
    op.drop_table('school_years')
    op.drop_table('schools')
    op.drop_index('ix_family_members_type_name', table_name='family_members')
    op.drop_table('family_members')
    op.drop_table('frequencies')
    op.drop_table('activity_types')
    op.drop_table('fee_types')
