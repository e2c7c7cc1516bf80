"""Initial payroll schema - organizations, users, companies, employees, payroll

Revision ID: 20261019_0900_initial_payroll_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

Tables:
- organizations / users: tenants and login accounts
- companies: PF/ESI registration flags
- employees: employee master with stored validation error
- payroll_months / payroll_entries: monthly attendance and wages
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '20261019_0900_initial_payroll_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # =====================================================
    # TENANTS AND ACCOUNTS
    # =====================================================
    op.create_table(
        'organizations',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_organizations_username', 'organizations', ['username'])

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('role', sa.Enum('Admin', 'Organization', 'User', name='userrole'), nullable=False),
        sa.Column('organization_id', sa.Integer(), sa.ForeignKey('organizations.id', ondelete='SET NULL'), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_users_username', 'users', ['username'])
    op.create_index('ix_users_organization_id', 'users', ['organization_id'])

    # =====================================================
    # COMPANIES AND EMPLOYEE MASTER
    # =====================================================
    op.create_table(
        'companies',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('pf_enabled', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('esi_enabled', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('organization_id', sa.Integer(), sa.ForeignKey('organizations.id', ondelete='SET NULL'), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_index('ix_companies_organization_id', 'companies', ['organization_id'])

    op.create_table(
        'employees',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('joining_date', sa.Date(), nullable=True),
        sa.Column('leaving_date', sa.Date(), nullable=True),
        sa.Column('pf_number', sa.String(50), nullable=False, server_default=''),
        sa.Column('esi_number', sa.String(50), nullable=False, server_default=''),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('error', sa.String(255), nullable=True),
    )
    op.create_index('ix_employees_company_id', 'employees', ['company_id'])

    # =====================================================
    # PAYROLL
    # =====================================================
    op.create_table(
        'payroll_months',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id', ondelete='CASCADE'), nullable=False),
        sa.Column('month', sa.String(50), nullable=False),
        sa.Column('total_days', sa.Integer(), nullable=False, server_default='30'),
    )
    op.create_index('ix_payroll_months_company_id', 'payroll_months', ['company_id'])

    op.create_table(
        'payroll_entries',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('employee_id', sa.Integer(), sa.ForeignKey('employees.id', ondelete='CASCADE'), nullable=False),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id', ondelete='CASCADE'), nullable=False),
        sa.Column('payroll_month_id', sa.Integer(), sa.ForeignKey('payroll_months.id', ondelete='CASCADE'), nullable=False),
        sa.Column('working_days', sa.Numeric(precision=6, scale=2), nullable=False, server_default='0'),
        sa.Column('basic_da', sa.Numeric(precision=18, scale=2), nullable=False, server_default='0'),
        sa.Column('gross_salary', sa.Numeric(precision=18, scale=2), nullable=False, server_default='0'),
        sa.Column('ncp', sa.Numeric(precision=6, scale=2), nullable=False, server_default='0'),
        sa.Column('reason', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_index('ix_payroll_entries_employee_id', 'payroll_entries', ['employee_id'])
    op.create_index('ix_payroll_entries_company_id', 'payroll_entries', ['company_id'])
    op.create_index('ix_payroll_entries_payroll_month_id', 'payroll_entries', ['payroll_month_id'])


def downgrade() -> None:
    op.drop_table('payroll_entries')
    op.drop_table('payroll_months')
    op.drop_table('employees')
    op.drop_table('companies')
    op.drop_table('users')
    op.drop_table('organizations')
    sa.Enum(name='userrole').drop(op.get_bind(), checkfirst=True)
