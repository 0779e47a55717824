"""baseline_job_portal

Revision ID: 6b1d0c2e9a41
Revises:
Create Date: 2026-10-19 10:12:44.102318

Creates companies, jobs, users and job_applications if they don't exist yet.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '6b1d0c2e9a41'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def table_exists(table_name: str) -> bool:
    """Check if a table exists in the database."""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def upgrade() -> None:
    if not table_exists('companies'):
        op.create_table('companies',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('password_hash', sa.String(), nullable=False),
            sa.Column('image', sa.String(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_companies_id'), 'companies', ['id'], unique=False)
        op.create_index(op.f('ix_companies_email'), 'companies', ['email'], unique=False)

    if not table_exists('users'):
        op.create_table('users',
            sa.Column('id', sa.String(), nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('image', sa.String(), nullable=False),
            sa.Column('resume', sa.String(), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
        op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=False)

    if not table_exists('jobs'):
        op.create_table('jobs',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('title', sa.String(), nullable=False),
            sa.Column('description', sa.Text(), nullable=False),
            sa.Column('location', sa.String(), nullable=False),
            sa.Column('salary', sa.Integer(), nullable=False),
            sa.Column('level', sa.String(), nullable=False),
            sa.Column('category', sa.String(), nullable=False),
            sa.Column('company_id', sa.Integer(), nullable=False),
            sa.Column('visible', sa.Boolean(), nullable=False),
            sa.Column('date', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_jobs_id'), 'jobs', ['id'], unique=False)
        op.create_index(op.f('ix_jobs_company_id'), 'jobs', ['company_id'], unique=False)
        op.create_index('idx_jobs_company_date', 'jobs', ['company_id', 'date'], unique=False)

    if not table_exists('job_applications'):
        op.create_table('job_applications',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.String(), nullable=False),
            sa.Column('job_id', sa.Integer(), nullable=False),
            sa.Column('company_id', sa.Integer(), nullable=False),
            sa.Column('status', sa.String(), nullable=False),
            sa.Column('date', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
            sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ),
            sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_job_applications_id'), 'job_applications', ['id'], unique=False)
        op.create_index(op.f('ix_job_applications_user_id'), 'job_applications', ['user_id'], unique=False)
        op.create_index(op.f('ix_job_applications_job_id'), 'job_applications', ['job_id'], unique=False)
        op.create_index(op.f('ix_job_applications_company_id'), 'job_applications', ['company_id'], unique=False)
        op.create_index('idx_applications_user_job', 'job_applications', ['user_id', 'job_id'], unique=False)


def downgrade() -> None:
    op.drop_table('job_applications')
    op.drop_table('jobs')
    op.drop_table('users')
    op.drop_table('companies')
