"""initial_schema

Revision ID: 4b1e9d2a7c30
Revises:
Create Date: 2026-10-17 09:12:41.318204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b1e9d2a7c30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create profile, agent artifact and reference tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('bio', sa.Text, nullable=False),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False),
    )

    op.create_table(
        'skills',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('category', sa.String(20), nullable=False),
        sa.Column('proficiency', sa.Integer, nullable=False),
        sa.Column('years_of_experience', sa.Float, nullable=False),
        sa.Column('description', sa.Text, nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    )

    op.create_table(
        'experiences',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('company', sa.String(255), nullable=False),
        sa.Column('position', sa.String(255), nullable=False),
        sa.Column('description', sa.Text, nullable=False),
        sa.Column('start_date', sa.Date, nullable=False),
        sa.Column('end_date', sa.Date, nullable=True),
        sa.Column('achievements', sa.JSON, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    )

    op.create_table(
        'education',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('institution', sa.String(255), nullable=False),
        sa.Column('degree', sa.String(255), nullable=False),
        sa.Column('field_of_study', sa.String(255), nullable=False),
        sa.Column('start_date', sa.Date, nullable=False),
        sa.Column('end_date', sa.Date, nullable=True),
        sa.Column('description', sa.Text, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    )

    op.create_table(
        'projects',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text, nullable=False),
        sa.Column('category', sa.String(20), nullable=False),
        sa.Column('completion_date', sa.Date, nullable=True),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    )

    op.create_table(
        'project_skills',
        sa.Column('project_id', sa.String(36), sa.ForeignKey('projects.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('skill_id', sa.String(36), sa.ForeignKey('skills.id', ondelete='CASCADE'), primary_key=True),
    )

    op.create_table(
        'job_alerts',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('job_title', sa.String(255), nullable=False),
        sa.Column('company', sa.String(255), nullable=False),
        sa.Column('location', sa.String(255), nullable=False),
        sa.Column('description', sa.Text, nullable=False),
        sa.Column('requirements', sa.JSON, nullable=False),
        sa.Column('salary', sa.String(100), nullable=True),
        sa.Column('application_url', sa.Text, nullable=True),
        sa.Column('confidence', sa.Float, nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('applied_at', sa.DateTime, nullable=True),
        sa.Column('created_at', sa.DateTime, nullable=False),
    )

    op.create_table(
        'resume_distributions',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column(
            'job_alert_id', sa.String(36), sa.ForeignKey('job_alerts.id', ondelete='SET NULL'), nullable=True
        ),
        sa.Column('company_name', sa.String(255), nullable=False),
        sa.Column('job_title', sa.String(255), nullable=False),
        sa.Column('contact_email', sa.String(255), nullable=False),
        sa.Column('contact_person', sa.String(255), nullable=True),
        sa.Column('cover_letter', sa.Text, nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('sent_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    )

    op.create_table(
        'chat_interactions',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('visitor_name', sa.String(255), nullable=False),
        sa.Column('visitor_email', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    )

    op.create_table(
        'chat_messages',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column(
            'chat_id', sa.String(36), sa.ForeignKey('chat_interactions.id', ondelete='CASCADE'), nullable=False
        ),
        sa.Column('sender', sa.String(20), nullable=False),
        sa.Column('content', sa.Text, nullable=False),
        sa.Column('timestamp', sa.DateTime, nullable=False),
    )

    op.create_table(
        'portfolio_reminders',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text, nullable=False),
        sa.Column('due_date', sa.DateTime, nullable=False),
        sa.Column('priority', sa.String(20), nullable=False),
        sa.Column('category', sa.String(30), nullable=False),
        sa.Column('completed', sa.Boolean, nullable=False),
        sa.Column('notification_sent', sa.Boolean, nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False),
    )

    op.create_table(
        'technology_trends',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('category', sa.String(20), nullable=False),
        sa.Column('popularity_score', sa.Float, nullable=False),
        sa.Column('growth_rate', sa.Float, nullable=False),
        sa.Column('description', sa.Text, nullable=False),
    )


def downgrade() -> None:
    """Drop all application tables."""
    op.drop_table('technology_trends')
    op.drop_table('portfolio_reminders')
    op.drop_table('chat_messages')
    op.drop_table('chat_interactions')
    op.drop_table('resume_distributions')
    op.drop_table('job_alerts')
    op.drop_table('project_skills')
    op.drop_table('projects')
    op.drop_table('education')
    op.drop_table('experiences')
    op.drop_table('skills')
    op.drop_table('users')
