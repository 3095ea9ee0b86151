"""create training tables

Revision ID: 0001
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


assignment_status = sa.Enum('assigned', 'in_progress', 'completed', 'overdue', name='assignmentstatusenum')


def upgrade() -> None:
    op.create_table('training_materials',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('tenant_id', sa.String(length=64), nullable=False),
    sa.Column('title', sa.String(length=255), nullable=False),
    sa.Column('description', sa.String(), nullable=True),
    sa.Column('uri', sa.String(), nullable=False),
    sa.Column('type', sa.String(length=20), nullable=False),
    sa.Column('material_type', sa.String(length=30), nullable=False),
    sa.Column('duration_minutes', sa.Integer(), nullable=True),
    sa.Column('tags', sa.JSON(), nullable=True),
    sa.Column('is_required', sa.Boolean(), nullable=False),
    sa.Column('passing_score', sa.Integer(), nullable=True),
    sa.Column('attempts_limit', sa.Integer(), nullable=True),
    sa.Column('metadata', sa.JSON(), nullable=True),
    sa.Column('created_by', sa.String(length=64), nullable=True),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
    sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_training_materials_tenant_id'), 'training_materials', ['tenant_id'], unique=False)
    op.create_index(op.f('ix_training_materials_title'), 'training_materials', ['title'], unique=False)

    op.create_table('training_courses',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('tenant_id', sa.String(length=64), nullable=False),
    sa.Column('title', sa.String(length=255), nullable=False),
    sa.Column('description', sa.String(), nullable=True),
    sa.Column('is_active', sa.Boolean(), nullable=False),
    sa.Column('created_by', sa.String(length=64), nullable=True),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
    sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_training_courses_tenant_id'), 'training_courses', ['tenant_id'], unique=False)

    op.create_table('training_course_materials',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('course_id', sa.String(length=36), nullable=False),
    sa.Column('material_id', sa.String(length=36), nullable=False),
    sa.Column('order_index', sa.Integer(), nullable=False),
    sa.Column('is_required', sa.Boolean(), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
    sa.ForeignKeyConstraint(['course_id'], ['training_courses.id'], ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['material_id'], ['training_materials.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('course_id', 'material_id', name='uq_course_material')
    )
    op.create_index(op.f('ix_training_course_materials_course_id'), 'training_course_materials', ['course_id'], unique=False)

    op.create_table('training_assignments',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('tenant_id', sa.String(length=64), nullable=False),
    sa.Column('material_id', sa.String(length=36), nullable=True),
    sa.Column('course_id', sa.String(length=36), nullable=True),
    sa.Column('user_id', sa.String(length=64), nullable=False),
    sa.Column('status', assignment_status, nullable=False),
    sa.Column('due_at', sa.DateTime(timezone=True), nullable=True),
    sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
    sa.Column('assigned_by', sa.String(length=64), nullable=True),
    sa.Column('priority', sa.String(length=50), nullable=False),
    sa.Column('progress_percentage', sa.Integer(), nullable=False),
    sa.Column('time_spent_minutes', sa.Integer(), nullable=False),
    sa.Column('last_accessed_at', sa.DateTime(timezone=True), nullable=True),
    sa.Column('reminder_sent_at', sa.DateTime(timezone=True), nullable=True),
    sa.Column('metadata', sa.JSON(), nullable=True),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
    sa.ForeignKeyConstraint(['course_id'], ['training_courses.id'], ),
    sa.ForeignKeyConstraint(['material_id'], ['training_materials.id'], ),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_training_assignments_tenant_id'), 'training_assignments', ['tenant_id'], unique=False)
    op.create_index(op.f('ix_training_assignments_material_id'), 'training_assignments', ['material_id'], unique=False)
    op.create_index(op.f('ix_training_assignments_course_id'), 'training_assignments', ['course_id'], unique=False)
    op.create_index(op.f('ix_training_assignments_user_id'), 'training_assignments', ['user_id'], unique=False)
    op.create_index(op.f('ix_training_assignments_status'), 'training_assignments', ['status'], unique=False)
    op.create_index(op.f('ix_training_assignments_due_at'), 'training_assignments', ['due_at'], unique=False)

    op.create_table('training_role_assignments',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('tenant_id', sa.String(length=64), nullable=False),
    sa.Column('role_id', sa.String(length=64), nullable=False),
    sa.Column('material_id', sa.String(length=36), nullable=True),
    sa.Column('course_id', sa.String(length=36), nullable=True),
    sa.Column('is_required', sa.Boolean(), nullable=False),
    sa.Column('due_days', sa.Integer(), nullable=True),
    sa.Column('assigned_by', sa.String(length=64), nullable=True),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
    sa.ForeignKeyConstraint(['course_id'], ['training_courses.id'], ),
    sa.ForeignKeyConstraint(['material_id'], ['training_materials.id'], ),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_training_role_assignments_tenant_id'), 'training_role_assignments', ['tenant_id'], unique=False)
    op.create_index(op.f('ix_training_role_assignments_role_id'), 'training_role_assignments', ['role_id'], unique=False)

    op.create_table('training_progress',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('assignment_id', sa.String(length=36), nullable=False),
    sa.Column('material_id', sa.String(length=36), nullable=False),
    sa.Column('progress_percentage', sa.Integer(), nullable=False),
    sa.Column('time_spent_minutes', sa.Integer(), nullable=False),
    sa.Column('last_position', sa.Integer(), nullable=True),
    sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
    sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
    sa.ForeignKeyConstraint(['assignment_id'], ['training_assignments.id'], ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['material_id'], ['training_materials.id'], ),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('assignment_id', 'material_id', name='uq_progress_assignment_material')
    )
    op.create_index(op.f('ix_training_progress_assignment_id'), 'training_progress', ['assignment_id'], unique=False)

    op.create_table('training_quiz_questions',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('material_id', sa.String(length=36), nullable=False),
    sa.Column('text', sa.String(), nullable=False),
    sa.Column('options', sa.JSON(), nullable=True),
    sa.Column('correct_index', sa.Integer(), nullable=False),
    sa.Column('question_type', sa.String(length=30), nullable=False),
    sa.Column('points', sa.Integer(), nullable=False),
    sa.Column('explanation', sa.String(), nullable=True),
    sa.Column('order_index', sa.Integer(), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
    sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    sa.ForeignKeyConstraint(['material_id'], ['training_materials.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_training_quiz_questions_material_id'), 'training_quiz_questions', ['material_id'], unique=False)

    op.create_table('training_quiz_attempts',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('user_id', sa.String(length=64), nullable=False),
    sa.Column('material_id', sa.String(length=36), nullable=False),
    sa.Column('assignment_id', sa.String(length=36), nullable=True),
    sa.Column('score', sa.Integer(), nullable=False),
    sa.Column('max_score', sa.Integer(), nullable=True),
    sa.Column('passed', sa.Boolean(), nullable=False),
    sa.Column('answers', sa.JSON(), nullable=True),
    sa.Column('time_spent_minutes', sa.Integer(), nullable=True),
    sa.Column('attempted_at', sa.DateTime(timezone=True), nullable=False),
    sa.ForeignKeyConstraint(['assignment_id'], ['training_assignments.id'], ondelete='SET NULL'),
    sa.ForeignKeyConstraint(['material_id'], ['training_materials.id'], ),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_training_quiz_attempts_user_id'), 'training_quiz_attempts', ['user_id'], unique=False)
    op.create_index(op.f('ix_training_quiz_attempts_material_id'), 'training_quiz_attempts', ['material_id'], unique=False)
    op.create_index(op.f('ix_training_quiz_attempts_assignment_id'), 'training_quiz_attempts', ['assignment_id'], unique=False)

    op.create_table('training_certificates',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('tenant_id', sa.String(length=64), nullable=False),
    sa.Column('assignment_id', sa.String(length=36), nullable=False),
    sa.Column('user_id', sa.String(length=64), nullable=False),
    sa.Column('material_id', sa.String(length=36), nullable=True),
    sa.Column('course_id', sa.String(length=36), nullable=True),
    sa.Column('certificate_number', sa.String(length=32), nullable=False),
    sa.Column('issued_at', sa.DateTime(timezone=True), nullable=False),
    sa.Column('expires_at', sa.DateTime(timezone=True), nullable=True),
    sa.Column('is_valid', sa.Boolean(), nullable=False),
    sa.Column('metadata', sa.JSON(), nullable=True),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
    sa.ForeignKeyConstraint(['assignment_id'], ['training_assignments.id'], ),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_training_certificates_tenant_id'), 'training_certificates', ['tenant_id'], unique=False)
    op.create_index(op.f('ix_training_certificates_assignment_id'), 'training_certificates', ['assignment_id'], unique=False)
    op.create_index(op.f('ix_training_certificates_user_id'), 'training_certificates', ['user_id'], unique=False)
    op.create_index(op.f('ix_training_certificates_certificate_number'), 'training_certificates', ['certificate_number'], unique=True)

    op.create_table('training_notifications',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('tenant_id', sa.String(length=64), nullable=False),
    sa.Column('assignment_id', sa.String(length=36), nullable=False),
    sa.Column('user_id', sa.String(length=64), nullable=False),
    sa.Column('type', sa.String(length=30), nullable=False),
    sa.Column('title', sa.String(length=255), nullable=False),
    sa.Column('message', sa.String(), nullable=False),
    sa.Column('is_read', sa.Boolean(), nullable=False),
    sa.Column('sent_at', sa.DateTime(timezone=True), nullable=False),
    sa.Column('read_at', sa.DateTime(timezone=True), nullable=True),
    sa.ForeignKeyConstraint(['assignment_id'], ['training_assignments.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_training_notifications_tenant_id'), 'training_notifications', ['tenant_id'], unique=False)
    op.create_index(op.f('ix_training_notifications_assignment_id'), 'training_notifications', ['assignment_id'], unique=False)
    op.create_index(op.f('ix_training_notifications_user_id'), 'training_notifications', ['user_id'], unique=False)


def downgrade() -> None:
    op.drop_table('training_notifications')
    op.drop_table('training_certificates')
    op.drop_table('training_quiz_attempts')
    op.drop_table('training_quiz_questions')
    op.drop_table('training_progress')
    op.drop_table('training_role_assignments')
    op.drop_table('training_assignments')
    op.drop_table('training_course_materials')
    op.drop_table('training_courses')
    op.drop_table('training_materials')
    assignment_status.drop(op.get_bind(), checkfirst=True)
