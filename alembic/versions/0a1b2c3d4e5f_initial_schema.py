"""initial_schema

Revision ID: 0a1b2c3d4e5f
Revises:
Create Date: 2026-10-19 10:00:00.000000

초기 스키마 생성: users, tags, posts, post_tags, like_dislikes, solvings,
study_groups, study_tags, user_studies.
Create the initial schema for posts, solvings, and study groups.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0a1b2c3d4e5f'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # users: 사용자 및 포인트 잔액
    # Users with their point balance
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('point', sa.Integer(), server_default=sa.text('0'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # tags: 태그 참조 데이터 (code is unique)
    op.create_table(
        'tags',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('code', sa.String(50), nullable=False, unique=True),
        sa.Column('name', sa.String(100), nullable=False),
    )

    # posts: 문제/정보 게시글 (single-table, post_type discriminator)
    op.create_table(
        'posts',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('post_type', sa.String(20), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('main_text', sa.Text(), nullable=True),
        sa.Column('is_deleted', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('views', sa.Integer(), server_default=sa.text('0'), nullable=False),
        sa.Column('answer', sa.Text(), nullable=True),
        sa.Column('example1', sa.Text(), nullable=True),
        sa.Column('example2', sa.Text(), nullable=True),
        sa.Column('example3', sa.Text(), nullable=True),
        sa.Column('example4', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # 목록 조회용 인덱스: Listing indexes
    op.create_index('ix_posts_type_deleted', 'posts', ['post_type', 'is_deleted'])
    op.create_index('ix_posts_user', 'posts', ['user_id'])

    op.create_table(
        'post_tags',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('post_id', sa.Integer(), sa.ForeignKey('posts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('tag_id', sa.Integer(), sa.ForeignKey('tags.id'), nullable=False),
        sa.UniqueConstraint('post_id', 'tag_id', name='uq_post_tag'),
    )

    # like_dislikes: 사용자당 게시글당 최대 1행
    # At most one reaction per (user, post)
    op.create_table(
        'like_dislikes',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('post_id', sa.Integer(), sa.ForeignKey('posts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('is_like', sa.Boolean(), nullable=False),
        sa.UniqueConstraint('user_id', 'post_id', name='uq_like_dislike_user_post'),
    )

    # solvings: 사용자별 문제 풀이 기록
    op.create_table(
        'solvings',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('problem_id', sa.Integer(), sa.ForeignKey('posts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('is_right', sa.Boolean(), nullable=False),
        sa.Column('first_is_right', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('user_id', 'problem_id', name='uq_solving_user_problem'),
    )
    op.create_index('ix_solvings_problem', 'solvings', ['problem_id'])

    # study_groups: 스터디 그룹 (current_person = 멤버십 행 수)
    op.create_table(
        'study_groups',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('main_text', sa.Text(), nullable=True),
        sa.Column('secret_text', sa.Text(), nullable=True),
        sa.Column('max_person', sa.Integer(), nullable=False),
        sa.Column('current_person', sa.Integer(), server_default=sa.text('0'), nullable=False),
        sa.Column('place', sa.String(255), nullable=True),
        sa.Column('expired_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        'study_tags',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('study_group_id', sa.Integer(), sa.ForeignKey('study_groups.id'), nullable=False),
        sa.Column('tag_id', sa.Integer(), sa.ForeignKey('tags.id'), nullable=False),
        sa.UniqueConstraint('study_group_id', 'tag_id', name='uq_study_tag'),
    )

    # user_studies: 스터디 멤버십
    op.create_table(
        'user_studies',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('study_group_id', sa.Integer(), sa.ForeignKey('study_groups.id'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('user_id', 'study_group_id', name='uq_user_study'),
    )


def downgrade() -> None:
    # 의존 순서의 역순으로 삭제: Drop in reverse dependency order
    op.drop_table('user_studies')
    op.drop_table('study_tags')
    op.drop_table('study_groups')

    op.drop_index('ix_solvings_problem', table_name='solvings')
    op.drop_table('solvings')

    op.drop_table('like_dislikes')
    op.drop_table('post_tags')

    op.drop_index('ix_posts_user', table_name='posts')
    op.drop_index('ix_posts_type_deleted', table_name='posts')
    op.drop_table('posts')

    op.drop_table('tags')
    op.drop_table('users')
