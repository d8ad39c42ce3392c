"""create_participants_and_matches

Revision ID: 3a1f0c9d2b7e
Revises:
Create Date: 2025-09-14 18:22:41.513907

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3a1f0c9d2b7e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

move_enum = sa.Enum('rock', 'paper', 'scissors', name='move')
result_enum = sa.Enum('win', 'tie', name='matchresult')


def upgrade() -> None:
    op.create_table(
        'participants',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('eliminated', sa.Boolean(), nullable=False),
        sa.Column('eliminated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_participants_id'), 'participants', ['id'], unique=False)
    op.create_index(op.f('ix_participants_name'), 'participants', ['name'], unique=False)

    op.create_table(
        'matches',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('player1_id', sa.Integer(), nullable=False),
        sa.Column('player1_name', sa.String(), nullable=False),
        sa.Column('player1_choice', move_enum, nullable=False),
        sa.Column('player2_id', sa.Integer(), nullable=False),
        sa.Column('player2_name', sa.String(), nullable=False),
        sa.Column('player2_choice', move_enum, nullable=False),
        sa.Column('result', result_enum, nullable=False),
        sa.Column('winner_id', sa.Integer(), nullable=True),
        sa.Column('winner_name', sa.String(), nullable=True),
        sa.Column('pair_low_id', sa.Integer(), nullable=False),
        sa.Column('pair_high_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['player1_id'], ['participants.id'], ),
        sa.ForeignKeyConstraint(['player2_id'], ['participants.id'], ),
        sa.ForeignKeyConstraint(['winner_id'], ['participants.id'], ),
        sa.CheckConstraint('player1_id <> player2_id', name='check_distinct_players'),
        sa.UniqueConstraint('pair_low_id', 'pair_high_id', name='unique_match_pair'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_matches_id'), 'matches', ['id'], unique=False)
    op.create_index(op.f('ix_matches_player1_id'), 'matches', ['player1_id'], unique=False)
    op.create_index(op.f('ix_matches_player2_id'), 'matches', ['player2_id'], unique=False)
    op.create_index(op.f('ix_matches_created_at'), 'matches', ['created_at'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_matches_created_at'), table_name='matches')
    op.drop_index(op.f('ix_matches_player2_id'), table_name='matches')
    op.drop_index(op.f('ix_matches_player1_id'), table_name='matches')
    op.drop_index(op.f('ix_matches_id'), table_name='matches')
    op.drop_table('matches')
    move_enum.drop(op.get_bind(), checkfirst=True)
    result_enum.drop(op.get_bind(), checkfirst=True)

    op.drop_index(op.f('ix_participants_name'), table_name='participants')
    op.drop_index(op.f('ix_participants_id'), table_name='participants')
    op.drop_table('participants')
