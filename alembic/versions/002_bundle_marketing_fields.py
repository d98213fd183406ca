"""Bundle features and target audience

Revision ID: 002
Revises: 001
Create Date: 2026-02-03

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column("bundles", sa.Column("features", sa.Text(), nullable=True))
    op.add_column("bundles", sa.Column("target_audience", sa.String(500), nullable=True))


def downgrade() -> None:
    op.drop_column("bundles", "target_audience")
    op.drop_column("bundles", "features")
