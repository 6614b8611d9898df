"""initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "0001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "biomarker_observations",
        sa.Column("id", sa.BIGINT().with_variant(sa.Integer(), "sqlite"), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("biomarker_type", sa.String(length=100), nullable=False),
        sa.Column("value", sa.Float(), nullable=False),
        sa.Column("unit", sa.String(length=50), nullable=False),
        sa.Column("recorded_at", sa.DateTime(), nullable=False),
        sa.Column("source_report_id", sa.String(length=36), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_biomarker_observations"),
    )
    op.create_index("ix_biomarker_observations_user_id", "biomarker_observations", ["user_id"], unique=False)
    op.create_index(
        "ix_biomarker_observations_biomarker_type", "biomarker_observations", ["biomarker_type"], unique=False
    )
    op.create_index("ix_biomarker_observations_recorded_at", "biomarker_observations", ["recorded_at"], unique=False)

    op.create_table(
        "patient_profiles",
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("age", sa.Float(), nullable=True),
        sa.Column("biological_sex", sa.String(length=10), nullable=True),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("height", sa.Float(), nullable=True),
        sa.Column("waist_circumference", sa.Float(), nullable=True),
        sa.Column("smoking_status", sa.String(length=10), nullable=True),
        sa.Column("diabetes_status", sa.Boolean(), nullable=True),
        sa.Column("hypertension_treated", sa.Boolean(), nullable=True),
        sa.Column("family_history_cvd", sa.Boolean(), nullable=True),
        sa.Column("health_score", sa.Integer(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("user_id", name="pk_patient_profiles"),
    )

    op.create_table(
        "risk_assessments",
        sa.Column("id", sa.BIGINT().with_variant(sa.Integer(), "sqlite"), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("assessment_type", sa.String(length=30), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("risk_category", sa.String(length=20), nullable=False),
        sa.Column("percentage_risk", sa.Float(), nullable=True),
        sa.Column("factors", sa.Text(), nullable=False),
        sa.Column("recommendations", sa.Text(), nullable=False),
        sa.Column("interpretation", sa.Text(), nullable=False),
        sa.Column("calculated_at", sa.DateTime(), nullable=False),
        sa.Column("valid_until", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_risk_assessments"),
    )
    op.create_index("ix_risk_assessments_user_id", "risk_assessments", ["user_id"], unique=False)
    op.create_index("ix_risk_assessments_valid_until", "risk_assessments", ["valid_until"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_risk_assessments_valid_until", table_name="risk_assessments")
    op.drop_index("ix_risk_assessments_user_id", table_name="risk_assessments")
    op.drop_table("risk_assessments")
    op.drop_table("patient_profiles")
    op.drop_index("ix_biomarker_observations_recorded_at", table_name="biomarker_observations")
    op.drop_index("ix_biomarker_observations_biomarker_type", table_name="biomarker_observations")
    op.drop_index("ix_biomarker_observations_user_id", table_name="biomarker_observations")
    op.drop_table("biomarker_observations")
