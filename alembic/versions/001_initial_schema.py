"""Initial schema - accounts, orders, staff workflow, content and forms.

Revision ID: 001
Revises:
Create Date: 2026-01-19 00:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column(
        "id", postgresql.UUID(), server_default=sa.text("gen_random_uuid()"), nullable=False
    )


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        postgresql.TIMESTAMP(timezone=True),
        server_default=sa.text("NOW()"),
        nullable=False,
    )


def _updated_at() -> sa.Column:
    return sa.Column(
        "updated_at",
        postgresql.TIMESTAMP(timezone=True),
        server_default=sa.text("NOW()"),
        nullable=False,
    )


def upgrade() -> None:
    """Upgrade database schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    # Accounts
    op.create_table(
        "admins",
        _id(),
        sa.Column("email", sa.VARCHAR(length=255), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("role", sa.VARCHAR(length=20), server_default="admin", nullable=False),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint("id", name="pk_admins"),
    )
    op.create_index("ix_admins_email", "admins", ["email"], unique=True)

    op.create_table(
        "staff",
        _id(),
        sa.Column("name", sa.VARCHAR(length=200), nullable=True),
        sa.Column("username", sa.VARCHAR(length=100), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("staff_code", sa.VARCHAR(length=32), nullable=False),
        sa.Column("active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint("id", name="pk_staff"),
    )
    op.create_index("ix_staff_username", "staff", ["username"], unique=True)
    op.create_index("ix_staff_staff_code", "staff", ["staff_code"], unique=True)
    op.create_index("ix_staff_active", "staff", ["active"])

    # Orders
    op.create_table(
        "orders",
        _id(),
        sa.Column("order_number", sa.VARCHAR(length=64), nullable=False),
        sa.Column("customer_name", sa.VARCHAR(length=200), nullable=False),
        sa.Column("customer_phone", sa.VARCHAR(length=20), nullable=False),
        sa.Column("customer_email", sa.VARCHAR(length=255), nullable=True),
        sa.Column("delivery_address", sa.Text(), nullable=True),
        sa.Column("items", sa.Text(), nullable=True),
        sa.Column("total_amount", sa.Numeric(10, 2), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("status", sa.VARCHAR(length=32), server_default="pending", nullable=False),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint("id", name="pk_orders"),
    )
    op.create_index("ix_orders_order_number", "orders", ["order_number"], unique=True)
    op.create_index("ix_orders_status", "orders", ["status"])

    # Staff workflow
    op.create_table(
        "staff_assignments",
        _id(),
        sa.Column("order_number", sa.VARCHAR(length=64), nullable=False),
        sa.Column("order_id", sa.VARCHAR(length=64), nullable=True),
        sa.Column("staff_code", sa.VARCHAR(length=32), nullable=False),
        sa.Column("status", sa.VARCHAR(length=20), server_default="active", nullable=False),
        _created_at(),
        _updated_at(),
        sa.CheckConstraint(
            "status IN ('active', 'completed')", name="ck_staff_assignments_status"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_staff_assignments"),
        sa.UniqueConstraint("order_number", name="uq_staff_assignments_order_number"),
    )
    op.create_index(
        "ix_staff_assignments_staff_status", "staff_assignments", ["staff_code", "status"]
    )

    op.create_table(
        "transfer_requests",
        _id(),
        sa.Column("order_number", sa.VARCHAR(length=64), nullable=False),
        sa.Column("from_staff", sa.VARCHAR(length=32), nullable=False),
        sa.Column("to_staff", sa.VARCHAR(length=32), nullable=False),
        sa.Column("status", sa.VARCHAR(length=20), server_default="pending", nullable=False),
        sa.Column("decided_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        _created_at(),
        _updated_at(),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected')", name="ck_transfer_requests_status"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_transfer_requests"),
    )
    op.create_index("ix_transfer_requests_order_number", "transfer_requests", ["order_number"])
    op.create_index("ix_transfer_requests_from_staff", "transfer_requests", ["from_staff"])
    op.create_index("ix_transfer_requests_to_staff", "transfer_requests", ["to_staff"])
    # At most one pending request per order
    op.create_index(
        "uq_transfer_requests_pending_order",
        "transfer_requests",
        ["order_number"],
        unique=True,
        postgresql_where=sa.text("status = 'pending'"),
    )

    op.create_table(
        "staff_order_actions",
        _id(),
        sa.Column("order_id", sa.VARCHAR(length=64), nullable=True),
        sa.Column("order_number", sa.VARCHAR(length=64), nullable=False),
        sa.Column("prev_status", sa.VARCHAR(length=32), nullable=True),
        sa.Column("new_status", sa.VARCHAR(length=32), nullable=False),
        sa.Column("staff_code", sa.VARCHAR(length=32), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_staff_order_actions"),
    )
    op.create_index(
        "ix_staff_order_actions_order_created",
        "staff_order_actions",
        ["order_number", "created_at"],
    )
    op.create_index("ix_staff_order_actions_staff_code", "staff_order_actions", ["staff_code"])

    # Payments
    op.create_table(
        "payments",
        _id(),
        sa.Column("order_number", sa.VARCHAR(length=64), nullable=False),
        sa.Column("customer_name", sa.VARCHAR(length=200), nullable=True),
        sa.Column("customer_phone", sa.VARCHAR(length=20), nullable=True),
        sa.Column("amount", sa.Numeric(10, 2), nullable=True),
        sa.Column("method", sa.VARCHAR(length=10), server_default="unknown", nullable=False),
        sa.Column("proof_url", sa.Text(), nullable=False),
        sa.Column("status", sa.VARCHAR(length=10), server_default="pending", nullable=False),
        _created_at(),
        _updated_at(),
        sa.CheckConstraint(
            "method IN ('qr', 'upi', 'card', 'unknown')", name="ck_payments_method"
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')", name="ck_payments_status"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_payments"),
    )
    op.create_index("ix_payments_order_number", "payments", ["order_number"])

    # Catalog
    op.create_table(
        "products",
        _id(),
        sa.Column("name", sa.VARCHAR(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=True),
        sa.Column("video_url", sa.Text(), nullable=True),
        sa.Column("whatsapp_number", sa.VARCHAR(length=20), nullable=True),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint("id", name="pk_products"),
    )

    op.create_table(
        "blogs",
        _id(),
        sa.Column("title", sa.VARCHAR(length=300), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("media_type", sa.VARCHAR(length=10), server_default="none", nullable=False),
        sa.Column("media_url", sa.Text(), nullable=True),
        _created_at(),
        _updated_at(),
        sa.CheckConstraint(
            "media_type IN ('none', 'image', 'video')", name="ck_blogs_media_type"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_blogs"),
    )

    op.create_table(
        "reviews",
        _id(),
        sa.Column("name", sa.VARCHAR(length=200), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("text", sa.Text(), nullable=False),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint("id", name="pk_reviews"),
    )

    op.create_table(
        "plans",
        _id(),
        sa.Column("title", sa.VARCHAR(length=200), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("billing_period", sa.VARCHAR(length=20), nullable=False),
        sa.Column("features", sa.JSON(), server_default=sa.text("'[]'"), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("popular", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("display_order", sa.Integer(), server_default=sa.text("0"), nullable=False),
        _created_at(),
        _updated_at(),
        sa.CheckConstraint(
            "billing_period IN ('weekly', 'monthly', 'per_day', 'per_serve', 'per_year')",
            name="ck_plans_billing_period",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_plans"),
    )

    op.create_table(
        "floating_texts",
        _id(),
        sa.Column("text", sa.Text(), nullable=False),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint("id", name="pk_floating_texts"),
    )

    for table_name in ("lucky_farmers", "lucky_subscribers"):
        op.create_table(
            table_name,
            _id(),
            sa.Column("name", sa.VARCHAR(length=200), nullable=False),
            sa.Column("image_url", sa.Text(), nullable=True),
            sa.Column("content", sa.Text(), nullable=True),
            sa.Column("phone", sa.VARCHAR(length=20), nullable=True),
            _created_at(),
            _updated_at(),
            sa.PrimaryKeyConstraint("id", name=f"pk_{table_name}"),
        )

    # Inbound forms
    op.create_table(
        "contacts",
        _id(),
        sa.Column("name", sa.VARCHAR(length=200), nullable=True),
        sa.Column("email", sa.VARCHAR(length=255), nullable=True),
        sa.Column("phone", sa.VARCHAR(length=20), nullable=True),
        sa.Column("message", sa.Text(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_contacts"),
    )

    op.create_table(
        "callbacks",
        _id(),
        sa.Column("name", sa.VARCHAR(length=200), nullable=True),
        sa.Column("phone", sa.VARCHAR(length=20), nullable=True),
        sa.Column("message", sa.Text(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_callbacks"),
    )

    op.create_table(
        "enquiries",
        _id(),
        sa.Column("product_name", sa.VARCHAR(length=200), nullable=True),
        sa.Column("name", sa.VARCHAR(length=200), nullable=True),
        sa.Column("phone", sa.VARCHAR(length=20), nullable=True),
        sa.Column("email", sa.VARCHAR(length=255), nullable=True),
        sa.Column("message", sa.Text(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_enquiries"),
    )

    op.create_table(
        "participants",
        _id(),
        sa.Column("name", sa.VARCHAR(length=200), nullable=False),
        sa.Column("role", sa.VARCHAR(length=20), nullable=False),
        sa.Column("email", sa.VARCHAR(length=255), nullable=False),
        sa.Column("phone", sa.VARCHAR(length=20), nullable=True),
        sa.Column("message", sa.Text(), nullable=True),
        _created_at(),
        sa.CheckConstraint("role IN ('farmer', 'subscriber')", name="ck_participants_role"),
        sa.PrimaryKeyConstraint("id", name="pk_participants"),
    )

    op.create_table(
        "newsletter_subscribers",
        _id(),
        sa.Column("email", sa.VARCHAR(length=255), nullable=False),
        sa.Column("sources", sa.JSON(), server_default=sa.text("'[]'"), nullable=False),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint("id", name="pk_newsletter_subscribers"),
    )
    op.create_index(
        "ix_newsletter_subscribers_email", "newsletter_subscribers", ["email"], unique=True
    )

    # Surveys
    op.create_table(
        "surveys",
        _id(),
        sa.Column("title", sa.VARCHAR(length=300), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("questions", sa.JSON(), server_default=sa.text("'[]'"), nullable=False),
        sa.Column("active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint("id", name="pk_surveys"),
    )
    op.create_index("ix_surveys_active", "surveys", ["active"])

    op.create_table(
        "survey_responses",
        _id(),
        sa.Column("survey_id", postgresql.UUID(), nullable=False),
        sa.Column("answers", sa.JSON(), server_default=sa.text("'[]'"), nullable=False),
        sa.Column("meta", sa.JSON(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(
            ["survey_id"],
            ["surveys.id"],
            name="fk_survey_responses_survey_id_surveys",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_survey_responses"),
    )
    op.create_index("ix_survey_responses_survey_id", "survey_responses", ["survey_id"])


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_table("survey_responses")
    op.drop_table("surveys")
    op.drop_table("newsletter_subscribers")
    op.drop_table("participants")
    op.drop_table("enquiries")
    op.drop_table("callbacks")
    op.drop_table("contacts")
    op.drop_table("lucky_subscribers")
    op.drop_table("lucky_farmers")
    op.drop_table("floating_texts")
    op.drop_table("plans")
    op.drop_table("reviews")
    op.drop_table("blogs")
    op.drop_table("products")
    op.drop_table("payments")
    op.drop_table("staff_order_actions")
    op.drop_table("transfer_requests")
    op.drop_table("staff_assignments")
    op.drop_table("orders")
    op.drop_table("staff")
    op.drop_table("admins")
