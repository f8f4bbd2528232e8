"""Initial schema.

Revision ID: 001
Revises:
Create Date: 2025-01-01 00:00:00.000000
"""

import sqlalchemy as sa

from alembic import op

revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Users
    op.create_table(
        "users",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("email", sa.String(255), unique=True, nullable=False, index=True),
        sa.Column("name", sa.String(200), nullable=True),
        sa.Column("image", sa.String(1000), nullable=True),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, server_default=sa.func.now()),
    )

    # User Preferences (explicit)
    op.create_table(
        "user_preferences",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column(
            "user_id",
            sa.String(32),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            unique=True,
            nullable=False,
        ),
        sa.Column("cuisine_preferences", sa.JSON, nullable=True),
        sa.Column("price_range_min", sa.Integer, server_default="1"),
        sa.Column("price_range_max", sa.Integer, server_default="4"),
        sa.Column("dietary_restrictions", sa.JSON, nullable=True),
        sa.Column("preferred_neighborhoods", sa.JSON, nullable=True),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, server_default=sa.func.now()),
    )

    # Restaurants
    op.create_table(
        "restaurants",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("name", sa.String(300), nullable=False, index=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("cuisine", sa.String(100), nullable=False, index=True),
        sa.Column("price_range", sa.Integer, nullable=False),
        sa.Column("neighborhood", sa.String(200), nullable=False, index=True),
        sa.Column("address", sa.String(500), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("website", sa.String(1000), nullable=True),
        sa.Column("image_url", sa.String(1000), nullable=True),
        sa.Column("rating", sa.Float, server_default="0"),
        sa.Column("review_count", sa.Integer, server_default="0"),
        sa.Column("features", sa.JSON, nullable=True),
        sa.Column("resy_enabled", sa.Boolean, server_default=sa.false()),
        sa.Column("opentable_enabled", sa.Boolean, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, server_default=sa.func.now()),
        sa.CheckConstraint("price_range BETWEEN 1 AND 4", name="ck_restaurants_price_range"),
    )

    # Availability slots
    op.create_table(
        "availability_slots",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column(
            "restaurant_id",
            sa.String(32),
            sa.ForeignKey("restaurants.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("date", sa.DateTime, nullable=False),
        sa.Column("time", sa.String(5), nullable=False),
        sa.Column("party_size", sa.Integer, nullable=False),
        sa.Column("available", sa.Boolean, server_default=sa.true()),
        sa.Column("platform", sa.String(20), nullable=False),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_slots_lookup", "availability_slots", ["restaurant_id", "date", "time", "party_size"]
    )

    # Bookings
    booking_status = sa.Enum("confirmed", "pending", "cancelled", name="booking_status_enum")
    op.create_table(
        "bookings",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column(
            "user_id",
            sa.String(32),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("restaurant_id", sa.String(32), sa.ForeignKey("restaurants.id"), nullable=False),
        sa.Column("date", sa.DateTime, nullable=False),
        sa.Column("time", sa.String(5), nullable=False),
        sa.Column("party_size", sa.Integer, nullable=False),
        sa.Column("status", booking_status, nullable=False, server_default="confirmed"),
        sa.Column("platform", sa.String(20), nullable=False),
        sa.Column("external_booking_id", sa.String(100), nullable=True),
        sa.Column("special_requests", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, server_default=sa.func.now()),
    )
    op.create_index("ix_bookings_user", "bookings", ["user_id"])
    op.create_index("ix_bookings_restaurant", "bookings", ["restaurant_id"])
    op.create_index("ix_bookings_created_at", "bookings", ["created_at"])

    # Reviews
    op.create_table(
        "reviews",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column(
            "user_id",
            sa.String(32),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "restaurant_id",
            sa.String(32),
            sa.ForeignKey("restaurants.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "booking_id",
            sa.String(32),
            sa.ForeignKey("bookings.id", ondelete="SET NULL"),
            unique=True,
            nullable=True,
        ),
        sa.Column("rating", sa.Integer, nullable=False),
        sa.Column("text", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, server_default=sa.func.now()),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_reviews_rating"),
    )
    op.create_index("ix_reviews_restaurant", "reviews", ["restaurant_id"])


def downgrade() -> None:
    op.drop_index("ix_reviews_restaurant", table_name="reviews")
    op.drop_table("reviews")
    op.drop_index("ix_bookings_created_at", table_name="bookings")
    op.drop_index("ix_bookings_restaurant", table_name="bookings")
    op.drop_index("ix_bookings_user", table_name="bookings")
    op.drop_table("bookings")
    op.execute("DROP TYPE IF EXISTS booking_status_enum")
    op.drop_index("ix_slots_lookup", table_name="availability_slots")
    op.drop_table("availability_slots")
    op.drop_table("restaurants")
    op.drop_table("user_preferences")
    op.drop_table("users")
