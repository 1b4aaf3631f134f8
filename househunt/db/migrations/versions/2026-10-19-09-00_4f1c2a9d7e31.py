"""initial tables.

Revision ID: 4f1c2a9d7e31
Revises:
Create Date: 2026-10-19 09:00:12.418202

"""
import sqlalchemy as sa
from alembic import op

user_role_enum = sa.Enum("TENANT", "LANDLORD", "ADMIN", name="userrole")
id_type_enum = sa.Enum("PASSPORT", "DRIVER_LICENSE", "NATIONAL_ID", name="idtype")
verification_status_enum = sa.Enum(
    "PENDING", "APPROVED", "REJECTED", name="verificationstatus",
)
house_type_enum = sa.Enum(
    "BEDSITTER", "ONE_BR", "TWO_BR", "THREE_BR", "FOUR_BR_PLUS", name="housetype",
)
house_status_enum = sa.Enum(
    "AVAILABLE", "OCCUPIED", "MAINTENANCE", "DELISTED", name="housestatus",
)
amenity_type_enum = sa.Enum(
    "WIFI",
    "PARKING",
    "WATER_24H",
    "SECURITY",
    "GATE",
    "SHOPPING_NEARBY",
    "SCHOOL_NEARBY",
    "PUBLIC_TRANSPORT",
    "FURNISHED",
    "KITCHEN_EQUIPPED",
    "BALCONY",
    "GARDEN",
    "PET_FRIENDLY",
    "CCTV",
    "BACKUP_POWER",
    name="amenitytype",
)

# revision identifiers, used by Alembic.
revision = "4f1c2a9d7e31"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def _house_child(name: str, *columns: sa.Column) -> None:
    op.create_table(
        name,
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("house_id", sa.Integer(), nullable=False),
        *columns,
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["house_id"],
            ["houses.id"],
            name=op.f(f"fk_{name}_house_id_houses"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f(f"pk_{name}")),
    )
    op.create_index(op.f(f"ix_{name}_house_id"), name, ["house_id"], unique=False)


def _tenant_feedback(name: str, *columns: sa.Column) -> None:
    op.create_table(
        name,
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("house_id", sa.Integer(), nullable=False),
        sa.Column("tenant_id", sa.Integer(), nullable=False),
        *columns,
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["house_id"], ["houses.id"], name=op.f(f"fk_{name}_house_id_houses"),
        ),
        sa.ForeignKeyConstraint(
            ["tenant_id"], ["users.id"], name=op.f(f"fk_{name}_tenant_id_users"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f(f"pk_{name}")),
    )
    op.create_index(op.f(f"ix_{name}_house_id"), name, ["house_id"], unique=False)
    op.create_index(op.f(f"ix_{name}_tenant_id"), name, ["tenant_id"], unique=False)


def upgrade() -> None:
    """Run the upgrade migrations."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=32), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("role", user_role_enum, nullable=False),
        sa.Column("is_verified", sa.Boolean(), nullable=False),
        sa.Column("profile_photo_url", sa.String(length=500), nullable=True),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_users")),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_role"), "users", ["role"], unique=False)

    op.create_table(
        "landlord_profiles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("id_type", id_type_enum, nullable=True),
        sa.Column("id_number", sa.String(length=100), nullable=True),
        sa.Column("id_photo_url", sa.String(length=500), nullable=True),
        sa.Column("verification_status", verification_status_enum, nullable=False),
        sa.Column("verification_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("average_rating", sa.Float(), nullable=False),
        sa.Column("total_reviews", sa.Integer(), nullable=False),
        sa.Column("response_time_hours", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name=op.f("fk_landlord_profiles_user_id_users"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_landlord_profiles")),
    )
    op.create_index(
        op.f("ix_landlord_profiles_user_id"),
        "landlord_profiles",
        ["user_id"],
        unique=True,
    )

    op.create_table(
        "houses",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("landlord_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("house_type", house_type_enum, nullable=False),
        sa.Column("bedrooms", sa.Integer(), nullable=False),
        sa.Column("bathrooms", sa.Integer(), nullable=False),
        sa.Column("sqft", sa.Integer(), nullable=True),
        sa.Column("monthly_rent", sa.Float(), nullable=False),
        sa.Column("deposit", sa.Float(), nullable=False),
        sa.Column("water_charge", sa.Float(), nullable=True),
        sa.Column("electricity_charge", sa.Float(), nullable=True),
        sa.Column("parking_charge", sa.Float(), nullable=True),
        sa.Column("address", sa.String(length=255), nullable=False),
        sa.Column("city", sa.String(length=100), nullable=False),
        sa.Column("estate", sa.String(length=100), nullable=False),
        sa.Column("street", sa.String(length=200), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        sa.Column("availability_date", sa.Date(), nullable=False),
        sa.Column("status", house_status_enum, nullable=False),
        sa.Column("view_count", sa.Integer(), nullable=False),
        sa.Column("favorite_count", sa.Integer(), nullable=False),
        sa.Column("average_rating", sa.Float(), nullable=False),
        sa.Column("total_reviews", sa.Integer(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["landlord_id"],
            ["landlord_profiles.id"],
            name=op.f("fk_houses_landlord_id_landlord_profiles"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_houses")),
    )
    for column in ("landlord_id", "monthly_rent", "city", "estate", "status"):
        op.create_index(op.f(f"ix_houses_{column}"), "houses", [column], unique=False)

    _house_child(
        "house_amenities",
        sa.Column("amenity", amenity_type_enum, nullable=False),
    )
    op.create_unique_constraint(
        op.f("uq_house_amenities_house_id"),
        "house_amenities",
        ["house_id", "amenity"],
    )
    _house_child("house_rules", sa.Column("rule", sa.Text(), nullable=False))
    _house_child(
        "house_photos",
        sa.Column("photo_url", sa.String(length=500), nullable=False),
        sa.Column("caption", sa.String(length=200), nullable=True),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.Column("is_primary", sa.Boolean(), nullable=False),
    )

    _tenant_feedback(
        "reviews",
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("review_text", sa.Text(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )
    _tenant_feedback(
        "comments",
        sa.Column("comment_text", sa.Text(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )
    _tenant_feedback("favorites")
    op.create_unique_constraint(
        op.f("uq_favorites_tenant_id"),
        "favorites",
        ["tenant_id", "house_id"],
    )


def downgrade() -> None:
    """Run the downgrade migrations."""
    for table in (
        "favorites",
        "comments",
        "reviews",
        "house_photos",
        "house_rules",
        "house_amenities",
        "houses",
        "landlord_profiles",
        "users",
    ):
        op.drop_table(table)

    for enum in (
        amenity_type_enum,
        house_status_enum,
        house_type_enum,
        verification_status_enum,
        id_type_enum,
        user_role_enum,
    ):
        enum.drop(op.get_bind(), checkfirst=True)
