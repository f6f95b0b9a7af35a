from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base

BOOKING_PENDING = "pending"
BOOKING_CONFIRMED = "confirmed"
BOOKING_DECLINED = "declined"
BOOKING_CANCELLED = "cancelled"
BOOKING_STATUSES = (BOOKING_PENDING, BOOKING_CONFIRMED, BOOKING_DECLINED, BOOKING_CANCELLED)

# Verification types used by the two-factor flow
TWO_FA_VERIFY_TYPE = "2fa-verify"
TWO_FA_TYPE = "2fa"


user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)

favorites = Table(
    "favorites",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("vendor_id", Integer, ForeignKey("vendors.id", ondelete="CASCADE"), primary_key=True),
    Column("created_at", DateTime, server_default=func.now()),
)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    username = Column(String(40), unique=True, index=True, nullable=False)  # always lowercase
    name = Column(String(100), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    password = relationship(
        "Password", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    image = relationship("UserImage", back_populates="user", uselist=False, cascade="all, delete-orphan")
    roles = relationship("Role", secondary=user_roles, back_populates="users")
    sessions = relationship("UserSession", back_populates="user", cascade="all, delete-orphan")
    passkeys = relationship("Passkey", back_populates="user", cascade="all, delete-orphan")
    vendor = relationship("Vendor", back_populates="owner", uselist=False)
    bookings = relationship("Booking", back_populates="user", cascade="all, delete-orphan")
    reviews = relationship("Review", back_populates="user", cascade="all, delete-orphan")
    favorite_vendors = relationship("Vendor", secondary=favorites, back_populates="favorited_by")

    def has_role(self, name: str) -> bool:
        return any(role.name == name for role in self.roles)


class Password(Base):
    __tablename__ = "passwords"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    hash = Column(String(255), nullable=False)

    user = relationship("User", back_populates="password")


class Role(Base):
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), unique=True, nullable=False)  # user, vendor, admin
    description = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    users = relationship("User", secondary=user_roles, back_populates="roles")


class UserSession(Base):
    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True, index=True)
    token = Column(String(128), unique=True, index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    expires_at = Column(DateTime, nullable=False)
    verified_at = Column(DateTime, nullable=True)  # last password/2FA confirmation
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="sessions")


class Verification(Base):
    __tablename__ = "verifications"
    __table_args__ = (UniqueConstraint("target", "type", name="uq_verification_target_type"),)

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String(50), nullable=False)  # 2fa-verify, 2fa
    target = Column(String(255), nullable=False)  # user id as string
    secret = Column(String(255), nullable=False)
    algorithm = Column(String(20), nullable=False, default="SHA1")
    digits = Column(Integer, nullable=False, default=6)
    period = Column(Integer, nullable=False, default=30)
    char_set = Column(String(64), nullable=False, default="ABCDEFGHIJKLMNOPQRSTUVWXYZ234567")
    backup_codes = Column(JSON, default=list, nullable=True)  # Fernet-encrypted
    expires_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class Passkey(Base):
    __tablename__ = "passkeys"

    id = Column(String(255), primary_key=True)  # credential id
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    aaguid = Column(String(64), nullable=True)
    public_key = Column(Text, nullable=False)
    webauthn_user_id = Column(String(255), nullable=False)
    counter = Column(Integer, default=0, nullable=False)
    device_type = Column(String(32), nullable=False)  # singleDevice, multiDevice
    backed_up = Column(Boolean, default=False, nullable=False)
    transports = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="passkeys")


class UserImage(Base):
    __tablename__ = "user_images"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    object_key = Column(String(500), nullable=False)
    alt_text = Column(String(255), nullable=True)

    user = relationship("User", back_populates="image")


class VendorType(Base):
    __tablename__ = "vendor_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    slug = Column(String(100), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)
    icon = Column(String(100), nullable=True)

    vendors = relationship("Vendor", back_populates="vendor_type")


class Vendor(Base):
    __tablename__ = "vendors"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    business_name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)
    vendor_type_id = Column(Integer, ForeignKey("vendor_types.id"), nullable=False, index=True)

    # Location (Bangladesh administrative hierarchy)
    division = Column(String(100), nullable=False)
    district = Column(String(100), nullable=False, index=True)
    thana = Column(String(100), nullable=False)
    address = Column(String(500), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    phone = Column(String(50), nullable=True)
    website = Column(String(500), nullable=True)
    social_links = Column(JSON, default=list, nullable=True)  # [{"platform": ..., "url": ...}]

    rating = Column(Float, default=0, nullable=False)  # average review rating
    daily_booking_limit = Column(Integer, default=1, nullable=False)
    extra_details = Column(JSON, nullable=True)  # type-specific details for non-venue vendors

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    owner = relationship("User", back_populates="vendor")
    vendor_type = relationship("VendorType", back_populates="vendors")
    gallery = relationship(
        "VendorImage",
        back_populates="vendor",
        cascade="all, delete-orphan",
        order_by="VendorImage.id",
    )
    packages = relationship(
        "Package", back_populates="vendor", cascade="all, delete-orphan", order_by="Package.price"
    )
    bookings = relationship("Booking", back_populates="vendor", cascade="all, delete-orphan")
    reviews = relationship("Review", back_populates="vendor", cascade="all, delete-orphan")
    venue_details = relationship(
        "VenueDetails", back_populates="vendor", uselist=False, cascade="all, delete-orphan"
    )
    favorited_by = relationship("User", secondary=favorites, back_populates="favorite_vendors")


class VendorImage(Base):
    __tablename__ = "vendor_images"

    id = Column(Integer, primary_key=True, index=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False, index=True)
    object_key = Column(String(500), nullable=False)
    alt_text = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    vendor = relationship("Vendor", back_populates="gallery")


class Package(Base):
    __tablename__ = "packages"

    id = Column(Integer, primary_key=True, index=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())

    vendor = relationship("Vendor", back_populates="packages")


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False, index=True)
    package_id = Column(Integer, ForeignKey("packages.id", ondelete="SET NULL"), nullable=True)
    date = Column(Date, nullable=False, index=True)
    status = Column(String(20), nullable=False, default=BOOKING_PENDING, index=True)
    total_price = Column(Float, nullable=False, default=0)
    message = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="bookings")
    vendor = relationship("Vendor", back_populates="bookings")
    package = relationship("Package")


class Review(Base):
    __tablename__ = "reviews"
    __table_args__ = (UniqueConstraint("user_id", "vendor_id", name="uq_review_user_vendor"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)  # 1-5
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="reviews")
    vendor = relationship("Vendor", back_populates="reviews")


# ==================== Venue catalog ====================


class VenueType(Base):
    __tablename__ = "venue_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)


class GlobalVenueService(Base):
    __tablename__ = "global_venue_services"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text, nullable=True)


class GlobalVenueSpace(Base):
    __tablename__ = "global_venue_spaces"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)


class GlobalVenueAmenity(Base):
    __tablename__ = "global_venue_amenities"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)


class GlobalVenueEventType(Base):
    __tablename__ = "global_venue_event_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)


class VenueDetails(Base):
    __tablename__ = "venue_details"

    id = Column(Integer, primary_key=True, index=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id", ondelete="CASCADE"), unique=True, nullable=False)
    venue_type_id = Column(Integer, ForeignKey("venue_types.id"), nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    vendor = relationship("Vendor", back_populates="venue_details")
    venue_type = relationship("VenueType")
    services = relationship("VenueService", back_populates="venue_details", cascade="all, delete-orphan")
    spaces = relationship("VenueSpace", back_populates="venue_details", cascade="all, delete-orphan")
    amenities = relationship("VenueAmenity", back_populates="venue_details", cascade="all, delete-orphan")
    event_types = relationship(
        "VenueEventType", back_populates="venue_details", cascade="all, delete-orphan"
    )


class VenueService(Base):
    __tablename__ = "venue_services"

    id = Column(Integer, primary_key=True, index=True)
    venue_details_id = Column(
        Integer, ForeignKey("venue_details.id", ondelete="CASCADE"), nullable=False, index=True
    )
    global_service_id = Column(Integer, ForeignKey("global_venue_services.id"), nullable=False)
    price = Column(Float, nullable=True)
    description = Column(Text, nullable=True)

    venue_details = relationship("VenueDetails", back_populates="services")
    global_service = relationship("GlobalVenueService")


class VenueSpace(Base):
    __tablename__ = "venue_spaces"

    id = Column(Integer, primary_key=True, index=True)
    venue_details_id = Column(
        Integer, ForeignKey("venue_details.id", ondelete="CASCADE"), nullable=False, index=True
    )
    global_space_id = Column(Integer, ForeignKey("global_venue_spaces.id"), nullable=False)
    price = Column(Float, nullable=True)
    description = Column(Text, nullable=True)
    sitting_capacity = Column(Integer, default=0, nullable=False)
    standing_capacity = Column(Integer, default=0, nullable=False)
    parking_capacity = Column(Integer, default=0, nullable=False)

    venue_details = relationship("VenueDetails", back_populates="spaces")
    global_space = relationship("GlobalVenueSpace")


class VenueAmenity(Base):
    __tablename__ = "venue_amenities"

    id = Column(Integer, primary_key=True, index=True)
    venue_details_id = Column(
        Integer, ForeignKey("venue_details.id", ondelete="CASCADE"), nullable=False, index=True
    )
    global_amenity_id = Column(Integer, ForeignKey("global_venue_amenities.id"), nullable=False)

    venue_details = relationship("VenueDetails", back_populates="amenities")
    global_amenity = relationship("GlobalVenueAmenity")


class VenueEventType(Base):
    __tablename__ = "venue_event_types"

    id = Column(Integer, primary_key=True, index=True)
    venue_details_id = Column(
        Integer, ForeignKey("venue_details.id", ondelete="CASCADE"), nullable=False, index=True
    )
    global_event_type_id = Column(Integer, ForeignKey("global_venue_event_types.id"), nullable=False)

    venue_details = relationship("VenueDetails", back_populates="event_types")
    global_event_type = relationship("GlobalVenueEventType")
