"""Onboarding domain schemas - one request model per wizard step"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...shared.validators import find_duplicates, validate_optional_url, validate_phone

MAX_GALLERY_IMAGES = 30
MAX_DESCRIPTION_LENGTH = 500


class GeneralInfoRequest(BaseModel):
    """Step 1: business identity and location"""

    model_config = ConfigDict(extra="forbid")

    businessName: str = Field(..., min_length=3, max_length=255)
    vendorTypeId: int
    division: str = Field(..., min_length=1)
    district: str = Field(..., min_length=1)
    thana: str = Field(..., min_length=1)
    address: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = Field(None, min_length=10, max_length=MAX_DESCRIPTION_LENGTH)

    @field_validator("businessName")
    @classmethod
    def strip_business_name(cls, v):
        v = v.strip()
        if len(v) < 3:
            raise ValueError("Business name has to be at least 3 characters")
        return v


class GalleryImageInput(BaseModel):
    id: Optional[int] = None
    objectKey: Optional[str] = Field(None, max_length=500)
    altText: Optional[str] = Field(None, max_length=255)


class GalleryRequest(BaseModel):
    """Step 2: the full desired gallery; images left out are deleted"""

    images: list[GalleryImageInput] = Field(default_factory=list, max_length=MAX_GALLERY_IMAGES)


class VenueServiceInput(BaseModel):
    globalServiceId: int
    price: Optional[float] = Field(None, ge=0)
    description: Optional[str] = Field(None, max_length=MAX_DESCRIPTION_LENGTH)


class VenueSpaceInput(BaseModel):
    globalSpaceId: int
    price: Optional[float] = Field(None, ge=0)
    description: Optional[str] = Field(None, max_length=MAX_DESCRIPTION_LENGTH)
    sittingCapacity: Optional[int] = Field(None, ge=0)
    standingCapacity: Optional[int] = Field(None, ge=0)
    parkingCapacity: Optional[int] = Field(None, ge=0)


class VenueAmenityInput(BaseModel):
    globalAmenityId: int


class VenueEventTypeInput(BaseModel):
    globalEventTypeId: int


class VenueDetailsRequest(BaseModel):
    vendorType: Literal["venue"]
    venueTypeId: int
    services: list[VenueServiceInput] = Field(..., min_length=1)
    spaces: list[VenueSpaceInput] = Field(..., min_length=1)
    eventTypes: list[VenueEventTypeInput] = Field(..., min_length=1)
    amenities: Optional[list[VenueAmenityInput]] = None

    @field_validator("services")
    @classmethod
    def unique_services(cls, v):
        if find_duplicates([s.globalServiceId for s in v]):
            raise ValueError("Duplicate services are not allowed.")
        return v

    @field_validator("spaces")
    @classmethod
    def unique_spaces(cls, v):
        if find_duplicates([s.globalSpaceId for s in v]):
            raise ValueError("Duplicate event spaces are not allowed.")
        return v

    @field_validator("eventTypes")
    @classmethod
    def unique_event_types(cls, v):
        if find_duplicates([e.globalEventTypeId for e in v]):
            raise ValueError("Duplicate event types are not allowed.")
        return v

    @field_validator("amenities")
    @classmethod
    def unique_amenities(cls, v):
        if v and find_duplicates([a.globalAmenityId for a in v]):
            raise ValueError("Duplicate amenities are not allowed.")
        return v


class MakeupArtistDetails(BaseModel):
    brands: list[str] = Field(default_factory=list)
    services: list[str] = Field(..., min_length=1)
    dietaryOptions: list[str] = Field(default_factory=list)


class MakeupArtistDetailsRequest(BaseModel):
    vendorType: Literal["makeup-artist"]
    details: MakeupArtistDetails


# Tagged by "vendorType"; the router applies the discriminator on the request body
VendorDetailsRequest = Union[VenueDetailsRequest, MakeupArtistDetailsRequest]


class SocialLinkInput(BaseModel):
    platform: str = Field(..., min_length=1, max_length=50)
    url: str

    @field_validator("url")
    @classmethod
    def check_url(cls, v):
        url = validate_optional_url(v)
        if url is None:
            raise ValueError("Invalid URL")
        return url


class LinksRequest(BaseModel):
    """Step 4: website, phone, socials and map position; empty strings clear a value"""

    website: Optional[str] = None
    phone: Optional[str] = Field(default=None, max_length=30)
    socialLinks: list[SocialLinkInput] = Field(default_factory=list)
    latitude: Optional[Union[float, str]] = None
    longitude: Optional[Union[float, str]] = None

    @field_validator("website")
    @classmethod
    def check_website(cls, v):
        return validate_optional_url(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        return validate_phone(v)

    @field_validator("latitude")
    @classmethod
    def check_latitude(cls, v):
        return _coordinate(v, 90, "Latitude")

    @field_validator("longitude")
    @classmethod
    def check_longitude(cls, v):
        return _coordinate(v, 180, "Longitude")


def _coordinate(value, limit: int, label: str) -> Optional[float]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{label} must be a number") from e
    if not -limit <= number <= limit:
        raise ValueError(f"{label} must be between -{limit} and {limit}")
    return number


class BookingSettingsRequest(BaseModel):
    dailyBookingLimit: int = Field(..., ge=1, le=100)


class PackageCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    price: float = Field(..., ge=0)


class OnboardingStep(BaseModel):
    key: str
    title: str
    path: str
    description: str
    completed: bool


class OnboardingStatusResponse(BaseModel):
    steps: list[OnboardingStep]
    nextStep: Optional[str] = None
    vendorSlug: Optional[str] = None
