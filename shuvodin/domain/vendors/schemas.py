"""Vendor domain schemas - browse/search and vendor detail responses"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class VendorTypeResponse(BaseModel):
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    icon: Optional[str] = None

    class Config:
        from_attributes = True


class ImageResponse(BaseModel):
    id: int
    objectKey: str
    altText: Optional[str] = None


class PackageResponse(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    price: float


class SocialLink(BaseModel):
    platform: str
    url: str


class VendorSummary(BaseModel):
    id: int
    slug: str
    businessName: str
    vendorType: VendorTypeResponse
    division: str
    district: str
    thana: str
    address: Optional[str] = None
    rating: float
    reviewCount: int = 0
    startingPrice: Optional[float] = None
    coverImage: Optional[ImageResponse] = None
    isFavorited: bool = False


class VendorSearchResponse(BaseModel):
    vendors: list[VendorSummary]
    total: int
    page: int
    pageSize: int
    filterSchema: list[dict]


class VenueServiceResponse(BaseModel):
    id: int
    globalServiceId: int
    name: str
    price: Optional[float] = None
    description: Optional[str] = None


class VenueSpaceResponse(BaseModel):
    id: int
    globalSpaceId: int
    name: str
    price: Optional[float] = None
    description: Optional[str] = None
    sittingCapacity: int
    standingCapacity: int
    parkingCapacity: int


class CatalogItem(BaseModel):
    id: int
    name: str
    description: Optional[str] = None


class VenueDetailsResponse(BaseModel):
    venueType: CatalogItem
    services: list[VenueServiceResponse]
    spaces: list[VenueSpaceResponse]
    amenities: list[CatalogItem]
    eventTypes: list[CatalogItem]


class VendorDetailResponse(VendorSummary):
    description: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    socialLinks: list[SocialLink] = []
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    ownerUsername: str
    gallery: list[ImageResponse] = []
    packages: list[PackageResponse] = []
    venueDetails: Optional[VenueDetailsResponse] = None
    extraDetails: Optional[dict] = None
    isOwner: bool = False
    created_at: Optional[datetime] = None


class LocationSuggestions(BaseModel):
    cities: list[str]
    addresses: list[str]
