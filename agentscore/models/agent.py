from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional, Tuple
from enum import Enum


class AgentType(str, Enum):
    """Listing owner type."""
    AGENT = "agent"
    DEVELOPER = "developer"


class Service(str, Enum):
    """Services an agency can offer."""
    SALES = "Sales"
    RENTALS = "Rentals"
    COMMERCIAL = "Commercial"
    PROPERTY_MANAGEMENT = "Property Management"
    INVESTMENT = "Investment"


class EnrichedAgent(BaseModel):
    """Agent record as served to the directory, with rating, services and tags filled in."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    name: str
    type: str = AgentType.AGENT.value
    location: Optional[str] = None
    url: Optional[str] = None
    website: Optional[str] = None
    ads: int = Field(0, ge=0, description="Active listing count")
    rating: float
    review_count: int = Field(..., ge=0)
    email: Optional[str] = None
    phone: Optional[str] = None
    logo_url: Optional[str] = None
    established: Optional[str] = None
    description: Optional[str] = None
    featured_project: Optional[str] = None
    sample_review: Optional[Any] = None
    services: Tuple[str, ...] = (Service.SALES.value,)
    tags: Tuple[str, ...] = ()


# Served when every source fails. Values are literal, not generated.
SAMPLE_AGENTS: List[EnrichedAgent] = [
    EnrichedAgent(
        name="Kalogirou Real Estate",
        url="https://www.bazaraki.com/c/kalogirourealestate/",
        location="Larnaca",
        ads=1491,
        rating=4.8,
        review_count=389,
        services=("Sales", "Rentals"),
        tags=("Expat Friendly",),
    ),
    EnrichedAgent(
        name="CENTURY 21",
        url="https://www.bazaraki.com/c/century21/",
        location="Limassol",
        ads=932,
        rating=4.6,
        review_count=245,
        services=("Sales", "Rentals", "Commercial"),
        tags=("Luxury Properties",),
    ),
    EnrichedAgent(
        name="Cyprus Sothebys International Realty",
        url="https://www.bazaraki.com/c/sothebys/",
        location="Paphos",
        ads=916,
        rating=4.9,
        review_count=156,
        services=("Sales", "Investment"),
        tags=("Luxury Properties", "Expat Friendly"),
    ),
]
