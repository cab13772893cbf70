from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from agentscore.models.agent import EnrichedAgent
from agentscore.utils.formatting import format_number, star_breakdown, truncate_text

CARD_DESCRIPTION_LENGTH = 160


class StarRating(BaseModel):
    """Star breakdown for rendering a rating."""
    full: int
    half: int
    empty: int


class AgentCard(BaseModel):
    """Agent with display helpers precomputed."""
    agent: EnrichedAgent
    ads_display: str = Field(..., description="Listing count, e.g. '1.5K'")
    rating_stars: StarRating
    short_description: Optional[str] = None

    @classmethod
    def from_agent(cls, agent: EnrichedAgent) -> "AgentCard":
        full, half, empty = star_breakdown(agent.rating)
        return cls(
            agent=agent,
            ads_display=format_number(agent.ads),
            rating_stars=StarRating(full=full, half=half, empty=empty),
            short_description=(
                truncate_text(agent.description, CARD_DESCRIPTION_LENGTH)
                if agent.description else None
            ),
        )


class AgentListResponse(BaseModel):
    """Response model for the agent list."""
    success: bool = True
    total_results: int
    city: Optional[str] = None
    agents: List[AgentCard]


class AgentDetailResponse(BaseModel):
    success: bool = True
    agent: AgentCard


class CityStats(BaseModel):
    count: int
    total_rating: float
    total_reviews: int
    avg_rating: float


class CityStatsResponse(BaseModel):
    success: bool = True
    cities: Dict[str, CityStats]


class ReviewStats(BaseModel):
    review_count: int
    average_rating: float


class ReviewsResponse(BaseModel):
    success: bool = True
    agent_id: str
    total_reviews: int
    reviews: List[Dict[str, Any]]
