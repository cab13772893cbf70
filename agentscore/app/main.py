from functools import lru_cache
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query, status
from fastapi.middleware.cors import CORSMiddleware
import logging

from agentscore.app.models import (
    AgentCard,
    AgentDetailResponse,
    AgentListResponse,
    CityStatsResponse,
    ReviewsResponse,
    ReviewStats,
)
from agentscore.config.settings import settings
from agentscore.loader import AgentLoader
from agentscore.utils.stats import city_statistics

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.project_name,
    version="1.0.0",
    description="Real Estate Agent Directory API",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache()
def get_agent_loader() -> AgentLoader:
    """One loader, and so one agent cache, for the life of the process."""
    return AgentLoader.from_settings(settings)


def get_database():
    """Database client, or 503 when Supabase is not configured."""
    if not settings.supabase_configured:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Supabase is not configured"
        )
    from agentscore.utils.database import DatabaseClient
    return DatabaseClient(timeout=settings.request_timeout)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "AgentScore API",
        "version": "1.0.0",
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "agentscore"
    }


@app.get(f"{settings.api_v1_prefix}/agents", response_model=AgentListResponse)
def list_agents(city: Optional[str] = None, loader: AgentLoader = Depends(get_agent_loader)):
    """
    List agents, optionally in one city.

    The first call loads the directory; later calls are served from the cache.
    """
    agents = loader.load()
    if city:
        agents = [agent for agent in agents if agent.location == city]

    logger.info(f"Returning {len(agents)} agents" + (f" in {city}" if city else ""))

    return AgentListResponse(
        total_results=len(agents),
        city=city,
        agents=[AgentCard.from_agent(agent) for agent in agents]
    )


@app.get(f"{settings.api_v1_prefix}/agents/search", response_model=AgentDetailResponse)
def find_agent_by_name(name: str = Query(..., min_length=1),
                       loader: AgentLoader = Depends(get_agent_loader)):
    """Look up an agent by exact name."""
    agents = loader.load()
    agent = next((a for a in agents if a.name == name), None)
    if agent is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Agent named {name!r} not found"
        )
    return AgentDetailResponse(agent=AgentCard.from_agent(agent))


@app.get(f"{settings.api_v1_prefix}/agents/{{agent_id}}", response_model=AgentDetailResponse)
def get_agent_details(agent_id: str, loader: AgentLoader = Depends(get_agent_loader)):
    """
    Get a single agent.

    Args:
        agent_id: Agent ID, or the agent's exact name

    Returns:
        Agent card
    """
    agent = loader.load_by_id(agent_id)
    if agent is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Agent with ID {agent_id} not found"
        )
    return AgentDetailResponse(agent=AgentCard.from_agent(agent))


@app.get(f"{settings.api_v1_prefix}/cities/stats", response_model=CityStatsResponse)
def get_city_statistics(loader: AgentLoader = Depends(get_agent_loader)):
    """Agent count and rating totals per city."""
    agents = loader.load()
    return CityStatsResponse(cities=city_statistics(agents))


@app.get(f"{settings.api_v1_prefix}/agents/{{agent_id}}/reviews", response_model=ReviewsResponse)
def get_agent_reviews(agent_id: str, db=Depends(get_database)):
    """Reviews left for an agent, newest first."""
    try:
        reviews = db.get_reviews(agent_id)
    except Exception as e:
        logger.error(f"Error fetching reviews for {agent_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while fetching reviews"
        )

    return ReviewsResponse(agent_id=agent_id, total_reviews=len(reviews), reviews=reviews)


@app.get(f"{settings.api_v1_prefix}/agents/{{agent_id}}/reviews/stats", response_model=ReviewStats)
def get_agent_review_stats(agent_id: str, db=Depends(get_database)):
    """Review count and average rating for an agent."""
    try:
        return ReviewStats(**db.get_agent_stats(agent_id))
    except Exception as e:
        logger.error(f"Error fetching review stats for {agent_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while fetching review statistics"
        )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
