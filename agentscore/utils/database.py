from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from supabase import Client, create_client
from supabase.client import ClientOptions

from agentscore.config.settings import settings

AGENTS_TABLE = 'agents'
REVIEWS_TABLE = 'reviews'


class DatabaseClient:
    """Supabase database client for the agent directory."""

    def __init__(self, url: Optional[str] = None, key: Optional[str] = None,
                 client: Optional[Client] = None, timeout: Optional[float] = None):
        if client is None:
            url = url or settings.supabase_url
            key = key or settings.supabase_anon_key
            if not url or not key:
                raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY must be set")
            client = create_client(
                url,
                key,
                options=ClientOptions(
                    postgrest_client_timeout=timeout or settings.request_timeout
                ),
            )
        self.client = client

    def get_agents(self, location: Optional[str] = None, search: Optional[str] = None,
                   limit: int = 50, offset: int = 0) -> List[Dict[str, Any]]:
        """
        Fetch agents, busiest first.

        Args:
            location: Exact city to filter on
            search: Case-insensitive substring of the agent name
            limit: Page size
            offset: First row of the page

        Returns:
            Agent rows
        """
        query = self.client.table(AGENTS_TABLE).select('*').order(
            'listing_count', desc=True
        ).range(offset, offset + limit - 1)

        if location:
            query = query.eq('location', location)
        if search:
            query = query.ilike('name', f'%{search}%')

        response = query.execute()
        return response.data if response.data else []

    def get_agent(self, agent_id: str) -> Optional[Dict[str, Any]]:
        """Fetch single agent by ID."""
        response = self.client.table(AGENTS_TABLE).select('*').eq(
            'id', agent_id
        ).limit(1).execute()
        return response.data[0] if response.data else None

    def get_reviews(self, agent_id: str) -> List[Dict[str, Any]]:
        """Fetch reviews for an agent, newest first, with the reviewer's email."""
        response = self.client.table(REVIEWS_TABLE).select(
            '*, user:auth.users(email)'
        ).eq('agent_id', agent_id).order('created_at', desc=True).execute()
        return response.data if response.data else []

    def create_review(self, agent_id: str, user_id: Optional[str], rating: int,
                      title: Optional[str] = None,
                      content: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """Insert a review written by a signed-in user."""
        if not user_id:
            raise ValueError("Must be logged in to create a review")

        response = self.client.table(REVIEWS_TABLE).insert({
            'agent_id': agent_id,
            'user_id': user_id,
            'rating': rating,
            'title': title,
            'content': content,
        }).execute()
        return response.data[0] if response.data else None

    def update_review(self, review_id: str, rating: int, title: Optional[str] = None,
                      content: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """Update a review and stamp updated_at."""
        response = self.client.table(REVIEWS_TABLE).update({
            'rating': rating,
            'title': title,
            'content': content,
            'updated_at': datetime.now(timezone.utc).isoformat(),
        }).eq('id', review_id).execute()
        return response.data[0] if response.data else None

    def delete_review(self, review_id: str):
        """Delete a review."""
        return self.client.table(REVIEWS_TABLE).delete().eq('id', review_id).execute()

    def get_agent_stats(self, agent_id: str) -> Dict[str, Any]:
        """
        Review count and average rating for an agent.

        Args:
            agent_id: Agent UUID

        Returns:
            Dict with review_count and average_rating (one decimal, 0 without reviews)
        """
        response = self.client.table(REVIEWS_TABLE).select('rating').eq(
            'agent_id', agent_id
        ).execute()
        ratings = [row['rating'] for row in (response.data or [])]

        count = len(ratings)
        average = sum(ratings) / count if count > 0 else 0

        return {
            'review_count': count,
            'average_rating': round(average, 1),
        }
