"""
Deterministic agent enrichment.

Agents without an external rating get a rating, review count, service list
and tag list derived from a hash of their name. The same name, location and
type always produce the same values, across processes, with nothing stored.
"""

import math
from typing import Any, Dict, List, Optional

from agentscore.models.agent import AgentType, EnrichedAgent, Service

RATING_FLOOR = 3.5
RATING_STEPS = 15
REVIEW_ADS_CAP = 200
MIN_REVIEW_COUNT = 3

# Divisor checked against the name hash for each optional service, in order.
SERVICE_DIVISORS = (
    (2, Service.RENTALS.value),
    (3, Service.COMMERCIAL.value),
    (5, Service.PROPERTY_MANAGEMENT.value),
    (7, Service.INVESTMENT.value),
)

_INT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


def _round_tenth(value: float) -> float:
    """Round half up to one decimal."""
    return math.floor(value * 10 + 0.5) / 10


def name_hash(name: str) -> int:
    """
    31-multiplier rolling hash over the UTF-16 code units of a name.

    The accumulator wraps as a signed 32-bit integer after every step, then
    the absolute value is returned.

    Args:
        name: Agent name

    Returns:
        Non-negative hash, 0 for an empty name
    """
    h = 0
    encoded = name.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(encoded), 2):
        code = encoded[i] | (encoded[i + 1] << 8)
        h = (h * 31 + code) & _INT32_MASK
        if h & _INT32_SIGN:
            h -= 1 << 32
    return abs(h)


def generate_rating(hash_value: int) -> float:
    """Rating in {3.5, 3.6, ..., 4.9} picked by hash modulo 15."""
    return _round_tenth(RATING_FLOOR + (hash_value % RATING_STEPS) / 10)


def generate_review_count(ads: Optional[int], rating: float) -> int:
    """
    Synthetic review count from listing volume.

    Listings are capped at 200 and scaled by a factor rising linearly from
    30% at rating 3.5 to 50% at rating 5.0. Never below 3.

    Args:
        ads: Active listing count
        rating: Agent rating

    Returns:
        Review count
    """
    steps = int(round((rating - RATING_FLOOR) * 10))
    steps = min(max(steps, 0), RATING_STEPS)
    percent = 30 + steps * 20 // RATING_STEPS

    capped = min(max(int(ads or 0), 0), REVIEW_ADS_CAP)
    return max(MIN_REVIEW_COUNT, capped * percent // 100)


def generate_services(hash_value: int) -> List[str]:
    """Sales, plus every optional service whose divisor divides the hash."""
    services = [Service.SALES.value]
    for divisor, service in SERVICE_DIVISORS:
        if hash_value % divisor == 0:
            services.append(service)
    return services


def generate_tags(hash_value: int, location: Optional[str] = None,
                  agent_type: Optional[str] = None) -> List[str]:
    """Tags from hash, location and agent type, always in the same order."""
    tags = []
    if agent_type == AgentType.DEVELOPER.value:
        tags.append("Developer")
        if hash_value % 2 == 0:
            tags.append("New Projects")
        if hash_value % 3 == 0:
            tags.append("Luxury")
    else:
        if hash_value % 3 == 0:
            tags.append("Expat Friendly")
        if hash_value % 4 == 0:
            tags.append("Luxury Properties")
        if hash_value % 5 == 0:
            tags.append("New Builds")

    if location == "Limassol" and hash_value % 2 == 0:
        tags.append("Beachfront")
    if location == "Paphos" and hash_value % 3 == 0:
        tags.append("Retirement Specialist")
    return tags


def _require_name(record: Dict[str, Any]) -> str:
    name = record.get("name")
    if not isinstance(name, str) or not name:
        raise ValueError(f"Agent record has no name: {record!r}")
    return name


def _as_text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _listing_count(value: Any) -> int:
    return max(int(value or 0), 0)


def _rating_and_reviews(hash_value: int, ads: int,
                        external_rating: Any, external_reviews: Any):
    """External values win when present, otherwise both are generated."""
    if external_rating:
        rating = _round_tenth(float(external_rating))
    else:
        rating = generate_rating(hash_value)

    if external_reviews:
        review_count = int(external_reviews)
    else:
        review_count = generate_review_count(ads, rating)
    return rating, review_count


def enrich_agent(record: Dict[str, Any]) -> EnrichedAgent:
    """
    Build an agent from a record of the static JSON document.

    Args:
        record: Raw JSON agent (name, location, type, ads, google_rating, ...)

    Returns:
        Enriched agent
    """
    name = _require_name(record)
    hash_value = name_hash(name)
    agent_type = record.get("type") or AgentType.AGENT.value
    location = record.get("location")
    ads = _listing_count(record.get("ads"))

    rating, review_count = _rating_and_reviews(
        hash_value, ads,
        record.get("google_rating"),
        record.get("google_review_count"),
    )

    reviews = record.get("google_reviews") or []

    return EnrichedAgent(
        id=_as_text(record.get("id")),
        name=name,
        type=agent_type,
        location=location,
        url=record.get("url"),
        website=record.get("website"),
        ads=ads,
        rating=rating,
        review_count=review_count,
        email=record.get("email"),
        phone=_as_text(record.get("phone")),
        established=_as_text(record.get("established")),
        description=record.get("description"),
        featured_project=record.get("featured_project"),
        sample_review=reviews[0] if reviews else None,
        services=generate_services(hash_value),
        tags=generate_tags(hash_value, location, agent_type),
    )


def transform_supabase_agent(record: Dict[str, Any]) -> EnrichedAgent:
    """
    Build an agent from a row of the Supabase agents table.

    Args:
        record: Row with listing_count, bazaraki_url, google_rating,
            google_reviews_count, ...

    Returns:
        Enriched agent
    """
    name = _require_name(record)
    hash_value = name_hash(name)
    agent_type = record.get("type") or AgentType.AGENT.value
    location = record.get("location")
    ads = _listing_count(record.get("listing_count"))

    rating, review_count = _rating_and_reviews(
        hash_value, ads,
        record.get("google_rating"),
        record.get("google_reviews_count"),
    )

    return EnrichedAgent(
        id=_as_text(record.get("id")),
        name=name,
        type=agent_type,
        location=location,
        url=record.get("bazaraki_url") or record.get("website") or "#",
        website=record.get("website"),
        ads=ads,
        rating=rating,
        review_count=review_count,
        email=record.get("email"),
        phone=_as_text(record.get("phone")),
        logo_url=record.get("logo_url"),
        sample_review=record.get("sample_review"),
        services=generate_services(hash_value),
        tags=generate_tags(hash_value, location, agent_type),
    )
