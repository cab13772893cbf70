import pandas as pd
from typing import Any, Dict, Sequence


def city_statistics(agents: Sequence) -> Dict[str, Dict[str, Any]]:
    """
    Aggregate agents per city.

    Args:
        agents: EnrichedAgent objects

    Returns:
        Mapping of location to count, total_rating, total_reviews and
        avg_rating (one decimal). Agents without a location are skipped.
    """
    if not agents:
        return {}

    agents_df = pd.DataFrame([
        {
            'location': agent.location,
            'rating': agent.rating,
            'review_count': agent.review_count,
        }
        for agent in agents
    ])

    # groupby drops rows whose location is missing
    summary = agents_df.groupby('location', sort=False).agg(
        count=('rating', 'size'),
        total_rating=('rating', 'sum'),
        total_reviews=('review_count', 'sum'),
    )

    stats = {}
    for location, row in summary.iterrows():
        count = int(row['count'])
        total_rating = float(row['total_rating'])
        stats[location] = {
            'count': count,
            'total_rating': total_rating,
            'total_reviews': int(row['total_reviews']),
            'avg_rating': round(total_rating / count, 1),
        }

    return stats
