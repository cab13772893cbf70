#!/usr/bin/env python3
"""
Import agents from the JSON document into Supabase.

Run this once to populate the database:
1. Read the local JSON array of agents
2. Map each entry to the agents table schema
3. Insert in batches through the Supabase REST API
4. Print a summary of inserted rows and failed batches

Set SUPABASE_URL and SUPABASE_ANON_KEY (or the VITE_ prefixed variants)
before running.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from agentscore.config.settings import Settings


class BatchError(BaseModel):
    """A batch the backend rejected."""
    batch: int = Field(..., description="Offset of the first record in the batch")
    error: str


class ImportSummary(BaseModel):
    """Outcome of an import run."""
    total: int = 0
    inserted: int = 0
    errors: List[BatchError] = Field(default_factory=list)


def to_insert_row(agent: Dict[str, Any]) -> Dict[str, Any]:
    """Map a JSON agent to a row of the agents table."""
    reviews = agent.get('google_reviews') or []
    return {
        'name': agent.get('name'),
        'location': agent.get('location'),
        'bazaraki_url': agent.get('url'),
        'listing_count': agent.get('ads') or 0,
        'google_rating': agent.get('google_rating') or None,
        'google_reviews_count': agent.get('google_review_count') or 0,
        'sample_review': reviews[0] if reviews else None,
    }


def import_agents(agents: List[Dict[str, Any]], url: str, key: str,
                  batch_size: int = 50, timeout: float = 10.0,
                  session: Optional[requests.Session] = None) -> ImportSummary:
    """
    Insert agents into Supabase in batches.

    A failed batch is recorded and the run continues with the next one.

    Args:
        agents: Raw JSON agents
        url: Supabase project URL
        key: Supabase anon key
        batch_size: Rows per insert request
        timeout: Request timeout in seconds
        session: HTTP session (plain requests calls by default)

    Returns:
        ImportSummary with inserted count and per-batch errors

    Raises:
        ValueError: If batch_size is below 1
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")

    http = session or requests
    endpoint = f"{url.rstrip('/')}/rest/v1/agents"
    headers = {
        "apikey": key,
        "Authorization": f"Bearer {key}",
        "Content-Type": "application/json",
        "Prefer": "return=minimal"
    }

    rows = [to_insert_row(agent) for agent in agents]
    summary = ImportSummary(total=len(rows))

    print("🔄 Inserting agents into Supabase...")

    for offset in range(0, len(rows), batch_size):
        batch = rows[offset:offset + batch_size]

        try:
            response = http.post(endpoint, headers=headers, json=batch, timeout=timeout)
        except requests.RequestException as e:
            summary.errors.append(BatchError(batch=offset, error=str(e)))
            print(f"❌ Error at batch {offset}: {e}")
            continue

        if response.ok:
            summary.inserted += len(batch)
            print(f"✅ Inserted {summary.inserted}/{summary.total} agents")
        else:
            summary.errors.append(BatchError(batch=offset, error=response.text))
            print(f"❌ Error at batch {offset}: {response.text}")

    return summary


def print_summary(summary: ImportSummary):
    print("\n📊 Import Summary:")
    print(f"   ✅ Inserted: {summary.inserted} agents")
    print(f"   ❌ Errors: {len(summary.errors)} batches")

    if summary.errors:
        print("\n❌ Error details:")
        for error in summary.errors:
            print(f"   - batch {error.batch}: {error.error}")


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Import agents from JSON into Supabase")
    parser.add_argument("--file", default=None,
                        help="JSON array of agents (default: AGENTS_JSON_URL)")
    parser.add_argument("--batch-size", type=positive_int, default=None,
                        help="Rows per insert request (default: IMPORT_BATCH_SIZE)")
    parser.add_argument("--dry-run", action="store_true",
                        help="Map and count agents without inserting")
    args = parser.parse_args(argv)

    load_dotenv()
    try:
        config = Settings()
    except ValidationError as e:
        print(f"❌ Invalid configuration: {e}")
        sys.exit(1)

    if not config.supabase_configured:
        print("❌ Missing Supabase credentials. Set SUPABASE_URL and SUPABASE_ANON_KEY")
        sys.exit(1)

    print("📥 Starting agent import...")

    path = Path(args.file or config.agents_json_url)
    try:
        agents = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        print(f"❌ Could not read agents from {path}: {e}")
        sys.exit(1)

    if not isinstance(agents, list):
        print(f"❌ Expected a JSON array of agents in {path}")
        sys.exit(1)

    print(f"📋 Loaded {len(agents)} agents from JSON")

    if args.dry_run:
        rows = [to_insert_row(agent) for agent in agents]
        print(f"Dry run: {len(rows)} agents ready to insert")
        return 0

    summary = import_agents(
        agents,
        config.supabase_url,
        config.supabase_anon_key,
        batch_size=args.batch_size if args.batch_size is not None else config.import_batch_size,
        timeout=config.request_timeout,
    )
    print_summary(summary)

    if summary.errors:
        sys.exit(1)
    return 0


if __name__ == "__main__":
    main()
