#!/usr/bin/env python3
"""Seed development visitor data into DynamoDB."""

import argparse
import os
import sys
from random import Random

# Add the shared layer to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src", "layers", "shared", "python"))

from visitrack.repositories.visitor import VisitorRepository
from visitrack.services.demo_data import seed_demo_visitors
from visitrack.services.visitor_summary import summarize_visitors


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Seed development visitor data")
    parser.add_argument("--stage", default="dev", help="Deployment stage")
    parser.add_argument("--region", default="us-east-1", help="AWS region")
    parser.add_argument("--count", type=int, default=5000, help="Number of visits to generate")
    parser.add_argument("--start-year", type=int, default=2023, help="Year of the earliest visit")
    parser.add_argument("--clear", action="store_true", help="Delete existing visitors first")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    args = parser.parse_args()

    os.environ["AWS_DEFAULT_REGION"] = args.region
    table_name = f"visitrack-{args.stage}"
    print(f"Seeding data to table: {table_name}")

    repo = VisitorRepository(table_name=table_name)
    existing = repo.get_totals()
    print(f"Existing visitors in table: {existing.unique_visitors}")

    visitors = seed_demo_visitors(
        repo,
        count=args.count,
        start_year=args.start_year,
        clear=args.clear,
        rng=Random(args.seed),
    )
    print(f"Wrote {len(visitors)} visitors")

    summary = summarize_visitors(visitors)
    print("\nVisitor statistics:")
    print(f"  Total visits:      {summary.total}")
    print(f"  Unique visitors:   {summary.unique_visitors}")
    print(f"  Return visits:     {summary.return_visitors}")
    if summary.earliest and summary.latest:
        print(f"  Date range:        {summary.earliest:%Y-%m-%d} to {summary.latest:%Y-%m-%d}")
    print("  Visitors by year:")
    for year, year_count in summary.visitors_by_year.items():
        print(f"    {year}: {year_count}")
    if summary.top_user_agent:
        print(f"  Top user agent:    {summary.top_user_agent[:50]}... ({summary.top_user_agent_count})")
    print(f"  Mobile / desktop:  {summary.mobile} / {summary.desktop}")

    print("\nSeeding complete!")


if __name__ == "__main__":
    main()
