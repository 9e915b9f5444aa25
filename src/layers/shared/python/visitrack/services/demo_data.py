"""Demo visitor data for development tables.

Generates realistic visitors spread over several years so the dashboard
has something to chart for every range.
"""

from datetime import datetime, timezone
from random import Random

import structlog

from visitrack.models.base import utc_now
from visitrack.models.visitor import Visitor
from visitrack.repositories.visitor import VisitorRepository

logger = structlog.get_logger()

# Chance that a generated visit comes from an identifier seen before
RETURN_VISIT_RATE = 0.15
# Return visits only start once this many identifiers exist
MIN_KNOWN_FOR_RETURN = 50
# Chance of a period-appropriate user agent rather than a generic one
PERIOD_USER_AGENT_RATE = 0.7

USER_AGENTS_BY_YEAR = {
    2023: [
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/109.0.0.0 Safari/537.36",
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/109.0.0.0 Safari/537.36",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:109.0) Gecko/20100101 Firefox/109.0",
        "Mozilla/5.0 (iPhone; CPU iPhone OS 16_3 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/16.3 Mobile/15E148 Safari/604.1",
    ],
    2024: [
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0",
        "Mozilla/5.0 (iPhone; CPU iPhone OS 17_2 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.2 Mobile/15E148 Safari/604.1",
    ],
    2025: [
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/125.0.0.0 Safari/537.36",
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/125.0.0.0 Safari/537.36",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:125.0) Gecko/20100101 Firefox/125.0",
        "Mozilla/5.0 (iPhone; CPU iPhone OS 18_0 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/18.0 Mobile/15E148 Safari/604.1",
    ],
}

GENERIC_USER_AGENTS = [
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/118.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Mobile Safari/537.36",
    "Mozilla/5.0 (iPad; CPU OS 17_4 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.4 Mobile/15E148 Safari/604.1",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_4) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.4 Safari/605.1.15",
    "curl/8.5.0",
]


def _random_ipv4(rng: Random) -> str:
    return (
        f"{rng.randint(1, 223)}.{rng.randint(0, 255)}."
        f"{rng.randint(0, 255)}.{rng.randint(1, 254)}"
    )


def _pick_user_agent(rng: Random, year: int) -> str:
    if rng.random() < PERIOD_USER_AGENT_RATE:
        latest = max(USER_AGENTS_BY_YEAR)
        return rng.choice(USER_AGENTS_BY_YEAR.get(year, USER_AGENTS_BY_YEAR[latest]))
    return rng.choice(GENERIC_USER_AGENTS)


def generate_visitors(
    count: int,
    start_year: int,
    now: datetime | None = None,
    rng: Random | None = None,
) -> list[Visitor]:
    """Generate visitors with visits spread from start_year to now.

    Return visits fold into the existing record for that identifier, the
    same way the live upsert does.

    Args:
        count: Number of visits to generate.
        start_year: Year of the earliest possible visit.
        now: Latest possible visit. Defaults to the current UTC time.
        rng: Random source, for reproducible output.

    Returns:
        Visitors sorted by last visit, oldest first.
    """
    rng = rng or Random()
    now = now or utc_now()
    start = datetime(start_year, 1, 1, tzinfo=timezone.utc)
    span = max((now - start).total_seconds(), 0)

    visitors: dict[str, Visitor] = {}
    known: list[str] = []

    for _ in range(count):
        if rng.random() < RETURN_VISIT_RATE and len(known) > MIN_KNOWN_FOR_RETURN:
            identifier = rng.choice(known)
        else:
            identifier = _random_ipv4(rng)
            while identifier in visitors:
                identifier = _random_ipv4(rng)
            known.append(identifier)

        visited_at = datetime.fromtimestamp(
            start.timestamp() + rng.random() * span, tz=timezone.utc
        )
        user_agent = _pick_user_agent(rng, visited_at.year)

        visitor = visitors.get(identifier)
        if visitor is None:
            visitors[identifier] = Visitor(
                identifier=identifier,
                user_agent=user_agent,
                last_visit=visited_at,
                created_at=visited_at,
                updated_at=visited_at,
            )
            continue

        visitor.visit_count += 1
        if visited_at > visitor.last_visit:
            visitor.last_visit = visited_at
            visitor.user_agent = user_agent
        if visited_at < visitor.created_at:
            visitor.created_at = visited_at

    return sorted(visitors.values(), key=lambda v: v.last_visit)


def seed_demo_visitors(
    repo: VisitorRepository,
    count: int = 5000,
    start_year: int = 2023,
    clear: bool = False,
    rng: Random | None = None,
) -> list[Visitor]:
    """Write generated visitors to the table.

    Args:
        repo: Visitor repository for the target table.
        count: Number of visits to generate.
        start_year: Year of the earliest possible visit.
        clear: Delete existing visitors first.
        rng: Random source, for reproducible output.

    Returns:
        The visitors written.
    """
    if clear:
        deleted = repo.delete_all_visitors()
        logger.info("Cleared existing visitors", deleted=deleted, table_name=repo.table_name)

    visitors = generate_visitors(count, start_year, rng=rng)
    repo.batch_write(visitors)

    logger.info(
        "Seeded demo visitors",
        visits=count,
        visitors=len(visitors),
        table_name=repo.table_name,
    )
    return visitors
