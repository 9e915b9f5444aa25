"""Visitor tracking API handler (no authentication required)."""

from typing import Any

import structlog

from visitrack.models.base import utc_now
from visitrack.repositories.visitor import VisitorRepository
from visitrack.services.visit_stats import aggregate, parse_range, window_start
from visitrack.utils.client import get_client_ip, get_origin, get_user_agent
from visitrack.utils.exceptions import ValidationError
from visitrack.utils.responses import (
    error,
    get_cors_headers,
    no_content,
    success,
    validation_error,
)

logger = structlog.get_logger()

DEFAULT_RANGE = "day"

ROUTES = ("/visitor/log", "/visitor/stats", "/visitor/total")


def handler(event: dict[str, Any], context: Any) -> dict:
    """Handle visitor API requests.

    Routes:
        GET /visitor/log                                 - Record the caller's visit
        GET /visitor/stats?range=day|week|month|year     - Bucketed visit counts
        GET /visitor/total                               - Total and unique visitors
    """
    headers = get_cors_headers(get_origin(event))

    try:
        http_method = event.get("httpMethod", "").upper()
        path = (event.get("path", "") or "").rstrip("/")

        route = next((r for r in ROUTES if path.endswith(r)), None)
        if route is None:
            return error("Not found", 404, headers=headers)

        if http_method == "OPTIONS":
            return no_content(headers=headers)
        if http_method != "GET":
            return error("Method not allowed", 405, headers=headers)

        if route == "/visitor/log":
            return log_visit(event, headers)
        elif route == "/visitor/stats":
            return get_stats(event, headers)
        else:
            return get_totals(headers)

    except ValidationError as e:
        return validation_error(e.errors, message=e.message, error_code=e.error_code, headers=headers)
    except Exception as e:
        logger.exception("Visitor handler error", error=str(e))
        return error("Internal server error", 500, headers=headers)


def log_visit(event: dict, headers: dict) -> dict:
    """Record a visit for the calling client and return its stored record."""
    identifier = get_client_ip(event)
    user_agent = get_user_agent(event)

    try:
        visitor = VisitorRepository().record_visit(identifier, user_agent)
    except Exception as e:
        logger.exception("Failed to log visitor", identifier=identifier, error=str(e))
        return error("Error logging visitor", 500, headers=headers)

    logger.info("Visit logged", identifier=identifier, visit_count=visitor.visit_count)

    return success(
        {
            "message": "Visit logged",
            "identifier": visitor.identifier,
            "lastVisit": visitor.last_visit,
            "userAgent": visitor.user_agent,
        },
        headers=headers,
    )


def get_stats(event: dict, headers: dict) -> dict:
    """Return the gap-filled visit series for the requested range."""
    query_params = event.get("queryStringParameters", {}) or {}
    stats_range = parse_range(query_params.get("range") or DEFAULT_RANGE)

    now = utc_now()
    start = window_start(stats_range, now)

    try:
        visitors = VisitorRepository().list_seen_between(start, now)
    except Exception as e:
        logger.exception("Failed to read visitors for stats", range=stats_range.value, error=str(e))
        return error("Error fetching stats", 500, headers=headers)

    buckets = aggregate(stats_range, visitors, now=now)

    logger.info(
        "Visitor stats computed",
        range=stats_range.value,
        visitors=len(visitors),
        buckets=len(buckets),
    )

    return success(buckets, headers=headers)


def get_totals(headers: dict) -> dict:
    """Return total visits and unique visitor count."""
    try:
        totals = VisitorRepository().get_totals()
    except Exception as e:
        logger.exception("Failed to count visitors", error=str(e))
        return error("Error fetching visitor count", 500, headers=headers)

    return success(
        {
            "totalVisitors": totals.total_visitors,
            "uniqueVisitors": totals.unique_visitors,
        },
        headers=headers,
    )
