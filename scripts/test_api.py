#!/usr/bin/env python3
"""API Testing Script for the visitor widget.

Exercises a deployed visitor API without the dashboard. Useful for manual
verification after a deploy.

Usage:
    export API_URL="https://your-api-url.execute-api.us-east-1.amazonaws.com/dev"

    # Run all tests
    python scripts/test_api.py

    # Run specific test
    python scripts/test_api.py --test stats
"""

import argparse
import os
import sys
from typing import Any

import httpx

# Configuration from environment
API_URL = os.environ.get("API_URL", "")

EXPECTED_BUCKETS = {"day": 24, "week": 7, "month": 30, "year": 12}


class Colors:
    """ANSI color codes for terminal output."""

    GREEN = "\033[92m"
    RED = "\033[91m"
    BLUE = "\033[94m"
    RESET = "\033[0m"
    BOLD = "\033[1m"


def print_success(msg: str) -> None:
    """Print success message in green."""
    print(f"{Colors.GREEN}[OK]{Colors.RESET} {msg}")


def print_error(msg: str) -> None:
    """Print error message in red."""
    print(f"{Colors.RED}[ERROR]{Colors.RESET} {msg}")


def print_info(msg: str) -> None:
    """Print info message in blue."""
    print(f"{Colors.BLUE}[INFO]{Colors.RESET} {msg}")


def print_header(msg: str) -> None:
    """Print section header."""
    print(f"\n{Colors.BOLD}{'=' * 60}{Colors.RESET}")
    print(f"{Colors.BOLD}{msg}{Colors.RESET}")
    print(f"{Colors.BOLD}{'=' * 60}{Colors.RESET}\n")


class APITester:
    """API testing utility for the visitor endpoints."""

    def __init__(self, api_url: str):
        """Initialize the API tester.

        Args:
            api_url: Base URL of the API.
        """
        self.api_url = api_url.rstrip("/")
        self.client = httpx.Client(timeout=30.0)

    def _request(
        self,
        path: str,
        params: dict | None = None,
        expect_status: int = 200,
    ) -> Any | None:
        """Make a GET request.

        Args:
            path: API path.
            params: Query parameters.
            expect_status: Expected status code.

        Returns:
            Response data or None on error.
        """
        url = f"{self.api_url}{path}"
        try:
            response = self.client.get(url, params=params)

            if response.status_code == expect_status:
                return response.json()
            else:
                print_error(f"GET {path} returned {response.status_code}")
                print(f"  Response: {response.text[:500]}")
                return None

        except httpx.RequestError as e:
            print_error(f"Request failed: {e}")
            return None

    def test_log(self) -> bool:
        """Log a visit and check the echoed record."""
        print_header("Testing /visitor/log")

        result = self._request("/visitor/log")
        if not result:
            return False

        for field in ("message", "identifier", "lastVisit", "userAgent"):
            if field not in result:
                print_error(f"Missing '{field}' in response")
                return False

        print_success(f"Logged visit for {result['identifier']} at {result['lastVisit']}")
        return True

    def test_stats(self) -> bool:
        """Fetch every range and check the bucket counts."""
        print_header("Testing /visitor/stats")

        for range_name, expected in EXPECTED_BUCKETS.items():
            result = self._request("/visitor/stats", params={"range": range_name})
            if result is None:
                return False
            if len(result) != expected:
                print_error(f"range={range_name}: expected {expected} buckets, got {len(result)}")
                return False
            total = sum(bucket["count"] for bucket in result)
            print_success(f"range={range_name}: {len(result)} buckets, {total} visits")

        print_info("Requesting an invalid range...")
        result = self._request("/visitor/stats", params={"range": "decade"}, expect_status=400)
        if result is None:
            return False
        print_success(f"Invalid range rejected: {result.get('error_code')}")

        return True

    def test_total(self) -> bool:
        """Fetch totals."""
        print_header("Testing /visitor/total")

        result = self._request("/visitor/total")
        if not result:
            return False

        print_success(
            f"{result.get('totalVisitors')} visits from {result.get('uniqueVisitors')} visitors"
        )
        return True

    def run_all(self) -> bool:
        """Run every test in order."""
        return self.test_log() and self.test_stats() and self.test_total()


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Visitor API Testing Script")
    parser.add_argument("--api-url", help="API base URL", default=API_URL)
    parser.add_argument(
        "--test",
        choices=["all", "log", "stats", "total"],
        default="all",
        help="Which tests to run",
    )

    args = parser.parse_args()

    if not args.api_url:
        print_error("API_URL not set. Use --api-url or set API_URL environment variable.")
        sys.exit(1)

    print_header("Visitor API Tester")
    print_info(f"API URL: {args.api_url}")

    tester = APITester(args.api_url)

    if args.test == "all":
        success = tester.run_all()
    else:
        success = getattr(tester, f"test_{args.test}")()

    print_header("Test Results")
    if success:
        print_success("All tests passed!")
        sys.exit(0)
    else:
        print_error("Some tests failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
