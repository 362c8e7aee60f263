#!/usr/bin/env python3
"""
Load sample church events and info posts into a running API.

The script posts a handful of realistic entries (one featured event and
one featured info post among them) so the homepage banner feed has
something to show during development.

Usage:
    python add_sample_data.py --api http://localhost:3001/api
"""

import argparse
import logging
import sys
from typing import Any, Dict, List

import requests


logger = logging.getLogger("add_sample_data")

SAMPLE_EVENTS: List[Dict[str, Any]] = [
    {
        "title": "Seniorcafé",
        "description": "Månedligt seniorcafé for alle over 65 år. Kaffe, kage og gode samtaler i afslappede omgivelser.",
        "start_date": "2025-02-15T14:00:00Z",
        "end_date": "2025-02-15T16:00:00Z",
        "location": "Menighedshuset",
        "is_featured_banner": False,
    },
    {
        "title": "Ungdomsklub",
        "description": "Ugentlig ungdomsklub for 13-18 årige. Spil, musik, snacks og gode samtaler.",
        "start_date": "2025-01-23T19:00:00Z",
        "end_date": "2025-01-23T21:00:00Z",
        "location": "Ungdomslokalet",
        "is_featured_banner": False,
    },
    {
        "title": "Dåbsgudstjeneste",
        "description": "Særlig gudstjeneste med dåb. Velkommen til en festlig dag for dåbsfamilierne og hele menigheden.",
        "start_date": "2025-02-02T10:00:00Z",
        "end_date": "2025-02-02T11:00:00Z",
        "location": "Gislev Kirke",
        "is_featured_banner": False,
    },
    {
        "title": "Madpakkeklub",
        "description": "Gratis madpakker til børn i skoleferien. Åben for alle børn, ingen tilmelding nødvendig.",
        "start_date": "2025-02-17T12:00:00Z",
        "end_date": "2025-02-17T13:00:00Z",
        "location": "Menighedshuset",
        "is_featured_banner": True,
    },
]

SAMPLE_INFO: List[Dict[str, Any]] = [
    {
        "title": "Kirken søger frivillige",
        "content": "Vi søger frivillige til forskellige opgaver i kirken. Kontakt kontoret hvis du har lyst til at hjælpe.",
        "type": "general",
        "is_featured_banner": False,
        "published_at": "2025-01-18T10:00:00Z",
    },
    {
        "title": "Vinterlukket i kirketårnet",
        "content": "Grundet vedligeholdelsesarbejde er adgangen til kirketårnet lukket indtil videre.",
        "type": "announcement",
        "is_featured_banner": False,
        "published_at": "2025-01-12T08:00:00Z",
    },
    {
        "title": "Støt kirkens sociale arbejde",
        "content": "Din donation gør en forskel for de mest sårbare i vores samfund.",
        "type": "general",
        "is_featured_banner": True,
        "published_at": "2025-01-25T09:00:00Z",
    },
]


def post_entries(session: requests.Session, url: str, entries: List[Dict[str, Any]], timeout: float) -> int:
    """POST each entry to ``url`` and return how many were created."""
    created = 0
    for entry in entries:
        try:
            resp = session.post(url, json=entry, timeout=timeout)
        except requests.RequestException as exc:
            logger.error("Failed to add '%s': %s", entry["title"], exc)
            continue
        if resp.status_code != 201:
            logger.error("Failed to add '%s': HTTP %s %s", entry["title"], resp.status_code, resp.text[:200])
            continue
        logger.info("Added '%s'", entry["title"])
        created += 1
    return created


def main() -> int:
    ap = argparse.ArgumentParser(description="Add sample events and info posts to the Church Site API.")
    ap.add_argument("--api", default="http://localhost:3001/api", help="Base URL of the API (default: %(default)s)")
    ap.add_argument("--timeout", type=float, default=10.0, help="Request timeout in seconds")
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    base = args.api.rstrip("/")
    with requests.Session() as session:
        events = post_entries(session, f"{base}/events", SAMPLE_EVENTS, args.timeout)
        info = post_entries(session, f"{base}/info", SAMPLE_INFO, args.timeout)

    logger.info("Sample data complete: %d/%d events, %d/%d info posts",
                events, len(SAMPLE_EVENTS), info, len(SAMPLE_INFO))
    return 0 if events == len(SAMPLE_EVENTS) and info == len(SAMPLE_INFO) else 1


if __name__ == "__main__":
    sys.exit(main())
