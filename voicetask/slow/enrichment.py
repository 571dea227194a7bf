"""
Client for the optional remote task parser.

The remote service re-parses the raw utterance and may return different
task fields. It is never required: every failure degrades to None and the
rule-based result stands.
"""
import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

import httpx

from ..config import Config
from ..models import Task

logger = logging.getLogger(__name__)

PARSE_ENDPOINT = "/api/parseDump"
DATE_FORMAT = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)
TIME_FORMAT = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$", re.ASCII)


def _text_field(data: dict, key: str) -> Optional[str]:
    """Return data[key] if it is a string; anything else counts as missing."""
    value = data.get(key)
    return value if isinstance(value, str) else None


@dataclass
class EnrichedTask:
    """A task as returned by the remote parser."""
    title: str = ""
    notes: Optional[str] = None
    due_date: Optional[str] = None
    due_time: Optional[str] = None
    category: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "EnrichedTask":
        return cls(
            title=_text_field(data, "title") or "",
            notes=_text_field(data, "notes"),
            due_date=_text_field(data, "due_date"),
            due_time=_text_field(data, "due_time"),
            category=_text_field(data, "category"),
        )


class EnrichmentClient:
    """Client for the remote parseDump API."""

    def __init__(self, base_url: str = None, token: str = None, timeout: float = None):
        self.base_url = (base_url or Config.enrichment_url()).rstrip("/")
        self.token = token if token is not None else Config.enrichment_token()
        self.timeout = timeout or Config.enrichment_timeout()

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def parse_task(self, text: str) -> Optional[EnrichedTask]:
        """
        Ask the remote service to parse an utterance.

        Args:
            text: The raw utterance

        Returns:
            The first parsed task, or None if the call failed or found nothing
        """
        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.post(
                    f"{self.base_url}{PARSE_ENDPOINT}",
                    json={"text": text},
                    headers=self._headers(),
                )

                if response.status_code != 200:
                    if response.status_code == 403:
                        logger.warning("Enrichment quota exceeded")
                    else:
                        logger.error(f"Enrichment request failed: {response.status_code}")
                    return None

                data = response.json()

        except httpx.TimeoutException:
            logger.warning(f"Enrichment request timed out after {self.timeout}s")
            return None
        except httpx.HTTPError as e:
            logger.warning(f"Enrichment request error: {e}")
            return None
        except ValueError as e:
            logger.warning(f"Enrichment returned invalid JSON: {e}")
            return None

        tasks = data.get("tasks") if isinstance(data, dict) else None
        if not isinstance(tasks, list) or not tasks:
            logger.debug("Enrichment returned no tasks")
            return None
        if not isinstance(tasks[0], dict):
            logger.warning(f"Enrichment returned a malformed task: {tasks[0]!r}")
            return None

        return EnrichedTask.from_dict(tasks[0])


def _is_iso_date(value: str) -> bool:
    """True only for a real calendar date written as YYYY-MM-DD."""
    if not DATE_FORMAT.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def apply_enrichment(task: Task, enriched: Optional[EnrichedTask]) -> Task:
    """
    Return a copy of task with the enriched fields that are set applied.
    Malformed remote dates and times are ignored.
    """
    if enriched is None:
        return task

    changes = {}
    if enriched.title:
        changes["title"] = enriched.title
    if enriched.due_date:
        if _is_iso_date(enriched.due_date):
            changes["due_date"] = enriched.due_date
        else:
            logger.debug(f"Ignoring remote due_date {enriched.due_date!r}")
    if enriched.due_time:
        # Remote times may carry seconds ("14:30:00")
        due_time = enriched.due_time[:5]
        if TIME_FORMAT.match(due_time):
            changes["due_time"] = due_time
        else:
            logger.debug(f"Ignoring remote due_time {enriched.due_time!r}")
    if enriched.category:
        changes["category"] = enriched.category

    return task.copy(**changes) if changes else task
