"""
Transcript capture: turns one finalized utterance into a task and a reply.

The pipeline is expand -> classify -> resolve date and time -> optional
remote enrichment -> similar-task check. Existing tasks are only read.
Edited utterances go through reprocess_transcript instead.
"""
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from ..config import Config
from ..models import ParsedTaskInfo, Task
from ..parser.natural_date import (
    format_date_for_display,
    format_time_for_display,
    parse_date,
    parse_time,
)
from ..parser.task_parser import parse_task_from_message
from ..services.similar_tasks import check_for_similar_tasks
from ..slow.enrichment import EnrichmentClient, apply_enrichment
from .responder import generate_bot_response

logger = logging.getLogger(__name__)


@dataclass
class CaptureResult:
    """Result of processing a transcript."""
    response: str
    task: Optional[Task] = None
    info: Optional[ParsedTaskInfo] = None
    suggestion: Optional[str] = None
    enriched: bool = False
    updated: bool = False


def build_task(info: ParsedTaskInfo, now: Optional[datetime] = None) -> Task:
    """Create a Task from parsed info, resolving its date and time."""
    now = now or datetime.now()
    return Task(
        id=str(uuid.uuid4()),
        title=info.title,
        due_date=parse_date(info.raw_date or "", now),
        due_time=parse_time(info.raw_time or ""),
        category=info.suggested_category or Config.default_category(),
        is_done=False,
        created_at=now,
    )


def format_task_confirmation(task: Task, now: Optional[datetime] = None) -> str:
    """Format the reply shown after a task is created."""
    date_display = format_date_for_display(task.due_date, now) if task.due_date else "Today"
    time_display = format_time_for_display(task.due_time) if task.due_time else "8:00 PM"
    return f'✓ Task created: "{task.title}"\n📅 {date_display} at {time_display}\n📁 {task.category}'


def _resolve_enrichment(enrichment: Optional[EnrichmentClient]) -> Optional[EnrichmentClient]:
    if enrichment is not None:
        return enrichment
    if Config.enrichment_enabled():
        return EnrichmentClient()
    return None


def process_transcript(
    transcript: str,
    existing_tasks: Iterable[Task] = (),
    now: Optional[datetime] = None,
    enrichment: Optional[EnrichmentClient] = None,
) -> CaptureResult:
    """
    Process a finalized transcript.

    Args:
        transcript: The final recognizer output for one utterance
        existing_tasks: Tasks already stored, used for the similar-task check
        now: Reference instant for relative dates; defaults to the current time
        enrichment: Remote parser to consult; falls back to config

    Returns:
        CaptureResult with the created task (if any) and the reply text
    """
    now = now or datetime.now()
    info = parse_task_from_message(transcript)

    if info is None:
        logger.debug(f"Not a task: {transcript!r}")
        return CaptureResult(response=generate_bot_response(transcript))

    task = build_task(info, now)
    enriched = False

    client = _resolve_enrichment(enrichment)
    if client is not None:
        remote = client.parse_task(transcript)
        if remote is not None:
            task = apply_enrichment(task, remote)
            enriched = True
        else:
            logger.warning("Enrichment unavailable, keeping rule-based result")

    logger.info(f"Task created: {task.title!r} on {task.due_date} at {task.due_time} [{task.category}]")

    suggestion = check_for_similar_tasks(task, existing_tasks)
    response = format_task_confirmation(task, now)
    if suggestion:
        response = f"{response}\n{suggestion}"

    return CaptureResult(
        response=response,
        task=task,
        info=info,
        suggestion=suggestion,
        enriched=enriched,
    )


def reprocess_transcript(
    original: str,
    edited: str,
    existing_tasks: Iterable[Task] = (),
    now: Optional[datetime] = None,
) -> CaptureResult:
    """
    Re-run capture after the user corrects an utterance.

    The task whose title equals the title parsed from the original utterance
    is updated in a copy; if there is none, a new task is built. existing_tasks
    is never modified. The edited text is not sent for enrichment.

    Returns:
        CaptureResult; updated is True when an existing task was revised
    """
    now = now or datetime.now()
    info = parse_task_from_message(edited)

    if info is None:
        logger.debug(f"Edited text is not a task: {edited!r}")
        return CaptureResult(response=generate_bot_response(edited))

    original_info = parse_task_from_message(original)
    match = None
    if original_info is not None:
        match = next((t for t in existing_tasks if t.title == original_info.title), None)

    if match is not None:
        task = match.copy(
            title=info.title,
            due_date=parse_date(info.raw_date or "", now),
            due_time=parse_time(info.raw_time or ""),
            category=info.suggested_category or match.category,
        )
        logger.info(f"Task updated from edit: {match.title!r} -> {task.title!r}")
    else:
        task = build_task(info, now)
        logger.info(f"Task created from edit: {task.title!r}")

    return CaptureResult(
        response=format_task_confirmation(task, now),
        task=task,
        info=info,
        updated=match is not None,
    )
