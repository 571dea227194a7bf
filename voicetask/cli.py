#!/usr/bin/env python3
"""
CLI for voicetask - try the capture pipeline from a terminal.
"""
import argparse
import logging
import sys
from dataclasses import replace
from datetime import datetime
from typing import Optional

from .config import Config
from .fast.capture import process_transcript, reprocess_transcript
from .models import Message, Task
from .services.topic_service import generate_topic
from .slow.enrichment import EnrichmentClient

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging to stderr."""
    level = logging.DEBUG if verbose else getattr(logging, str(Config.get("log_level", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def parse_now(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid ISO date/time: {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="voicetask",
        description="Turn an utterance into a task",
    )
    parser.add_argument("utterance", nargs="*", help="Utterance to capture (interactive if omitted)")
    parser.add_argument("--now", type=parse_now, help="Reference instant, ISO format")
    parser.add_argument("--topic", nargs="+", metavar="MSG", help="Print the topic for these user messages")
    parser.add_argument("--enrich", action="store_true", help="Ask the remote parser as well")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def capture(text: str, tasks: list[Task], now: Optional[datetime], enrichment: Optional[EnrichmentClient]) -> str:
    """Capture one utterance, remembering any created task for later similarity checks."""
    result = process_transcript(text, existing_tasks=tasks, now=now, enrichment=enrichment)
    if result.task is not None:
        tasks.insert(0, result.task)
    return result.response


def edit(original: str, edited: str, tasks: list[Task], now: Optional[datetime]) -> str:
    """Re-capture a corrected utterance, replacing the task it produced if there was one."""
    result = reprocess_transcript(original, edited, existing_tasks=tasks, now=now)
    if result.task is None:
        return result.response
    if result.updated:
        tasks[:] = [result.task if t.id == result.task.id else t for t in tasks]
    else:
        tasks.insert(0, result.task)
    return result.response


def interactive(now: Optional[datetime], enrichment: Optional[EnrichmentClient]) -> None:
    tasks: list[Task] = []
    messages: list[Message] = []
    print("voicetask - type an utterance, 'edit <text>' to correct the last one, "
          "'topic' for the conversation topic, 'quit' to exit")

    while True:
        try:
            text = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not text:
            continue
        if text.lower() in ("quit", "exit"):
            break
        if text.lower() == "topic":
            print(generate_topic(messages))
            continue
        if text.lower().startswith("edit "):
            # Only the most recent user message can be corrected
            if len(messages) < 2:
                print("Nothing to edit yet.")
                continue
            edited = text[5:].strip()
            reply = edit(messages[-2].content, edited, tasks, now)
            messages[-2] = replace(messages[-2], content=edited)
            messages[-1] = replace(messages[-1], content=reply)
            print(reply)
            continue

        messages.append(Message(role="user", content=text))
        reply = capture(text, tasks, now, enrichment)
        messages.append(Message(role="bot", content=reply))
        print(reply)


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    enrichment = EnrichmentClient() if args.enrich else None

    if args.topic:
        print(generate_topic([Message(role="user", content=m) for m in args.topic]))
        return 0

    if args.utterance:
        print(capture(" ".join(args.utterance), [], args.now, enrichment))
        return 0

    interactive(args.now, enrichment)
    return 0


if __name__ == "__main__":
    sys.exit(main())
