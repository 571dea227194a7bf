"""
Tests for the capture pipeline, bot replies and the CLI harness.
"""
from unittest.mock import Mock

from voicetask import cli
from voicetask.config import Config
from voicetask.fast.capture import (
    build_task,
    format_task_confirmation,
    process_transcript,
    reprocess_transcript,
)
from voicetask.fast.responder import generate_bot_response
from voicetask.models import ParsedTaskInfo, Task
from voicetask.slow.enrichment import EnrichedTask


class TestBotResponses:
    def test_task_created(self):
        assert generate_bot_response("anything", task_created=True) == "✓ Task created!"

    def test_task_command(self):
        assert generate_bot_response("buy milk") == "Got it! I'll add that to your tasks."

    def test_greeting(self):
        assert generate_bot_response("hello") == "Hi! I'm here to help. What's on your mind?"

    def test_question(self):
        assert generate_bot_response("why is the sky blue?") == "Let me help you with that."

    def test_thanks(self):
        assert generate_bot_response("thank u") == "You're welcome! Anything else?"

    def test_default(self):
        assert generate_bot_response("the sky is blue") == "Got it, I've noted that down."


class TestBuildTask:
    def test_fields(self, now):
        info = ParsedTaskInfo(
            is_task=True,
            title="Pay rent",
            raw_date="pay rent friday at 9am",
            raw_time="pay rent friday at 9am",
            suggested_category="Finance",
        )
        task = build_task(info, now)
        assert task.id
        assert task.title == "Pay rent"
        assert task.due_date == "2025-01-10"
        assert task.due_time == "09:00"
        assert task.category == "Finance"
        assert task.is_done is False
        assert task.created_at == now

    def test_missing_category_uses_configured_default(self, now):
        Config.set("default_category", "Inbox")
        info = ParsedTaskInfo(is_task=True, title="Thing", raw_date="", raw_time="")
        task = build_task(info, now)
        assert task.category == "Inbox"
        assert task.due_date == "2025-01-08"
        assert task.due_time == "20:00"

    def test_unique_ids(self, now):
        info = ParsedTaskInfo(is_task=True, title="x", raw_date="x", raw_time="x")
        assert build_task(info, now).id != build_task(info, now).id

    def test_confirmation_text(self, now):
        task = Task(id="1", title="Call mom", due_date="2025-01-09", due_time="15:00", category="Personal")
        assert format_task_confirmation(task, now) == (
            '✓ Task created: "Call mom"\n📅 Tomorrow, Jan 9 at 3:00 PM\n📁 Personal'
        )


class TestProcessTranscript:
    def test_non_task_gets_reply(self, now):
        result = process_transcript("hello", now=now)
        assert result.task is None
        assert result.info is None
        assert result.response == "Hi! I'm here to help. What's on your mind?"

    def test_creates_task(self, now):
        result = process_transcript("Call mom tomorrow at 3pm", now=now)
        task = result.task
        assert task.title == "Call mom"
        assert task.due_date == "2025-01-09"
        assert task.due_time == "15:00"
        assert task.category == "Personal"
        assert result.suggestion is None
        assert result.enriched is False
        assert result.response == '✓ Task created: "Call mom"\n📅 Tomorrow, Jan 9 at 3:00 PM\n📁 Personal'

    def test_similar_task_suggestion_appended(self, now):
        existing = [Task(id="dad", title="Call dad", due_date="2025-01-09", due_time="16:00", category="Personal")]
        result = process_transcript("Call mom tomorrow at 3pm", existing_tasks=existing, now=now)
        assert result.suggestion == (
            '💡 You have "Call dad" at 4:00 PM. Want to combine Personal tasks at 3:30 PM?'
        )
        assert result.response.endswith(result.suggestion)
        assert len(existing) == 1

    def test_enrichment_overrides_fields(self, now):
        client = Mock()
        client.parse_task.return_value = EnrichedTask(title="Call Mom", due_time="15:30:00", category="Family")
        result = process_transcript("Call mom tomorrow at 3pm", now=now, enrichment=client)

        client.parse_task.assert_called_once_with("Call mom tomorrow at 3pm")
        assert result.enriched is True
        assert result.task.title == "Call Mom"
        assert result.task.due_time == "15:30"
        assert result.task.due_date == "2025-01-09"
        assert result.task.category == "Family"

    def test_enrichment_failure_keeps_rule_result(self, now):
        client = Mock()
        client.parse_task.return_value = None
        result = process_transcript("Call mom tomorrow at 3pm", now=now, enrichment=client)
        assert result.enriched is False
        assert result.task.title == "Call mom"

    def test_enrichment_not_called_for_non_tasks(self, now):
        client = Mock()
        process_transcript("hello", now=now, enrichment=client)
        client.parse_task.assert_not_called()

    def test_24_hour_time(self, now):
        result = process_transcript("team meeting at 14:00 tomorrow", now=now)
        assert result.task.title == "Team meeting"
        assert result.task.due_time == "14:00"
        assert result.task.category == "Work"
        assert result.response == '✓ Task created: "Team meeting"\n📅 Tomorrow, Jan 9 at 2:00 PM\n📁 Work'


class TestReprocessTranscript:
    def test_updates_task_from_original_utterance(self, now):
        existing = [Task(id="t1", title="Call mom", due_date="2025-01-09", due_time="15:00", category="Personal")]
        result = reprocess_transcript("Call mom tomorrow at 3pm", "Call dad friday at 5pm", existing, now)

        assert result.updated is True
        assert result.task.id == "t1"
        assert result.task.title == "Call dad"
        assert result.task.due_date == "2025-01-10"
        assert result.task.due_time == "17:00"
        assert result.task.category == "Personal"
        assert result.response == '✓ Task created: "Call dad"\n📅 Fri, Jan 10 at 5:00 PM\n📁 Personal'
        assert existing[0].title == "Call mom"
        assert existing[0].due_time == "15:00"

    def test_creates_task_when_nothing_matches(self, now):
        existing = [Task(id="x", title="Buy milk")]
        result = reprocess_transcript("Call mom tomorrow at 3pm", "Call dad friday at 5pm", existing, now)

        assert result.updated is False
        assert result.task.id not in ("", "x")
        assert result.task.title == "Call dad"
        assert result.task.created_at == now
        assert len(existing) == 1

    def test_original_not_a_task_creates(self, now):
        existing = [Task(id="blank", title="")]
        result = reprocess_transcript("hello", "buy milk", existing, now)
        assert result.updated is False
        assert result.task.id != "blank"
        assert result.task.title == "Buy milk"

    def test_edited_text_not_a_task(self, now):
        existing = [Task(id="t1", title="Buy milk")]
        result = reprocess_transcript("buy milk", "hello", existing, now)
        assert result.task is None
        assert result.updated is False
        assert result.response == "Hi! I'm here to help. What's on your mind?"


class TestCli:
    def test_single_utterance(self, capsys):
        assert cli.main(["--now", "2025-01-08T09:00", "Call", "mom", "tomorrow", "at", "3pm"]) == 0
        out = capsys.readouterr().out
        assert '✓ Task created: "Call mom"' in out
        assert "Tomorrow, Jan 9 at 3:00 PM" in out

    def test_topic(self, capsys):
        assert cli.main(["--topic", "hi", "plan the team offsite"]) == 0
        assert capsys.readouterr().out.strip() == "Plan the team offsite"

    def test_session_tasks_feed_similarity(self, now):
        tasks = []
        cli.capture("pay rent tomorrow at 2pm", tasks, now, None)
        reply = cli.capture("transfer savings tomorrow at 3pm", tasks, now, None)
        assert len(tasks) == 2
        assert "Want to combine Finance tasks at 2:30 PM?" in reply

    def test_edit_replaces_session_task(self, now):
        tasks = []
        cli.capture("Call mom tomorrow at 3pm", tasks, now, None)
        original_id = tasks[0].id
        reply = cli.edit("Call mom tomorrow at 3pm", "Call dad friday at 5pm", tasks, now)

        assert len(tasks) == 1
        assert tasks[0].id == original_id
        assert tasks[0].title == "Call dad"
        assert tasks[0].due_date == "2025-01-10"
        assert 'Task created: "Call dad"' in reply

    def test_edit_without_match_adds_task(self, now):
        tasks = [Task(id="x", title="Buy milk")]
        cli.edit("Call mom tomorrow at 3pm", "Call dad friday at 5pm", tasks, now)
        assert [t.title for t in tasks] == ["Call dad", "Buy milk"]

    def test_interactive_edit_command(self, monkeypatch, capsys, now):
        lines = iter(["Call mom tomorrow at 3pm", "edit Call dad friday at 5pm", "topic", "quit"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))

        cli.interactive(now, None)

        out = capsys.readouterr().out
        assert 'Task created: "Call mom"' in out
        assert '✓ Task created: "Call dad"\n📅 Fri, Jan 10 at 5:00 PM' in out
        assert out.rstrip().endswith("Call dad friday at 5pm")

    def test_interactive_edit_before_anything(self, monkeypatch, capsys, now):
        lines = iter(["edit buy milk", "quit"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
        cli.interactive(now, None)
        assert "Nothing to edit yet." in capsys.readouterr().out
