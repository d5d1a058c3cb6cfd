import io
import os
import signal
import subprocess
import sys
import textwrap
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from voicechat.cli import TranscriptPrinter, format_entry, parse_args, run_conversation
from voicechat.models.transcript import TranscriptEntry


def test_format_entry():
    assert format_entry(TranscriptEntry(role="user", text="hi")) == "You: hi"
    assert format_entry(TranscriptEntry(role="assistant", text="hello")) == "Agent: hello"


def test_printer_prints_only_new_entries():
    out = io.StringIO()
    printer = TranscriptPrinter(out)
    first = TranscriptEntry(role="user", text="one")
    second = TranscriptEntry(role="assistant", text="two")

    printer([first])
    printer([first, second])

    assert out.getvalue() == "You: one\nAgent: two\n"


def test_parse_args(monkeypatch):
    monkeypatch.setenv("VOICECHAT_SERVER_URL", "http://voice.test:9000")
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    args = parse_args(["--prompt", "You are the head chef"])

    assert args.prompt == "You are the head chef"
    assert args.server == "http://voice.test:9000"
    assert args.log_level == "WARNING"


@pytest.mark.asyncio
async def test_run_conversation_failed_start():
    controller = MagicMock()
    controller.start_conversation = AsyncMock(return_value=False)
    controller.hang_up = AsyncMock()

    assert await run_conversation(controller, "") == 1
    controller.hang_up.assert_not_called()


@pytest.mark.asyncio
async def test_run_conversation_stops_on_enter():
    controller = MagicMock()
    controller.start_conversation = AsyncMock(return_value=True)
    controller.hang_up = AsyncMock(return_value=True)

    read_fd, write_fd = os.pipe()
    os.write(write_fd, b"\n")
    with os.fdopen(read_fd) as stdin, patch("sys.stdin", stdin):
        assert await run_conversation(controller, "prompt") == 0
    os.close(write_fd)

    controller.start_conversation.assert_awaited_once_with("prompt")
    controller.hang_up.assert_awaited_once()
    assert controller.on_transcript is None


IDLE_CONVERSATION = textwrap.dedent(
    """
    from voicechat import cli


    class IdleController:
        def __init__(self, *args, **kwargs):
            self.transcript = []
            self.on_transcript = None
            self.on_state_change = None

        async def __aenter__(self):
            return self

        async def __aexit__(self, *exc):
            return False

        async def start_conversation(self, system_prompt):
            return True

        async def hang_up(self):
            return False


    cli.VoiceChatController = IdleController
    cli.main(["--prompt", "x", "--server", "http://127.0.0.1:9"])
    """
)


@pytest.mark.skipif(sys.platform == "win32", reason="needs POSIX signals")
def test_ctrl_c_exits_while_waiting_for_enter(tmp_path):
    """SIGINT ends the CLI even though stdin stays open with no input"""
    root = Path(__file__).resolve().parents[1]
    env = dict(os.environ, PYTHONPATH=str(root), PYTHONUNBUFFERED="1")
    proc = subprocess.Popen(
        [sys.executable, "-c", IDLE_CONVERSATION],
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        cwd=tmp_path,
        env=env,
        text=True,
    )
    try:
        line = proc.stdout.readline()
        assert "Conversation in progress" in line

        proc.send_signal(signal.SIGINT)
        proc.wait(timeout=10)
    finally:
        if proc.poll() is None:
            proc.kill()
        proc.stdin.close()
        proc.stdout.close()
        proc.stderr.close()

    assert proc.returncode == 130
