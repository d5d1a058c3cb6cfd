"""
Terminal front end for the voice-chat controller.

Usage:
    python -m voicechat.cli [--prompt PROMPT] [--server URL] [--log-level LEVEL]

The conversation starts once a system prompt is given, prints each transcript
line as it arrives and ends when Enter is pressed (or the call drops). After
hangup the finalized transcript is printed.
"""

import argparse
import asyncio
import os
import sys
import threading
from typing import List

from voicechat.client.voice_chat_controller import VoiceChatController
from voicechat.config.logging_config import configure_logging
from voicechat.config.settings import get_settings
from voicechat.models.transcript import TranscriptEntry
from voicechat.services.session_client import SessionClient

PROMPT_PLACEHOLDER = "You are the head chef at a famous Japanese restaurant..."

SPEAKER_LABELS = {
    "user": "You",
    "assistant": "Agent",
}


def format_entry(entry: TranscriptEntry) -> str:
    return f"{SPEAKER_LABELS[entry.role]}: {entry.text}"


class TranscriptPrinter:
    """Prints transcript entries that have not been printed yet."""

    def __init__(self, out=sys.stdout):
        self.out = out
        self.printed = 0

    def __call__(self, entries: List[TranscriptEntry]) -> None:
        if len(entries) < self.printed:
            self.printed = 0
        for entry in entries[self.printed:]:
            print(format_entry(entry), file=self.out, flush=True)
        self.printed = len(entries)

    def print_all(self, title: str, entries: List[TranscriptEntry]) -> None:
        print(f"\n{title}", file=self.out)
        for entry in entries:
            print(format_entry(entry), file=self.out)
        self.printed = len(entries)


def alert(message: str) -> None:
    print(f"[!] {message}", file=sys.stderr, flush=True)


def wait_for_enter() -> asyncio.Event:
    """
    Watch stdin for Enter on a daemon thread.

    The returned event is set on the running loop once a line (or EOF) is read.
    The thread is a daemon reading the raw descriptor, so a pending read holds
    no interpreter locks and does not block exit on Ctrl+C.
    """
    loop = asyncio.get_running_loop()
    pressed = asyncio.Event()

    fd = sys.stdin.fileno()

    def read_line() -> None:
        while True:
            data = os.read(fd, 1024)
            if not data or b"\n" in data:
                break
        if not loop.is_closed():
            loop.call_soon_threadsafe(pressed.set)

    threading.Thread(target=read_line, name="stdin-reader", daemon=True).start()
    return pressed


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Talk to a Retell agent from the terminal")
    parser.add_argument("--prompt", help="System prompt for the agent (asked for when omitted)")
    parser.add_argument(
        "--server",
        default=get_settings().server_url,
        help="Session-setup server URL (default: VOICECHAT_SERVER_URL or http://localhost:8000)",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING or LOG_LEVEL env var)",
    )
    return parser.parse_args(argv)


async def run_conversation(controller: VoiceChatController, system_prompt: str) -> int:
    ended = asyncio.Event()

    def on_state_change(active: bool) -> None:
        if not active:
            ended.set()

    controller.on_state_change = on_state_change

    if not await controller.start_conversation(system_prompt):
        return 1

    print("Conversation in progress... press Enter to stop.", flush=True)
    pressed = wait_for_enter()
    enter = asyncio.create_task(pressed.wait())
    dropped = asyncio.create_task(ended.wait())
    await asyncio.wait({enter, dropped}, return_when=asyncio.FIRST_COMPLETED)
    if not enter.done():
        print("The call was disconnected. Press Enter to finish.", flush=True)
        await enter
    dropped.cancel()

    print("Conversation has ended. Waiting for the final transcript...", flush=True)
    controller.on_transcript = None
    await controller.hang_up()
    return 0


async def main_async(args) -> int:
    system_prompt = args.prompt
    if system_prompt is None:
        system_prompt = input(f"Enter a system prompt for the AI\n({PROMPT_PLACEHOLDER})\n> ")

    printer = TranscriptPrinter()
    session_client = SessionClient(args.server)
    try:
        async with VoiceChatController(
            session_client, on_transcript=printer, on_alert=alert
        ) as controller:
            status = await run_conversation(controller, system_prompt)
            if controller.transcript:
                printer.print_all("Transcript:", controller.transcript)
            return status
    finally:
        session_client.close()


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.log_level, stream=sys.stderr)
    try:
        sys.exit(asyncio.run(main_async(args)))
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
