"""
Transcript entries and the parser for the finalized transcript.

After a call ends the vendor post-processes it into a single string with one
speaker turn per line, e.g.::

    Agent: Welcome to the restaurant.
    User: What do you recommend?

``split_finalized_transcript`` turns that string into ordered entries using
the same roles as the live transcript.
"""

import re
from typing import List, Literal, Pattern

from pydantic import BaseModel

from voicechat.config.constants import ROLE_ASSISTANT, ROLE_USER

TURN_PATTERN: Pattern = re.compile(r"^(Agent|User):[ \t]*(.*)$", re.MULTILINE)

SPEAKER_ROLES = {
    "Agent": ROLE_ASSISTANT,
    "User": ROLE_USER,
}


class TranscriptEntry(BaseModel):
    """One line of the conversation."""

    role: Literal["user", "assistant"]
    text: str


def split_finalized_transcript(transcript: str) -> List[TranscriptEntry]:
    """
    Split a finalized transcript string into entries.

    Lines that do not start with a speaker label are continuation lines and
    are appended to the previous entry. Text before the first labelled line is
    dropped.

    Args:
        transcript: The vendor's finalized transcript

    Returns:
        Entries in the order they appear in the transcript
    """
    entries: List[TranscriptEntry] = []
    matches = list(TURN_PATTERN.finditer(transcript))

    for index, match in enumerate(matches):
        end = matches[index + 1].start() if index + 1 < len(matches) else len(transcript)
        continuation = transcript[match.end():end].strip()

        text = match.group(2).strip()
        if continuation:
            text = f"{text}\n{continuation}" if text else continuation

        entries.append(TranscriptEntry(role=SPEAKER_ROLES[match.group(1)], text=text))

    return entries
