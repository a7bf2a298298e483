"""Prompt builders for the Gemini event-extraction call.

The system prompt is fixed: it does not depend on the input text or on the
current date, so the same instruction is sent on every request.
"""

from __future__ import annotations

SYSTEM_PROMPT = """\
Extract the calendar event information from the following text.
Return ONLY a valid JSON object (no additional explanation) with exactly these fields:
- title: the title or subject of the event
- startDate: the start date in ISO format (YYYY-MM-DD)
- startTime: the start time in 24-hour format (HH:mm)
- location: the location of the event
- description: a description or additional details

If a field is not present in the text, return null for that field.

IMPORTANT: Your reply must contain ONLY the JSON object, with no additional text.
Example of a valid reply:
{"title": "Meeting", "startDate": "2025-03-22", "startTime": "09:30", "location": "Head office", "description": "Bring the documents"}
"""


def build_system_prompt() -> str:
    """Return the fixed system instruction for the extraction call."""
    return SYSTEM_PROMPT


def build_user_prompt(text: str) -> str:
    """Build the user message carrying the raw event text.

    The text is passed through as-is apart from trimming surrounding
    whitespace; the model sees exactly what the user wrote.

    Args:
        text: Free-form description of the event.

    Returns:
        The user prompt string.
    """
    return text.strip()
