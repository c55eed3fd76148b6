"""
Session title policy.

A new session created from a first question is titled after that question,
cut to a fixed length with an ellipsis.

Dependencies: None
System role: Caller-side title helper for session creation
"""

DEFAULT_TITLE = "New Chat"
TITLE_MAX_LENGTH = 30
ELLIPSIS = "..."


def truncate_title(question: str, max_length: int = TITLE_MAX_LENGTH) -> str:
    """
    Derive a session title from the first question of a conversation.

    Args:
        question: First user message
        max_length: Characters kept before the ellipsis is appended

    Returns:
        str: The question itself when short enough, else its first
        max_length characters followed by "...". Blank input yields the
        default title.
    """
    text = question.strip()
    if not text:
        return DEFAULT_TITLE
    if len(text) > max_length:
        return f"{text[:max_length]}{ELLIPSIS}"
    return text
