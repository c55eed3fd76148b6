"""
LangChain message text extraction.

Chat model responses carry either a plain string or a list of content
blocks; only the text parts matter here.
"""

from typing import Any


def message_text(message: Any) -> str:
    """Return the concatenated text of a LangChain message (or raw string)."""
    content = getattr(message, "content", message)
    if content is None:
        return ""
    if isinstance(content, str):
        return content.strip()
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts).strip()
