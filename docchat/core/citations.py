"""
Citation line parsing.

The answer prompt asks the model to end its answer with optional lines such as

    Source: report.pdf, appendix.pdf
    Page: 4
    Section: Results
    Paragraph: 2

This module strips that trailing block from the answer and returns the
fields in the shape of the proxy response.

Dependencies: re
System role: Answer post-processing for the answer proxy
"""

import re
from typing import Any

_CITATION_LINE = re.compile(
    r"^\s*(?:[-*]\s*)?\**(sources?|pages?|section|paragraph)\**\s*:\s*\**\s*(.*?)\s*$",
    re.IGNORECASE,
)

_FIELD_BY_LABEL = {
    "source": "source_documents",
    "sources": "source_documents",
    "page": "page_number",
    "pages": "page_number",
    "section": "section_info",
    "paragraph": "paragraph_info",
}


def _split_sources(value: str) -> list[str]:
    return [name.strip() for name in re.split(r"[;,]", value) if name.strip()]


def parse_citations(answer: str) -> tuple[str, dict[str, Any]]:
    """
    Split an answer into body text and trailing citation fields.

    Args:
        answer: Raw model output

    Returns:
        tuple: (answer text without the citation block, dict with any of
        source_documents, page_number, section_info, paragraph_info)
    """
    lines = answer.rstrip().splitlines()
    fields: dict[str, Any] = {}

    while lines:
        line = lines[-1]
        if not line.strip():
            if not fields:
                break
            lines.pop()
            continue
        match = _CITATION_LINE.match(line)
        if not match:
            break
        field = _FIELD_BY_LABEL[match.group(1).lower()]
        value = match.group(2).strip()
        lines.pop()
        if not value or value.lower() in ("n/a", "none"):
            continue
        # Innermost (first) occurrence wins when a label repeats
        if field == "source_documents":
            fields[field] = _split_sources(value)
        else:
            fields[field] = value

    body = "\n".join(lines).rstrip()
    if not body:
        return answer.strip(), {}
    return body, fields
