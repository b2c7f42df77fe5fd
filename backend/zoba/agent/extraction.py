"""Pulling diagram source out of free-text assistant replies."""

import re

# Only fences tagged ``mermaid`` count; untagged fences are treated as prose.
_MERMAID_FENCE = re.compile(
    r"```[ \t]*mermaid[ \t]*\r?\n(.*?)\r?\n?[ \t]*```",
    re.DOTALL | re.IGNORECASE,
)

DIAGRAM_KEYWORDS: tuple[str, ...] = (
    "flowchart",
    "graph",
    "sequenceDiagram",
    "classDiagram",
    "stateDiagram-v2",
    "stateDiagram",
    "erDiagram",
    "journey",
    "gantt",
    "pie",
    "quadrantChart",
    "requirementDiagram",
    "gitGraph",
    "C4Context",
    "C4Container",
    "C4Component",
    "C4Dynamic",
    "C4Deployment",
    "mindmap",
    "timeline",
    "zenuml",
    "sankey-beta",
    "xychart-beta",
    "block-beta",
    "packet-beta",
    "architecture-beta",
    "kanban",
)

_FRONT_MATTER = re.compile(r"\A---\s*\n.*?\n---\s*\n", re.DOTALL)
_INIT_DIRECTIVE = re.compile(r"\A(?:%%\{.*?\}%%\s*)+", re.DOTALL)


def extract_diagram_source(reply: str) -> str | None:
    """Return the trimmed body of the first ```mermaid fence in ``reply``, or None."""
    if not reply:
        return None
    match = _MERMAID_FENCE.search(reply)
    if not match:
        return None
    source = match.group(1).strip()
    return source or None


def _strip_preamble(source: str) -> str:
    text = source.lstrip()
    text = _FRONT_MATTER.sub("", text, count=1)
    text = _INIT_DIRECTIVE.sub("", text, count=1)
    lines = [line for line in text.splitlines() if line.strip() and not line.strip().startswith("%%")]
    return lines[0].strip() if lines else ""


def detect_diagram_type(source: str) -> str | None:
    """Return the declared diagram keyword, skipping front matter, init directives and comments."""
    first_line = _strip_preamble(source or "")
    if not first_line:
        return None
    head = first_line.split(maxsplit=1)[0]
    for keyword in DIAGRAM_KEYWORDS:
        if head == keyword or head.lower() == keyword.lower():
            return keyword
    return None
