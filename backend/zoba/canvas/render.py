"""
Renderer contract for the diagram canvas.

Renderers never raise on bad diagram source: a rejected diagram is a
`RenderSyntaxError` value, which is what offers the syntax-fix escalation.
Only infrastructure failures (renderer unreachable) raise.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Protocol

import httpx

from zoba.agent.extraction import detect_diagram_type
from zoba.canvas.config import CanvasConfig
from zoba.errors import RenderUnavailable

logger = logging.getLogger(__name__)

PLACEHOLDER_TEXT = "No diagram code available"

FLOWCHART_DIRECTIONS = {"TB", "TD", "BT", "RL", "LR"}
SEQUENCE_BLOCKS = ("loop", "alt", "opt", "par", "critical", "break", "rect", "box")
BRACE_DIAGRAMS = {"classDiagram", "stateDiagram", "stateDiagram-v2"}
_BRACKET_PAIRS = {"[": "]", "(": ")", "{": "}"}
_LINE_NUMBER = re.compile(r"line\s+(\d+)", re.IGNORECASE)


@dataclass(frozen=True)
class RenderOk:
    output: str
    placeholder: bool = False
    diagram_type: str | None = None
    ok: bool = True


@dataclass(frozen=True)
class RenderSyntaxError:
    message: str
    line: int | None = None
    ok: bool = False


RenderResult = RenderOk | RenderSyntaxError


class DiagramRenderer(Protocol):
    async def render(self, source: str, config: CanvasConfig | None = None) -> RenderResult: ...


def _placeholder() -> RenderOk:
    return RenderOk(output=PLACEHOLDER_TEXT, placeholder=True)


def _parse_error(line: int, detail: str) -> RenderSyntaxError:
    return RenderSyntaxError(message=f"Parse error on line {line}: {detail}", line=line)


_HTML_TAG = re.compile(r"</?[A-Za-z][^<>]*/?>")
_EDGE_LABEL = re.compile(r"\|[^|]*\|")
# Node id at the start of a node token, right before the ">" of id>text].
_ASYMMETRIC_OPENER = re.compile(r"(?:^|[\s&;>=.-])[A-Za-z0-9_]+$")


def _strip_quoted(line: str) -> str:
    return re.sub(r'"[^"]*"', '""', line)


def _strip_labels(line: str) -> str:
    return _EDGE_LABEL.sub("||", _HTML_TAG.sub("", _strip_quoted(line)))


def _check_line_brackets(line_no: int, line: str) -> RenderSyntaxError | None:
    stack: list[str] = []
    text = _strip_labels(line)
    for i, ch in enumerate(text):
        if ch == ">" and not stack and _ASYMMETRIC_OPENER.search(text[:i]):
            stack.append("]")
        elif ch in _BRACKET_PAIRS:
            stack.append(_BRACKET_PAIRS[ch])
        elif ch in _BRACKET_PAIRS.values():
            if not stack or stack.pop() != ch:
                return _parse_error(line_no, f"unexpected '{ch}'")
    if stack:
        return _parse_error(line_no, f"expecting '{stack[-1]}', got end of line")
    return None


def _check_flowchart(lines: list[tuple[int, str]]) -> RenderSyntaxError | None:
    header_no, header = lines[0]
    tokens = header.split()
    if len(tokens) > 1 and tokens[1].rstrip(";") not in FLOWCHART_DIRECTIONS:
        return _parse_error(header_no, f"invalid direction '{tokens[1]}'")

    open_blocks: list[int] = []
    for line_no, line in lines[1:]:
        stripped = line.strip()
        keyword = stripped.split(maxsplit=1)[0] if stripped else ""
        if keyword == "subgraph":
            open_blocks.append(line_no)
            continue
        if stripped == "end":
            if not open_blocks:
                return _parse_error(line_no, "'end' without an open subgraph")
            open_blocks.pop()
            continue
        error = _check_line_brackets(line_no, stripped)
        if error:
            return error
    if open_blocks:
        return _parse_error(lines[-1][0], "expecting 'end', got 'EOF'")
    return None


def _check_sequence(lines: list[tuple[int, str]]) -> RenderSyntaxError | None:
    open_blocks: list[int] = []
    for line_no, line in lines[1:]:
        keyword = line.strip().split(maxsplit=1)[0] if line.strip() else ""
        if keyword in SEQUENCE_BLOCKS:
            open_blocks.append(line_no)
        elif keyword == "end":
            if not open_blocks:
                return _parse_error(line_no, "'end' without an open block")
            open_blocks.pop()
    if open_blocks:
        return _parse_error(lines[-1][0], "expecting 'end', got 'EOF'")
    return None


def _check_braces(lines: list[tuple[int, str]]) -> RenderSyntaxError | None:
    depth = 0
    for line_no, line in lines:
        for ch in _strip_quoted(line):
            if ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth < 0:
                    return _parse_error(line_no, "unexpected '}'")
    if depth:
        return _parse_error(lines[-1][0], "expecting '}', got 'EOF'")
    return None


def check_diagram(source: str) -> RenderResult:
    """Structural check of diagram source; no layout or SVG output."""
    if not source or not source.strip():
        return _placeholder()

    diagram_type = detect_diagram_type(source)
    numbered = [
        (index, line)
        for index, line in enumerate(source.splitlines(), start=1)
        if line.strip() and not line.strip().startswith("%%")
    ]
    if diagram_type is None:
        first_no, first_line = numbered[0] if numbered else (1, source.strip())
        return _parse_error(
            first_no,
            f"No diagram type detected matching given configuration for text: {first_line.strip()[:80]}",
        )

    # Skip front matter so line numbers still match the original source.
    while numbered and detect_diagram_type(numbered[0][1]) != diagram_type:
        numbered.pop(0)
    if not numbered:
        return RenderOk(output=source.strip(), diagram_type=diagram_type)

    error: RenderSyntaxError | None = None
    if diagram_type in ("flowchart", "graph"):
        error = _check_flowchart(numbered)
    elif diagram_type == "sequenceDiagram":
        error = _check_sequence(numbered)
    elif diagram_type in BRACE_DIAGRAMS or diagram_type.startswith("C4"):
        error = _check_braces(numbered)
    if error:
        return error
    return RenderOk(output=source.strip(), diagram_type=diagram_type)


class StructuralRenderer:
    """Offline renderer: validates structure and echoes the source back."""

    async def render(self, source: str, config: CanvasConfig | None = None) -> RenderResult:
        return check_diagram(source)


def with_init_directive(source: str, config: CanvasConfig) -> str:
    """Prefix the source with a Mermaid init directive unless it already configures itself."""
    stripped = source.lstrip()
    if stripped.startswith("---") or stripped.startswith("%%{"):
        return source
    directive = json.dumps(config.to_mermaid_config(), separators=(",", ":"))
    return f"%%{{init: {directive}}}%%\n{source}"


class HttpRenderer:
    """Renders to SVG through a Kroki-compatible service (POST {base}/mermaid/svg)."""

    def __init__(self, base_url: str, timeout: float = 10.0, client: httpx.AsyncClient | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    async def _post(self, client: httpx.AsyncClient, body: str) -> httpx.Response:
        return await client.post(
            f"{self.base_url}/mermaid/svg",
            content=body.encode("utf-8"),
            headers={"Content-Type": "text/plain"},
        )

    async def render(self, source: str, config: CanvasConfig | None = None) -> RenderResult:
        if not source or not source.strip():
            return _placeholder()

        body = with_init_directive(source, config or CanvasConfig())
        try:
            if self._client is not None:
                response = await self._post(self._client, body)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await self._post(client, body)
        except httpx.HTTPError as e:
            logger.error("Renderer request to %s failed: %s", self.base_url, e)
            raise RenderUnavailable(str(e)) from e

        if response.status_code == 200:
            return RenderOk(output=response.text, diagram_type=detect_diagram_type(source))
        if 400 <= response.status_code < 500:
            message = response.text.strip() or "Diagram could not be rendered"
            match = _LINE_NUMBER.search(message)
            return RenderSyntaxError(message=message, line=int(match.group(1)) if match else None)

        logger.error("Renderer at %s answered %s", self.base_url, response.status_code)
        raise RenderUnavailable(f"renderer answered HTTP {response.status_code}")


def get_renderer() -> DiagramRenderer:
    from zoba.core.config import settings

    if settings.RENDERER_URL:
        return HttpRenderer(settings.RENDERER_URL, timeout=settings.RENDERER_TIMEOUT_SECONDS)
    return StructuralRenderer()
