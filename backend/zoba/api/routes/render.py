import logging
from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from zoba.api.deps import RendererDep
from zoba.canvas.config import CanvasConfig, MermaidTheme
from zoba.canvas.render import RenderSyntaxError
from zoba.canvas.viewport import Viewport, svg_dimensions
from zoba.errors import RenderUnavailable

router = APIRouter()
logger = logging.getLogger(__name__)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RenderRequest(_CamelModel):
    code: str = ""
    theme: MermaidTheme | None = None
    dark_mode: bool = False
    container_width: float | None = Field(default=None, gt=0)
    container_height: float | None = Field(default=None, gt=0)


class ViewportPayload(_CamelModel):
    scale: float
    x: float
    y: float
    transform: str


class RenderResponse(_CamelModel):
    ok: bool
    placeholder: bool = False
    output: str | None = None
    diagram_type: str | None = None
    error: str | None = None
    line: int | None = None
    can_fix: bool = False
    config: dict[str, Any]
    viewport: ViewportPayload | None = None


def _viewport_payload(viewport: Viewport) -> ViewportPayload:
    return ViewportPayload(
        scale=viewport.scale,
        x=viewport.x,
        y=viewport.y,
        transform=viewport.css_transform(),
    )


@router.post("/", response_model=RenderResponse, response_model_by_alias=True)
async def render_diagram(body: RenderRequest, renderer: RendererDep) -> RenderResponse:
    """
    Render diagram source. A rejected diagram is a normal 200 response with
    `ok=false` and `canFix=true` so the client can offer the syntax fix.
    """
    config = CanvasConfig(theme=body.theme, dark_mode=body.dark_mode)
    try:
        result = await renderer.render(body.code, config)
    except RenderUnavailable as e:
        raise HTTPException(status_code=503, detail=e.message)

    if isinstance(result, RenderSyntaxError):
        return RenderResponse(
            ok=False,
            error=result.message,
            line=result.line,
            can_fix=bool(body.code.strip()),
            config=config.to_mermaid_config(),
        )

    viewport = None
    if body.container_width and body.container_height and not result.placeholder:
        dimensions = svg_dimensions(result.output)
        if dimensions:
            fitted = Viewport.fit(*dimensions, body.container_width, body.container_height)
            viewport = _viewport_payload(fitted)
    return RenderResponse(
        ok=True,
        placeholder=result.placeholder,
        output=result.output,
        diagram_type=result.diagram_type,
        config=config.to_mermaid_config(),
        viewport=viewport,
    )


class ViewportUpdateRequest(_CamelModel):
    scale: float = Field(default=1.0, gt=0)
    x: float = 0.0
    y: float = 0.0
    wheel_delta_y: float | None = None
    dx: float = 0.0
    dy: float = 0.0
    reset: bool = False


@router.post("/viewport", response_model=ViewportPayload, response_model_by_alias=True)
def update_viewport(body: ViewportUpdateRequest) -> ViewportPayload:
    """
    Apply one canvas gesture to the current transform: `reset`, or a drag
    (`dx`/`dy`) followed by a wheel zoom (`wheelDeltaY`).
    """
    viewport = Viewport(scale=body.scale, x=body.x, y=body.y)
    if body.reset:
        return _viewport_payload(viewport.reset())
    viewport = viewport.pan(body.dx, body.dy)
    if body.wheel_delta_y is not None:
        viewport = viewport.zoom(body.wheel_delta_y)
    return _viewport_payload(viewport)
