from dataclasses import dataclass
from typing import Any, Literal

MermaidTheme = Literal["default", "forest", "dark", "neutral", "base"]

MERMAID_THEMES: tuple[str, ...] = ("default", "forest", "dark", "neutral", "base")

# Theme variables applied with the "base" theme so rendered diagrams match the house palette.
BASE_THEME_VARIABLES: dict[str, str] = {
    "background": "#FAFAFF",  # Ghost White
    "mainBkg": "#FAFAFF",
    "nodeBorder": "#273469",  # Delft Blue
    "nodeBkg": "#FAFAFF",
    "primaryTextColor": "#1B264F",  # Space Cadet
    "secondaryTextColor": "#576490",  # Gunmetal
    "lineColor": "#273469",
    "arrowheadColor": "#273469",
    "clusterBkg": "#E4D9FF",  # Periwinkle
    "clusterBorder": "#273469",
    "edgeLabelBackground": "#E4D9FF",
    "nodeTextColor": "#1B264F",
    "titleColor": "#1B264F",
    "edgeColor": "#273469",
    "labelTextColor": "#576490",
    "labelBoxBkgColor": "#E4D9FF",
    "labelBoxBorderColor": "#273469",
    "labelTextSize": "10px",
    "fillColor": "#FAFAFF",
    "tertiaryColor": "#FAFAFF",
}


@dataclass(frozen=True)
class CanvasConfig:
    """Rendering options passed explicitly to every render call."""

    theme: MermaidTheme | None = None
    dark_mode: bool = False
    font_family: str = "Inter"
    security_level: str = "loose"

    @property
    def resolved_theme(self) -> str:
        if self.theme:
            return self.theme
        return "dark" if self.dark_mode else "default"

    def to_mermaid_config(self) -> dict[str, Any]:
        config: dict[str, Any] = {
            "startOnLoad": True,
            "theme": self.resolved_theme,
            "securityLevel": self.security_level,
            "fontFamily": self.font_family,
        }
        if self.resolved_theme == "base":
            config["themeVariables"] = dict(BASE_THEME_VARIABLES)
        return config
