from __future__ import annotations

from typing import Dict

from nicegui import ui


def get_palette() -> Dict[str, str]:
    """Return the green wall-eno palette tokens."""
    return {
        "primary": "#2E7D32",
        "accent": "#4CAF50",
        "muted": "#81C784",
        "bg_from": "#E8F5E9",
        "bg_to": "#F1F8E9",
        "surface": "#FFFFFFCC",
        "negative": "#E53935",
        "negative_text": "#B71C1C",
        "negative_bg": "#FFEBEE",
    }


def _inject_css_vars(p: Dict[str, str]) -> None:
    """Inject global CSS variables and basic background/text mappings."""
    ui.add_css(
        f"""
:root {{
  --we-primary: {p["primary"]};
  --we-accent: {p["accent"]};
  --we-muted: {p["muted"]};
  --we-surface: {p["surface"]};
  --we-negative: {p["negative"]};
  --we-negative-text: {p["negative_text"]};
  --we-negative-bg: {p["negative_bg"]};
}}

body, .q-page {{
  background: linear-gradient(to right, {p["bg_from"]}, {p["bg_to"]});
  color: var(--we-primary);
  font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
}}
"""
    )


def _inject_component_overrides() -> None:
    ui.add_css(
        """
.status-card { background: var(--we-surface); border-radius: 20px; padding: 2em 2.5em; box-shadow: 0 10px 20px rgba(76, 175, 80, 0.4); }
.status-title { font-size: 2.2em; animation: pulse 2.5s infinite; }
.status-value { font-size: 1.3em; font-weight: bold; min-width: 5em; text-align: right; }
.status-extra { color: var(--we-accent); }
.error-block { margin-top: 1.5em; padding: 1em 1.4em; border-radius: 15px; background: var(--we-negative-bg); color: var(--we-negative-text); font-weight: 600; border-left: 6px solid var(--we-negative); border-right: 6px solid var(--we-negative); }
.error-block::before { content: "⚠️"; font-size: 1.3em; margin-right: 0.3em; }
.status-footer { margin-top: 2.5em; font-size: 0.9em; color: var(--we-muted); }

@keyframes pulse {
  0% { transform: scale(1); opacity: 1; }
  50% { transform: scale(1.05); opacity: 0.75; }
  100% { transform: scale(1); opacity: 1; }
}
"""
    )


def apply_theme() -> None:
    """Set Quasar colors and inject the page CSS for the current client."""
    pal = get_palette()
    ui.colors(
        primary=pal["primary"],
        accent=pal["accent"],
        negative=pal["negative"],
    )
    _inject_css_vars(pal)
    _inject_component_overrides()
