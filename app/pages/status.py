from __future__ import annotations

from nicegui import ui

from app.state import DisplayState


def _text(value: object) -> str:
    if value is None:
        return ""
    # JSON 32.0 reads as 32, like the device page shows it
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class StatusPage:
    """wall-eno status card: home consumption, wallbox limit, error block."""

    def __init__(self, state: DisplayState) -> None:
        self.state = state
        # Labels updated by status polling
        self.home_power_label: ui.label | None = None
        self.home_raw_label: ui.label | None = None
        self.wallbox_power_label: ui.label | None = None
        self.wallbox_current_label: ui.label | None = None
        self.error_label: ui.label | None = None

    def build(self) -> None:
        state = self.state
        with ui.column().classes("w-full items-center"):
            with ui.card().classes("status-card items-center"):
                ui.label("⚡wall-eno⚡").classes("status-title")
                with ui.grid(columns=3).classes("items-center gap-x-4 gap-y-2"):
                    ui.label("🏠 Home Consumption:").classes("text-lg")
                    self.home_power_label = (
                        ui.label()
                        .bind_text_from(state, "home_power", backward=lambda v: f"{_text(v)} kW")
                        .classes("status-value")
                        .mark("home-power")
                    )
                    self.home_raw_label = (
                        ui.label()
                        .bind_text_from(state, "home_raw", backward=lambda v: f"(raw: {_text(v)})")
                        .classes("status-extra")
                        .mark("home-raw")
                    )

                    ui.label("🚗 Wallbox Limit:").classes("text-lg")
                    self.wallbox_power_label = (
                        ui.label()
                        .bind_text_from(state, "wallbox_power", backward=lambda v: f"{_text(v)} kW")
                        .classes("status-value")
                        .mark("wallbox-power")
                    )
                    self.wallbox_current_label = (
                        ui.label()
                        .bind_text_from(state, "wallbox_current", backward=lambda v: f"({_text(v)} A)")
                        .classes("status-extra")
                        .mark("wallbox-current")
                    )

                # Hidden while the error text is empty
                self.error_label = (
                    ui.label()
                    .bind_text_from(state, "error")
                    .bind_visibility_from(state, "error", backward=bool)
                    .classes("error-block")
                    .mark("error-block")
                )
                ui.label("🌱 Smart charging powered by wall-eno 🤖").classes("status-footer")
