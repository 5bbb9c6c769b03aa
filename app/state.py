from dataclasses import dataclass
from typing import Union

from nicegui import binding

from app.constants import PLACEHOLDER

Reading = Union[int, float, str]


@dataclass(frozen=True)
class StatusSnapshot:
    """One decoded /wall-eno/json-status document."""

    home_power: float  # kW, display-rounded by the device
    home_raw: Reading  # unrounded sensor reading
    wallbox_power: float  # kW, limit imposed on the wallbox
    wallbox_current: float  # A
    error: str = ""  # device-reported condition, empty when healthy


# View-state for one dashboard page; fields are bound to the labels
@binding.bindable_dataclass
class DisplayState:
    home_power: Reading = PLACEHOLDER
    home_raw: Reading = PLACEHOLDER
    wallbox_power: Reading = PLACEHOLDER
    wallbox_current: Reading = PLACEHOLDER
    error: str = ""
    last_update_ts: float = 0.0
