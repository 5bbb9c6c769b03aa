from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from app import main
from app.services.wall_eno_client import ProtocolError, parse_status
from tests.utils.fakes import ScriptedStatusClient
from tests.utils.types import status_document

if TYPE_CHECKING:
    from nicegui.testing import User
    from pytest import MonkeyPatch


@pytest.mark.unit
@pytest.mark.module_under_test(main)
async def test_page_renders_status_document(user: User, monkeypatch: MonkeyPatch):
    """Open the real page against a scripted device and check the four readouts."""
    fake = ScriptedStatusClient(parse_status(status_document()))
    monkeypatch.setattr(main, "client", fake, raising=True)

    await user.open("/")

    await user.should_see("2.3 kW", retries=20)
    await user.should_see("(raw: 2312)")
    await user.should_see("7.4 kW")
    await user.should_see("(32 A)")
    await user.should_not_see("Failed to update wall-eno status")
    await user.should_not_see(marker="error-block")
    assert fake.calls >= 1


@pytest.mark.unit
@pytest.mark.module_under_test(main)
async def test_page_shows_prefixed_error_on_http_failure(user: User, monkeypatch: MonkeyPatch):
    fake = ScriptedStatusClient(ProtocolError(500))
    monkeypatch.setattr(main, "client", fake, raising=True)

    await user.open("/")

    await user.should_see("Failed to update wall-eno status: 500", retries=20)
    # Placeholders stay until the first good poll
    await user.should_see("- kW")


@pytest.mark.unit
@pytest.mark.module_under_test(main)
async def test_page_shows_device_error_verbatim(user: User, monkeypatch: MonkeyPatch):
    fake = ScriptedStatusClient(parse_status(status_document(error="wallbox offline")))
    monkeypatch.setattr(main, "client", fake, raising=True)

    await user.open("/")

    await user.should_see("wallbox offline", retries=20)
    await user.should_see("7.4 kW")
    await user.should_not_see("Failed to update wall-eno status")


@pytest.mark.unit
@pytest.mark.module_under_test(main)
async def test_error_block_shows_on_failure_and_hides_after_recovery(
    user: User, monkeypatch: MonkeyPatch
):
    fake = ScriptedStatusClient(ProtocolError(500))
    monkeypatch.setattr(main, "client", fake, raising=True)
    monkeypatch.setattr(main, "RUNTIME_UPDATE_INTERVAL_S", 0.1, raising=True)

    await user.open("/")

    await user.should_see(marker="error-block", retries=20)
    await user.should_see("Failed to update wall-eno status: 500")

    # Device recovers; the next tick settles good data
    fake.outcomes = [parse_status(status_document(home_power=4.2))]

    await user.should_see("4.2 kW", retries=20)
    await user.should_not_see(marker="error-block")


@pytest.mark.unit
@pytest.mark.module_under_test(main)
async def test_integral_floats_render_without_decimal(user: User, monkeypatch: MonkeyPatch):
    fake = ScriptedStatusClient(parse_status(status_document(wallbox_current=32.0)))
    monkeypatch.setattr(main, "client", fake, raising=True)

    await user.open("/")

    await user.should_see("(32 A)", retries=20)
    await user.should_see("2.3 kW")
