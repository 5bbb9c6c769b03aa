from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from app.constants import STATUS_PATH
from app.services.wall_eno_client import WallEnoClient
from tests.utils.fake_device import FakeDevice

pytest_plugins = ["nicegui.testing.user_plugin"]


if TYPE_CHECKING:
    from collections.abc import AsyncIterator


@pytest.fixture
def fake_device() -> FakeDevice:
    return FakeDevice()


@pytest.fixture
async def device_server(fake_device: FakeDevice) -> AsyncIterator[TestServer]:
    """Serve ``fake_device`` on an ephemeral localhost port."""
    web_app = web.Application()
    web_app.router.add_get(STATUS_PATH, fake_device.handle)
    server = TestServer(web_app)
    await server.start_server()
    try:
        yield server
    finally:
        await server.close()


@pytest.fixture
async def device_client(device_server: TestServer) -> AsyncIterator[WallEnoClient]:
    wall_eno = WallEnoClient(
        base_url=str(device_server.make_url("/")), timeout=1.0
    )
    try:
        yield wall_eno
    finally:
        await wall_eno.close()
