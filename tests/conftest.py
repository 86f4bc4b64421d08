import asyncio
import json
import time

import pytest
import pytest_asyncio
from aiohttp import test_utils, web

from models.settings import Settings

TOKEN = "89abcdef-789a-bcde-f012-456789abcdef"
LONG_BOT_ID = 1234567
SHORT_BOT_ID = 7654321


class FakeBotApi:
    """In-process stand-in for the 3Commas trade-signal endpoint.

    ``statuses`` / ``delays`` / ``bodies`` are consumed per request, in
    arrival order; ``bodies`` entries are raw bytes sent as utf-8 text.
    """

    def __init__(self, path: str):
        self.path = path
        self.statuses = []
        self.delays = []
        self.bodies = []
        self.requests = []
        self.base_url = ""
        self.app = web.Application()
        self.app.router.add_post(path, self._handle)

    async def _handle(self, request: web.Request) -> web.Response:
        received_at = time.monotonic()
        idx = len(self.requests)
        record = {
            "received_at": received_at,
            "finished_at": None,
            "content_type": request.content_type,
            "raw": await request.text(),
        }
        record["json"] = json.loads(record["raw"])
        self.requests.append(record)

        delay = self.delays[idx] if idx < len(self.delays) else 0
        if delay:
            await asyncio.sleep(delay)
        status = self.statuses[idx] if idx < len(self.statuses) else 200
        record["finished_at"] = time.monotonic()
        if idx < len(self.bodies):
            return web.Response(
                status=status, body=self.bodies[idx], content_type="text/plain", charset="utf-8"
            )
        return web.Response(status=status, text="Success!" if status < 300 else "Fail!")


# ------------------------- Fixtures ------------------------- #

@pytest.fixture
def settings():
    return Settings(
        long_bot_id=LONG_BOT_ID,
        short_bot_id=SHORT_BOT_ID,
        email_token=TOKEN,
    )


@pytest_asyncio.fixture
async def bot_api(settings):
    api = FakeBotApi(settings.request_path)
    server = test_utils.TestServer(api.app)
    await server.start_server()
    api.base_url = f"http://{server.host}:{server.port}"
    yield api
    await server.close()


@pytest.fixture
def dead_server_url(unused_tcp_port):
    return f"http://127.0.0.1:{unused_tcp_port}"
