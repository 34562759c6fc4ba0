"""
Integration tests running the bridge client against a local JSON-RPC server.
"""

import asyncio

import pytest
import pytest_asyncio
from aiohttp import web

from sidebridge.client import BridgeClient, BridgeConfig, JSONRPCTransport
from sidebridge.errors import RPCError

HASH_A = "a" * 64
HASH_B = "b" * 64


class FakeMainchain:
    """Minimal mainchain daemon answering a few RPC methods."""

    def __init__(self):
        self.requests = []
        self.block_count = 101

    async def handle(self, request: web.Request) -> web.Response:
        self.requests.append(
            {"auth": request.headers.get("Authorization"), "body": await request.json()}
        )
        body = self.requests[-1]["body"]
        method = body["method"]

        if method == "getblockcount":
            return web.json_response(
                {"result": self.block_count, "error": None, "id": body["id"]}
            )
        if method == "verifybmm":
            return web.json_response(
                {"result": {"txid": HASH_B}, "error": None, "id": body["id"]}
            )
        if method == "slow":
            await asyncio.sleep(1)
            return web.json_response({"result": None, "error": None, "id": body["id"]})
        if method == "broken":
            return web.Response(status=503, text="unavailable")

        return web.json_response(
            {
                "result": None,
                "error": {"code": -32601, "message": "Method not found"},
                "id": body["id"],
            },
            status=404,
        )


@pytest_asyncio.fixture
async def mainchain():
    """Start a fake mainchain daemon on a free port."""
    daemon = FakeMainchain()
    app = web.Application()
    app.router.add_post("/", daemon.handle)
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", 0)
    await site.start()
    daemon.port = runner.addresses[0][1]
    yield daemon
    await runner.cleanup()


class TestBridgeRPC:
    """Test the client over a real HTTP transport."""

    @pytest.mark.asyncio
    async def test_verify_bmm(self, mainchain):
        """Test a full round trip with auth and payload."""
        config = BridgeConfig.from_options(
            {"host": "127.0.0.1", "port": mainchain.port, "username": "u", "password": "p"}
        )

        async with BridgeClient(config) as client:
            result = await client.verify_bmm(HASH_A, HASH_B, 0)

        assert result == {"txid": HASH_B}
        assert len(mainchain.requests) == 1
        request = mainchain.requests[0]
        assert request["body"]["method"] == "verifybmm"
        assert request["body"]["params"] == [HASH_A, HASH_B, 0]
        assert request["auth"].startswith("Basic ")

    @pytest.mark.asyncio
    async def test_is_connected(self, mainchain):
        """Test the connection heuristic against a live server."""
        config = BridgeConfig.from_options({"host": "127.0.0.1", "port": mainchain.port})
        client = BridgeClient(config)

        assert await client.is_connected() is True
        mainchain.block_count = 0
        assert await client.is_connected() is False

        await client.close()

    @pytest.mark.asyncio
    async def test_rpc_error(self, mainchain):
        """Test that daemon errors carry the remote code and message."""
        config = BridgeConfig.from_options({"host": "127.0.0.1", "port": mainchain.port})

        async with BridgeClient(config) as client:
            with pytest.raises(RPCError) as exc_info:
                await client.get_sidechain_tip(0)

        assert exc_info.value.code == -32601
        assert exc_info.value.message == "Method not found"
        assert exc_info.value.rpc_method == "listsidechainctip"
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_http_error(self, mainchain):
        """Test that non-JSON HTTP failures surface as RPCError."""
        transport = JSONRPCTransport(f"http://127.0.0.1:{mainchain.port}")
        try:
            with pytest.raises(RPCError) as exc_info:
                await transport.execute("/", "broken", [])
        finally:
            await transport.close()

        assert exc_info.value.status_code == 503
        assert exc_info.value.code is None

    @pytest.mark.asyncio
    async def test_timeout(self, mainchain):
        """Test that transport timeouts surface as RPCError."""
        transport = JSONRPCTransport(f"http://127.0.0.1:{mainchain.port}", timeout=0.1)
        try:
            with pytest.raises(RPCError) as exc_info:
                await transport.execute("/", "slow", [])
        finally:
            await transport.close()

        assert exc_info.value.retryable

    @pytest.mark.asyncio
    async def test_connection_refused(self):
        """Test that an unreachable daemon surfaces as RPCError."""
        config = BridgeConfig.from_options({"host": "127.0.0.1", "port": 1})

        async with BridgeClient(config) as client:
            with pytest.raises(RPCError):
                await client.get_block_count()
            assert await client.is_connected() is False

    @pytest.mark.asyncio
    async def test_concurrent_calls(self, mainchain):
        """Test concurrent operations on one client."""
        config = BridgeConfig.from_options({"host": "127.0.0.1", "port": mainchain.port})

        async with BridgeClient(config) as client:
            results = await asyncio.gather(
                *(client.get_block_count() for _ in range(5))
            )

        assert results == [101] * 5
        ids = [request["body"]["id"] for request in mainchain.requests]
        assert sorted(ids) == [1, 2, 3, 4, 5]
