"""
ShopDesk Backend: Middleware Tests
==================================

What:  Request ID acceptance rules and the access log lines.
"""

import logging

import pytest

from shopdesk.middleware.logging import level_for_status
from shopdesk.middleware.request_id import accept_client_id, new_request_id


class TestRequestId:

    @pytest.mark.parametrize("value", ["abc12345", "order-42", "a.b_c", "x" * 64])
    def test_well_formed_client_id_accepted(self, value):
        assert accept_client_id(value) == value

    @pytest.mark.parametrize("value", [None, "", "x" * 65, "has space", "line\nbreak", "semi;colon"])
    def test_malformed_client_id_rejected(self, value):
        assert accept_client_id(value) is None

    def test_generated_id_is_short_hex(self):
        rid = new_request_id()
        assert len(rid) == 8
        int(rid, 16)

    @pytest.mark.asyncio
    async def test_malformed_client_id_replaced(self, test_client):
        response = await test_client.get("/getBills", headers={"X-Request-ID": "bad id!"})

        rid = response.headers["x-request-id"]
        assert rid != "bad id!"
        assert len(rid) == 8

    @pytest.mark.asyncio
    async def test_error_body_carries_request_id(self, test_client):
        response = await test_client.get("/product/999", headers={"X-Request-ID": "trace-7"})

        assert response.status_code == 404
        assert response.json()["request_id"] == "trace-7"


class TestAccessLog:

    @pytest.mark.parametrize(
        "status, level",
        [(200, logging.INFO), (302, logging.INFO), (404, logging.WARNING), (500, logging.ERROR)],
    )
    def test_level_for_status(self, status, level):
        assert level_for_status(status) == level

    @pytest.mark.asyncio
    async def test_api_request_logged(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="shopdesk.access"):
            await test_client.get("/getBills", headers={"X-Request-ID": "log-1"})

        records = [r for r in caplog.records if r.name == "shopdesk.access"]
        assert len(records) == 1
        assert records[0].status == 200
        assert records[0].request_id == "log-1"
        assert "GET /getBills 200" in records[0].getMessage()

    @pytest.mark.asyncio
    async def test_upload_size_logged(self, test_client, rice_fields, caplog):
        body = "&".join(f"{k}={v}" for k, v in rice_fields.items())

        with caplog.at_level(logging.INFO, logger="shopdesk.access"):
            response = await test_client.post(
                "/addProduct",
                content=body,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )

        assert response.status_code == 200
        [record] = [r for r in caplog.records if r.name == "shopdesk.access"]
        assert f" {len(body)}B " in record.getMessage()

    @pytest.mark.asyncio
    async def test_static_asset_not_logged(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="shopdesk.access"):
            await test_client.get("/style.css")

        assert not [r for r in caplog.records if r.name == "shopdesk.access"]
