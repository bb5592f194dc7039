"""Tests for ResponseWriter and the envelope helpers."""

import json

import pytest

from app.exceptions import NotFoundError
from app.http.response import ResponseWriter, error_envelope, error_response, success_envelope


class RecordingSend:
    def __init__(self):
        self.messages = []

    async def __call__(self, message):
        self.messages.append(message)

    @property
    def start(self):
        return self.messages[0]

    @property
    def headers(self):
        return {k.decode(): v.decode() for k, v in self.start["headers"]}

    @property
    def body(self):
        return b"".join(m.get("body", b"") for m in self.messages[1:])


class TestEnvelopes:

    def test_success_envelope_with_data_and_message(self):
        envelope = success_envelope(data=[1], message="done")
        assert envelope["success"] is True
        assert envelope["data"] == [1]
        assert envelope["message"] == "done"
        assert envelope["timestamp"].endswith("Z")

    def test_success_envelope_omits_missing_fields(self):
        envelope = success_envelope(message="Business deleted successfully")
        assert "data" not in envelope

    def test_success_envelope_keeps_explicit_none_data(self):
        assert success_envelope(data=None)["data"] is None

    def test_error_envelope(self):
        envelope = error_envelope("invalid_input", "price: Field required")
        assert envelope["success"] is False
        assert envelope["error"] == "invalid_input"
        assert envelope["message"] == "price: Field required"

    def test_error_response_uses_exception_status(self):
        response = error_response(NotFoundError(resource="business", resource_id="x"))
        assert response.status_code == 404
        body = json.loads(response.body)
        assert body["error"] == "not_found"
        assert body["message"] == "Business with ID 'x' was not found"


class TestResponseWriter:

    def setup_method(self):
        self.send = RecordingSend()
        self.writer = ResponseWriter(self.send)

    @pytest.mark.asyncio
    async def test_json_sends_status_headers_and_body(self):
        await self.writer.json(201, {"success": True})
        assert self.send.start["status"] == 201
        assert self.send.headers["content-type"] == "application/json"
        assert self.send.headers["content-length"] == str(len(self.send.body))
        assert json.loads(self.send.body) == {"success": True}
        assert self.writer.finished

    @pytest.mark.asyncio
    async def test_write_then_end_streams_body(self):
        self.writer.set_header("Content-Type", "text/plain")
        await self.writer.write("Gebeta ")
        await self.writer.end("API")
        assert self.send.body == b"Gebeta API"
        assert self.send.messages[-1]["more_body"] is False
        # Length is unknown once streaming has started
        assert "content-length" not in self.send.headers

    @pytest.mark.asyncio
    async def test_headers_frozen_after_start(self):
        await self.writer.write(b"x")
        with pytest.raises(RuntimeError):
            self.writer.set_header("X-Late", "1")
        with pytest.raises(RuntimeError):
            self.writer.set_status(500)

    @pytest.mark.asyncio
    async def test_end_twice_raises(self):
        await self.writer.end()
        with pytest.raises(RuntimeError):
            await self.writer.end()
        with pytest.raises(RuntimeError):
            await self.writer.write(b"more")

    @pytest.mark.asyncio
    async def test_no_content_has_no_length(self):
        self.writer.set_status(204)
        await self.writer.end()
        assert self.send.start["status"] == 204
        assert "content-length" not in self.send.headers
