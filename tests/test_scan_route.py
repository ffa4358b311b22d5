"""Tests for POST /api/scan."""

import json

import pytest
from fastapi.testclient import TestClient

from app import messages
from conftest import PNG_DATA_URL


class TestMethod:
    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "PATCH"])
    def test_wrong_method_is_405(self, client, method):
        resp = client.request(method, "/api/scan")
        assert resp.status_code == 405
        assert resp.headers["allow"] == "POST"
        assert resp.json() == {"error": f"Method {method} Not Allowed"}


class TestUnconfigured:
    def test_every_request_fails_with_credential_message(self, unconfigured_app):
        with TestClient(unconfigured_app) as c:
            for body in ({"base64Image": PNG_DATA_URL}, {}):
                resp = c.post("/api/scan", json=body)
                assert resp.status_code == 500
                assert resp.json() == {"error": messages.CREDENTIAL_MISSING}

    def test_health_reports_unconfigured(self, unconfigured_app):
        with TestClient(unconfigured_app) as c:
            assert c.get("/health").json() == {"status": "ok", "configured": False}


class TestInputValidation:
    def test_missing_image(self, client, extractor):
        resp = client.post("/api/scan", json={})
        assert resp.status_code == 400
        assert resp.json() == {"error": messages.MISSING_IMAGE}
        assert extractor.calls == []

    def test_empty_image(self, client):
        resp = client.post("/api/scan", json={"base64Image": ""})
        assert resp.status_code == 400
        assert resp.json()["error"] == messages.MISSING_IMAGE

    def test_body_not_json(self, client):
        resp = client.post(
            "/api/scan", content=b"not json", headers={"Content-Type": "application/json"}
        )
        assert resp.status_code == 400
        assert resp.json()["error"] == messages.MISSING_IMAGE

    def test_invalid_format(self, client, extractor):
        resp = client.post("/api/scan", json={"base64Image": "hello"})
        assert resp.status_code == 400
        assert resp.json() == {"error": messages.INVALID_IMAGE_FORMAT}
        assert messages.INVALID_IMAGE_FORMAT != messages.MISSING_IMAGE
        assert extractor.calls == []

    def test_multiline_payload_is_invalid_format(self, client, extractor):
        resp = client.post("/api/scan", json={"base64Image": "data:image/png;base64,AAAA\nBBBB"})
        assert resp.status_code == 400
        assert resp.json() == {"error": messages.INVALID_IMAGE_FORMAT}
        assert extractor.calls == []

    def test_non_string_image(self, client):
        resp = client.post("/api/scan", json={"base64Image": ["data:image/png;base64,AA=="]})
        assert resp.status_code == 400
        assert resp.json()["error"] == messages.INVALID_IMAGE_FORMAT


class TestScan:
    def test_forwards_parsed_items(self, client, extractor):
        items = [{"name": "Coffee", "quantity": 1, "price": 3.5}]
        extractor.reply = json.dumps(items)

        resp = client.post("/api/scan", json={"base64Image": PNG_DATA_URL})

        assert resp.status_code == 200
        assert resp.json() == items
        mime_type = extractor.calls[0][1]
        assert mime_type == "image/png"
        assert PNG_DATA_URL.endswith(extractor.calls[0][0])

    def test_strips_markdown_fence(self, client, extractor):
        extractor.reply = '```json\n[{"name": "Soda", "quantity": 3, "price": 6.0}]\n```'

        resp = client.post("/api/scan", json={"base64Image": PNG_DATA_URL})

        assert resp.status_code == 200
        assert resp.json() == [{"name": "Soda", "quantity": 3, "price": 6.0}]

    def test_non_array_forwarded_verbatim(self, client, extractor):
        extractor.reply = '{"items": []}'
        resp = client.post("/api/scan", json={"base64Image": PNG_DATA_URL})
        assert resp.status_code == 200
        assert resp.json() == {"items": []}

    def test_same_image_twice_is_identical(self, client, extractor):
        extractor.reply = '[{"name": "Tea", "quantity": 2, "price": 5}]'
        first = client.post("/api/scan", json={"base64Image": PNG_DATA_URL}).json()
        second = client.post("/api/scan", json={"base64Image": PNG_DATA_URL}).json()
        assert first == second
        assert len(extractor.calls) == 2


class TestUpstreamFailure:
    def test_provider_error(self, client, extractor):
        extractor.error = RuntimeError("quota exceeded")

        resp = client.post("/api/scan", json={"base64Image": PNG_DATA_URL})

        assert resp.status_code == 500
        assert resp.json() == {"error": messages.SCAN_FAILED, "details": "quota exceeded"}

    def test_unparseable_reply(self, client, extractor):
        extractor.reply = "I could not read this receipt."

        resp = client.post("/api/scan", json={"base64Image": PNG_DATA_URL})

        assert resp.status_code == 500
        body = resp.json()
        assert body["error"] == messages.SCAN_FAILED
        assert "Expecting value" in body["details"]
