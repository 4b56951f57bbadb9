"""
String Analyzer Service - HTTP Endpoint Tests
=============================================

What:  End-to-end tests of the /strings routes through HTTPX AsyncClient.
How:   The app is bound to a store persisting into tmp_path (see conftest.py).

What we test:
    ✅ POST /strings: 201 with full record, 400/422 on bad bodies, 409 on duplicates
    ✅ GET /strings/{value}: round-trip equality, 404
    ✅ GET /strings: filters, filters_applied, 400 on bad parameter types
    ✅ GET /strings/filter-by-natural-language: 200, 400, 422
    ✅ DELETE /strings/{value}: 204 then 404
    ✅ X-Request-ID header and error body shape
    ✅ a stored value equal to a literal route segment is still fetchable
    ✅ access log lines carry the route template, never the stored value
"""

import hashlib
import json
import logging
from urllib.parse import quote

import pytest
import pytest_asyncio


async def create(client, value):
    response = await client.post("/strings", json={"value": value})
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateString:
    @pytest.mark.asyncio
    async def test_create_returns_full_record(self, test_client):
        response = await test_client.post("/strings", json={"value": "Race car"})

        assert response.status_code == 201
        body = response.json()
        expected_hash = hashlib.sha256(b"Race car").hexdigest()
        assert body["id"] == expected_hash
        assert body["value"] == "Race car"
        assert body["created_at"]
        assert body["properties"] == {
            "length": 8,
            "is_palindrome": True,
            "unique_characters": 5,
            "word_count": 2,
            "sha256_hash": expected_hash,
            "character_frequency_map": {"R": 1, "a": 2, "c": 2, "e": 1, " ": 1, "r": 1},
        }

    @pytest.mark.asyncio
    async def test_create_persists_before_responding(self, test_client, data_file):
        await create(test_client, "on disk")

        with open(data_file, encoding="utf-8") as f:
            assert json.load(f)["strings"][0]["value"] == "on disk"

    @pytest.mark.asyncio
    async def test_duplicate_returns_409(self, test_client):
        await create(test_client, "twice")

        response = await test_client.post("/strings", json={"value": "twice"})

        assert response.status_code == 409
        assert response.json()["error"] == "String already exists in the system"
        assert response.json()["code"] == "duplicate"

    @pytest.mark.asyncio
    async def test_missing_value_returns_400(self, test_client):
        response = await test_client.post("/strings", json={"text": "wrong field"})
        assert response.status_code == 400
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_missing_body_returns_400(self, test_client):
        response = await test_client.post("/strings")
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_empty_value_returns_400(self, test_client):
        response = await test_client.post("/strings", json={"value": ""})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_invalid_json_returns_400(self, test_client):
        response = await test_client.post(
            "/strings",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [123, True, ["a"], {"nested": "x"}])
    async def test_non_string_value_returns_422(self, test_client, value):
        response = await test_client.post("/strings", json={"value": value})

        assert response.status_code == 422
        assert response.json()["code"] == "invalid_type"


class TestGetString:
    @pytest.mark.asyncio
    async def test_round_trip(self, test_client):
        created = await create(test_client, "hello world")

        response = await test_client.get("/strings/hello world")

        assert response.status_code == 200
        assert response.json() == created

    @pytest.mark.asyncio
    async def test_url_encoded_value(self, test_client):
        created = await create(test_client, "a/b?c#d")

        response = await test_client.get(f"/strings/{quote('a/b?c#d', safe='/')}")

        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

    @pytest.mark.asyncio
    async def test_unknown_value_returns_404(self, test_client):
        response = await test_client.get("/strings/never-stored")

        assert response.status_code == 404
        body = response.json()
        assert body["code"] == "not_found"
        assert body["error"]


class TestListStrings:
    @pytest_asyncio.fixture(autouse=True)
    async def seed(self, test_client):
        for value in ["racecar", "hello world", "abc", "noon", "a big dog"]:
            await create(test_client, value)

    @pytest.mark.asyncio
    async def test_no_filters_returns_everything_in_order(self, test_client):
        response = await test_client.get("/strings")

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 5
        assert [item["value"] for item in body["data"]] == [
            "racecar",
            "hello world",
            "abc",
            "noon",
            "a big dog",
        ]
        assert body["filters_applied"] == {}

    @pytest.mark.asyncio
    async def test_combined_filters(self, test_client):
        response = await test_client.get(
            "/strings",
            params={"is_palindrome": "true", "min_length": 4, "max_length": 7, "word_count": 1},
        )

        body = response.json()
        assert [item["value"] for item in body["data"]] == ["racecar", "noon"]
        assert body["count"] == 2
        assert body["filters_applied"] == {
            "is_palindrome": True,
            "min_length": 4,
            "max_length": 7,
            "word_count": 1,
        }

    @pytest.mark.asyncio
    async def test_contains_character(self, test_client):
        response = await test_client.get("/strings", params={"contains_character": "o"})
        assert [item["value"] for item in response.json()["data"]] == [
            "hello world",
            "noon",
            "a big dog",
        ]

    @pytest.mark.asyncio
    async def test_length_range(self, test_client):
        response = await test_client.get("/strings", params={"min_length": 3, "max_length": 5})
        assert [item["value"] for item in response.json()["data"]] == ["abc", "noon"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "params",
        [
            {"min_length": "abc"},
            {"is_palindrome": "maybe"},
            {"word_count": -1},
            {"max_length": "1.5"},
        ],
    )
    async def test_invalid_parameters_return_400(self, test_client, params):
        response = await test_client.get("/strings", params=params)

        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"


class TestNaturalLanguageFilter:
    @pytest_asyncio.fixture(autouse=True)
    async def seed(self, test_client):
        for value in ["racecar", "level", "hello world", "banana", "stats"]:
            await create(test_client, value)

    @pytest.mark.asyncio
    async def test_single_word_palindromes(self, test_client):
        response = await test_client.get(
            "/strings/filter-by-natural-language",
            params={"query": "all single word palindromic strings"},
        )

        assert response.status_code == 200
        body = response.json()
        assert [item["value"] for item in body["data"]] == ["racecar", "level", "stats"]
        assert body["count"] == 3
        assert body["interpreted_query"] == {
            "original": "all single word palindromic strings",
            "parsed_filters": {"is_palindrome": True, "word_count": 1},
        }

    @pytest.mark.asyncio
    async def test_unparseable_returns_400(self, test_client):
        response = await test_client.get(
            "/strings/filter-by-natural-language", params={"query": "something nice"}
        )
        assert response.status_code == 400
        assert response.json()["code"] == "query_parse_error"

    @pytest.mark.asyncio
    async def test_conflicting_returns_422(self, test_client):
        response = await test_client.get(
            "/strings/filter-by-natural-language",
            params={"query": "longer than 10 and shorter than 3"},
        )
        assert response.status_code == 422
        assert response.json()["code"] == "conflicting_filters"

    @pytest.mark.asyncio
    async def test_missing_query_returns_400(self, test_client):
        response = await test_client.get("/strings/filter-by-natural-language")
        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"

    @pytest.mark.asyncio
    async def test_value_named_like_the_route_is_fetchable(self, test_client):
        created = await create(test_client, "filter-by-natural-language")

        response = await test_client.get("/strings/filter-by-natural-language")
        assert response.status_code == 200
        assert response.json() == created

        response = await test_client.get(
            "/strings/filter-by-natural-language", params={"query": "palindromic strings"}
        )
        assert response.status_code == 200
        assert response.json()["count"] == 3

        response = await test_client.delete("/strings/filter-by-natural-language")
        assert response.status_code == 204
        response = await test_client.get("/strings/filter-by-natural-language")
        assert response.status_code == 400


class TestDeleteString:
    @pytest.mark.asyncio
    async def test_delete_then_404(self, test_client):
        await create(test_client, "short lived")

        response = await test_client.delete("/strings/short lived")
        assert response.status_code == 204
        assert response.content == b""

        assert (await test_client.get("/strings/short lived")).status_code == 404
        assert (await test_client.delete("/strings/short lived")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_unknown_returns_404(self, test_client):
        response = await test_client.delete("/strings/ghost")
        assert response.status_code == 404


class TestServiceRoutes:
    @pytest.mark.asyncio
    async def test_health(self, test_client):
        await create(test_client, "counted")

        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["backend"] == "json"
        assert body["record_count"] == 1

    @pytest.mark.asyncio
    async def test_root_banner(self, test_client):
        response = await test_client.get("/")
        assert response.status_code == 200
        assert "POST /strings" in response.json()["endpoints"]

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, test_client):
        response = await test_client.get("/strings")
        assert response.headers.get("X-Request-ID")

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get("/strings/missing", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"
        assert response.json()["request_id"] == "abc123"

    @pytest.mark.asyncio
    async def test_unusable_request_id_is_replaced(self, test_client):
        supplied = "x" * 65
        response = await test_client.get("/strings/missing", headers={"X-Request-ID": supplied})

        rid = response.headers["X-Request-ID"]
        assert rid != supplied
        assert len(rid) == 8
        assert response.json()["request_id"] == rid

    @pytest.mark.asyncio
    async def test_access_log_records_route_not_value(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="string_analyzer.access")
        await create(test_client, "private note")

        await test_client.get("/strings/private note")

        records = [r for r in caplog.records if r.name == "string_analyzer.access"]
        assert [r.route for r in records] == ["/strings", "/strings/{string_value:path}"]
        assert all("private note" not in r.getMessage() for r in records)
