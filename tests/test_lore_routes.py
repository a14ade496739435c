"""
Catalog API — Lore Endpoint Tests
===================================

What:  HTTP-level tests for /api/episodes and /api/characters.
How:   HTTPX AsyncClient over ASGITransport against the seeded lore app.

What we test:
    ✅ 200 bodies carry the list plus its count
    ✅ Malformed IDs → 400 naming the resource; unknown IDs → 404
    ✅ Search term length and affiliation presence are validated
    ✅ Two-segment search routes are not shadowed by `{id}` routes
"""

import pytest


class TestEpisodeEndpoints:

    @pytest.mark.asyncio
    async def test_list_episodes(self, lore_client):
        response = await lore_client.get("/api/episodes")
        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 6
        assert [e["episode_number"] for e in body["episodes"]] == [1, 2, 3, 4, 5, 6]

    @pytest.mark.asyncio
    async def test_get_episode(self, lore_client):
        response = await lore_client.get("/api/episodes/5")
        assert response.status_code == 200
        assert response.json()["title"] == "The Empire Strikes Back"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["abc", "1.5", "12abc", "%20"])
    async def test_invalid_episode_id(self, lore_client, raw):
        response = await lore_client.get(f"/api/episodes/{raw}")
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid episode ID"}

    @pytest.mark.asyncio
    async def test_unknown_episode(self, lore_client):
        response = await lore_client.get("/api/episodes/999")
        assert response.status_code == 404
        assert response.json() == {"error": "Episode not found"}

    @pytest.mark.asyncio
    async def test_episode_with_characters(self, lore_client):
        response = await lore_client.get("/api/episodes/4/characters")
        assert response.status_code == 200
        body = response.json()
        assert body["episode_number"] == 4
        assert len(body["characters"]) == 8

    @pytest.mark.asyncio
    async def test_episode_with_characters_unknown(self, lore_client):
        response = await lore_client.get("/api/episodes/999/characters")
        assert response.status_code == 404


class TestCharacterEndpoints:

    @pytest.mark.asyncio
    async def test_list_characters(self, lore_client):
        response = await lore_client.get("/api/characters")
        assert response.status_code == 200
        assert response.json()["count"] == 11

    @pytest.mark.asyncio
    async def test_search(self, lore_client):
        response = await lore_client.get("/api/characters/search/sky")
        assert response.status_code == 200
        body = response.json()
        assert body["query"] == "sky"
        assert body["count"] == 1
        assert body["characters"][0]["name"] == "Luke Skywalker"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["s", "%20a%20"])
    async def test_search_too_short(self, lore_client, raw):
        response = await lore_client.get(f"/api/characters/search/{raw}")
        assert response.status_code == 400
        assert response.json() == {"error": "Search query must be at least 2 characters long"}

    @pytest.mark.asyncio
    async def test_search_is_not_read_as_an_id(self, lore_client):
        response = await lore_client.get("/api/characters/search/appearances")
        assert response.status_code == 200
        assert response.json()["count"] == 0

    @pytest.mark.asyncio
    async def test_by_affiliation(self, lore_client):
        response = await lore_client.get("/api/characters/affiliation/Jedi")
        assert response.status_code == 200
        body = response.json()
        assert body["affiliation"] == "Jedi"
        assert [c["name"] for c in body["characters"]] == ["Obi-Wan Kenobi", "Yoda"]

    @pytest.mark.asyncio
    async def test_blank_affiliation(self, lore_client):
        response = await lore_client.get("/api/characters/affiliation/%20%20")
        assert response.status_code == 400
        assert response.json() == {"error": "Affiliation parameter is required"}

    @pytest.mark.asyncio
    async def test_inactive_character_not_found(self, lore_client):
        response = await lore_client.get("/api/characters/11")
        assert response.status_code == 404
        assert response.json() == {"error": "Character not found"}

    @pytest.mark.asyncio
    async def test_invalid_character_id(self, lore_client):
        response = await lore_client.get("/api/characters/luke/appearances")
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid character ID"}

    @pytest.mark.asyncio
    async def test_character_appearances(self, lore_client):
        response = await lore_client.get("/api/characters/2/appearances")
        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Darth Vader"
        assert [e["episode_number"] for e in body["appearances"]] == [3, 4, 5, 6]

    @pytest.mark.asyncio
    async def test_character_roles(self, lore_client):
        response = await lore_client.get("/api/characters/1/roles")
        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 4
        assert body["appearances"][0]["episode_title"] == "Revenge of the Sith"
        assert body["appearances"][0]["role"] == "cameo"

    @pytest.mark.asyncio
    async def test_character_roles_unknown(self, lore_client):
        response = await lore_client.get("/api/characters/999/roles")
        assert response.status_code == 404


class TestOutOfRangeIds:
    """Integers no SQL INTEGER column can hold are misses, not server errors."""

    @pytest.mark.asyncio
    async def test_huge_episode_id(self, lore_client):
        response = await lore_client.get("/api/episodes/99999999999999999999")
        assert response.status_code == 404
        assert response.json() == {"error": "Episode not found"}

    @pytest.mark.asyncio
    async def test_huge_negative_character_id(self, lore_client):
        response = await lore_client.get("/api/characters/-99999999999999999999/roles")
        assert response.status_code == 404
        assert response.json() == {"error": "Character not found"}

    @pytest.mark.asyncio
    async def test_very_long_digit_string(self, lore_client):
        response = await lore_client.get("/api/characters/" + "9" * 5000)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_largest_storable_id_is_a_plain_miss(self, lore_client):
        response = await lore_client.get(f"/api/episodes/{2**63 - 1}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_leading_zeros(self, lore_client):
        response = await lore_client.get("/api/episodes/" + "0" * 30 + "4")
        assert response.status_code == 200
        assert response.json()["title"] == "A New Hope"
