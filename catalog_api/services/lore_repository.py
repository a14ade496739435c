"""
Catalog API — Star Wars Lore Repository
=========================================

What:  Query facade for episodes, characters and character appearances.
Who:   Route handlers in routes/episodes.py and routes/characters.py.

Query plan notes:
    - Episodes list in saga order (episode_number); characters by name.
    - Episode → characters goes through character_appearances and orders by
      role DESC, then name.
    - Character search is a case-insensitive contains over name, species,
      homeworld and affiliation (one OR group).
    - Inactive rows (is_active = FALSE) never appear, including inactive
      appearance links.
"""

import logging
from typing import List, Optional

from catalog_api.schemas.lore import (
    Character,
    CharacterAppearance,
    CharacterWithAppearances,
    Episode,
    EpisodeWithCharacters,
)
from catalog_api.services.aggregator import gather_relations
from catalog_api.services.query_builder import FilterBuilder
from catalog_api.services.repository import Repository

logger = logging.getLogger(__name__)

EPISODE_COLUMNS = (
    "e.id, e.title, e.episode_number, e.release_year, e.director, e.description, e.created_at"
)
CHARACTER_COLUMNS = (
    "c.id, c.name, c.species, c.homeworld, c.affiliation, c.description, c.created_at"
)
CHARACTER_SEARCH_COLUMNS = ("c.name", "c.species", "c.homeworld", "c.affiliation")


class LoreRepository(Repository):
    """One method per lore query shape."""

    # ── Episodes ──────────────────────────────────────────────────────────

    async def list_episodes(self) -> List[Episode]:
        return await self._all(
            Episode,
            f"SELECT {EPISODE_COLUMNS} FROM episodes e "
            "WHERE e.is_active = TRUE ORDER BY e.episode_number",
        )

    async def get_episode(self, episode_id: int) -> Optional[Episode]:
        return await self._one(
            Episode,
            f"SELECT {EPISODE_COLUMNS} FROM episodes e WHERE e.id = :id AND e.is_active = TRUE",
            {"id": episode_id},
        )

    async def characters_in_episode(self, episode_id: int) -> List[Character]:
        return await self._all(
            Character,
            f"""
            SELECT {CHARACTER_COLUMNS}
            FROM characters c
            INNER JOIN character_appearances ca ON c.id = ca.character_id
            WHERE ca.episode_id = :episode_id
              AND ca.is_active = TRUE
              AND c.is_active = TRUE
            ORDER BY ca.role DESC, c.name
            """,
            {"episode_id": episode_id},
        )

    async def get_episode_with_characters(self, episode_id: int) -> Optional[EpisodeWithCharacters]:
        episode = await self.get_episode(episode_id)
        if episode is None:
            return None
        relations = await gather_relations(characters=self.characters_in_episode(episode_id))
        return EpisodeWithCharacters(**episode.model_dump(), **relations)

    async def count_episodes(self) -> int:
        return await self._count("SELECT COUNT(*) FROM episodes WHERE is_active = TRUE")

    # ── Characters ────────────────────────────────────────────────────────

    async def list_characters(self) -> List[Character]:
        return await self._all(
            Character,
            f"SELECT {CHARACTER_COLUMNS} FROM characters c WHERE c.is_active = TRUE ORDER BY c.name",
        )

    async def get_character(self, character_id: int) -> Optional[Character]:
        return await self._one(
            Character,
            f"SELECT {CHARACTER_COLUMNS} FROM characters c WHERE c.id = :id AND c.is_active = TRUE",
            {"id": character_id},
        )

    async def episodes_of_character(self, character_id: int) -> List[Episode]:
        return await self._all(
            Episode,
            f"""
            SELECT {EPISODE_COLUMNS}
            FROM episodes e
            INNER JOIN character_appearances ca ON e.id = ca.episode_id
            WHERE ca.character_id = :character_id
              AND ca.is_active = TRUE
              AND e.is_active = TRUE
            ORDER BY e.episode_number
            """,
            {"character_id": character_id},
        )

    async def get_character_with_appearances(
        self, character_id: int
    ) -> Optional[CharacterWithAppearances]:
        character = await self.get_character(character_id)
        if character is None:
            return None
        relations = await gather_relations(appearances=self.episodes_of_character(character_id))
        return CharacterWithAppearances(**character.model_dump(), **relations)

    async def list_character_appearances(self, character_id: int) -> List[CharacterAppearance]:
        """Appearance rows (role, screen time) with the episode title and number."""
        return await self._all(
            CharacterAppearance,
            """
            SELECT ca.id, ca.character_id, ca.episode_id, ca.role, ca.screen_time_minutes,
                   ca.created_at, e.title AS episode_title, e.episode_number
            FROM character_appearances ca
            INNER JOIN episodes e ON ca.episode_id = e.id
            WHERE ca.character_id = :character_id
              AND ca.is_active = TRUE
              AND e.is_active = TRUE
            ORDER BY e.episode_number
            """,
            {"character_id": character_id},
        )

    async def search_characters(self, term: str) -> List[Character]:
        where = FilterBuilder("c.is_active = TRUE").contains(CHARACTER_SEARCH_COLUMNS, term).build()
        logger.debug("Character search %r → %s", term, where.sql)
        return await self._all(
            Character,
            f"SELECT {CHARACTER_COLUMNS} FROM characters c {where.sql} ORDER BY c.name",
            where.bind(),
        )

    async def characters_by_affiliation(self, affiliation: str) -> List[Character]:
        where = FilterBuilder("c.is_active = TRUE").contains(["c.affiliation"], affiliation).build()
        return await self._all(
            Character,
            f"SELECT {CHARACTER_COLUMNS} FROM characters c {where.sql} ORDER BY c.name",
            where.bind(),
        )
