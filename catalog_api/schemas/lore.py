"""
Catalog API — Star Wars Lore Schemas
======================================

What:  Pydantic models for the lore server's responses.
How:   Repositories validate raw dict rows into these models
       (`Episode.model_validate(row)`); route handlers return them.

Shapes:
    GET /api/episodes                       → EpisodeList     {episodes, count}
    GET /api/episodes/{id}/characters       → EpisodeWithCharacters
    GET /api/characters                     → CharacterList   {characters, count}
    GET /api/characters/{id}/appearances    → CharacterWithAppearances
    GET /api/characters/search/{query}      → CharacterSearchResult
    GET /api/characters/affiliation/{name}  → CharacterAffiliationResult
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class Episode(BaseModel):
    id: int
    title: str
    episode_number: int
    release_year: int
    director: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None


class Character(BaseModel):
    id: int
    name: str
    species: Optional[str] = None
    homeworld: Optional[str] = None
    affiliation: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None


class CharacterAppearance(BaseModel):
    """Appearance row joined with the episode's title and number."""

    id: int
    character_id: int
    episode_id: int
    role: Optional[str] = None
    screen_time_minutes: Optional[int] = None
    episode_title: str
    episode_number: int
    created_at: Optional[datetime] = None


class EpisodeWithCharacters(Episode):
    characters: List[Character] = Field(default_factory=list)


class CharacterWithAppearances(Character):
    """`appearances` lists the episodes the character appears in."""

    appearances: List[Episode] = Field(default_factory=list)


class EpisodeList(BaseModel):
    episodes: List[Episode]
    count: int


class CharacterList(BaseModel):
    characters: List[Character]
    count: int


class CharacterSearchResult(CharacterList):
    query: str


class CharacterAffiliationResult(CharacterList):
    affiliation: str


class AppearanceList(BaseModel):
    appearances: List[CharacterAppearance]
    count: int
