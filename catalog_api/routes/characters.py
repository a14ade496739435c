"""
Catalog API — Character Route Handlers (lore server)
======================================================

What:  Character listing, lookup, search and affiliation filter.
Route order matters: the two-segment `search/{query}` and
`affiliation/{affiliation}` routes are registered before `{id}/...` so a
search for "appearances" is not read as a character ID.
"""

import logging

from fastapi import APIRouter, Depends

from catalog_api.exceptions import NotFoundError, ValidationError
from catalog_api.routes.dependencies import get_lore_repository
from catalog_api.routes.params import failure_message, parse_id, search_term
from catalog_api.schemas.common import ErrorResponse
from catalog_api.schemas.lore import (
    AppearanceList,
    Character,
    CharacterAffiliationResult,
    CharacterList,
    CharacterSearchResult,
    CharacterWithAppearances,
)
from catalog_api.services.lore_repository import LoreRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Characters"])

ERRORS = {
    400: {"description": "Invalid parameter", "model": ErrorResponse},
    404: {"description": "Character not found", "model": ErrorResponse},
    500: {"description": "Database failure", "model": ErrorResponse},
}


@router.get("/characters", response_model=CharacterList, responses={500: ERRORS[500]})
async def list_characters(repo: LoreRepository = Depends(get_lore_repository)) -> CharacterList:
    with failure_message("Failed to fetch characters"):
        characters = await repo.list_characters()
    return CharacterList(characters=characters, count=len(characters))


@router.get(
    "/characters/search/{query}",
    response_model=CharacterSearchResult,
    responses={400: ERRORS[400], 500: ERRORS[500]},
    summary="Search characters by name, species, homeworld or affiliation",
)
async def search_characters(
    query: str, repo: LoreRepository = Depends(get_lore_repository)
) -> CharacterSearchResult:
    term = search_term(query)
    with failure_message("Failed to search characters"):
        characters = await repo.search_characters(term)
    logger.info("Character search %r matched %d", term, len(characters))
    return CharacterSearchResult(characters=characters, count=len(characters), query=term)


@router.get(
    "/characters/affiliation/{affiliation}",
    response_model=CharacterAffiliationResult,
    responses={400: ERRORS[400], 500: ERRORS[500]},
)
async def characters_by_affiliation(
    affiliation: str, repo: LoreRepository = Depends(get_lore_repository)
) -> CharacterAffiliationResult:
    value = affiliation.strip()
    if not value:
        raise ValidationError(message="Affiliation parameter is required", field="affiliation")
    with failure_message("Failed to fetch characters by affiliation"):
        characters = await repo.characters_by_affiliation(value)
    return CharacterAffiliationResult(
        characters=characters, count=len(characters), affiliation=value
    )


@router.get("/characters/{character_id}", response_model=Character, responses=ERRORS)
async def get_character(
    character_id: str, repo: LoreRepository = Depends(get_lore_repository)
) -> Character:
    cid = parse_id(character_id, "character")
    with failure_message("Failed to fetch character"):
        character = await repo.get_character(cid)
    if character is None:
        raise NotFoundError(resource="Character", resource_id=cid)
    return character


@router.get(
    "/characters/{character_id}/appearances",
    response_model=CharacterWithAppearances,
    responses=ERRORS,
    summary="Get a character with the episodes they appear in",
)
async def get_character_appearances(
    character_id: str, repo: LoreRepository = Depends(get_lore_repository)
) -> CharacterWithAppearances:
    cid = parse_id(character_id, "character")
    with failure_message("Failed to fetch character with appearances"):
        character = await repo.get_character_with_appearances(cid)
    if character is None:
        raise NotFoundError(resource="Character", resource_id=cid)
    return character


@router.get(
    "/characters/{character_id}/roles",
    response_model=AppearanceList,
    responses=ERRORS,
    summary="List a character's appearance records (role and screen time per episode)",
)
async def get_character_roles(
    character_id: str, repo: LoreRepository = Depends(get_lore_repository)
) -> AppearanceList:
    cid = parse_id(character_id, "character")
    with failure_message("Failed to fetch character appearances"):
        character = await repo.get_character(cid)
        if character is None:
            raise NotFoundError(resource="Character", resource_id=cid)
        appearances = await repo.list_character_appearances(cid)
    return AppearanceList(appearances=appearances, count=len(appearances))
