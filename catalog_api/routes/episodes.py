"""
Catalog API — Episode Route Handlers (lore server)
====================================================

What:  GET /api/episodes, /api/episodes/{id}, /api/episodes/{id}/characters.
How:   Parse the path ID, call LoreRepository, turn a None into 404.
       Persistence failures leave through failure_message() as 500.
"""

import logging

from fastapi import APIRouter, Depends

from catalog_api.exceptions import NotFoundError
from catalog_api.routes.dependencies import get_lore_repository
from catalog_api.routes.params import failure_message, parse_id
from catalog_api.schemas.common import ErrorResponse
from catalog_api.schemas.lore import Episode, EpisodeList, EpisodeWithCharacters
from catalog_api.services.lore_repository import LoreRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Episodes"])

ERRORS = {
    400: {"description": "Invalid episode ID", "model": ErrorResponse},
    404: {"description": "Episode not found", "model": ErrorResponse},
    500: {"description": "Database failure", "model": ErrorResponse},
}


@router.get(
    "/episodes",
    response_model=EpisodeList,
    responses={500: ERRORS[500]},
    summary="List all episodes in saga order",
)
async def list_episodes(repo: LoreRepository = Depends(get_lore_repository)) -> EpisodeList:
    with failure_message("Failed to fetch episodes"):
        episodes = await repo.list_episodes()
    return EpisodeList(episodes=episodes, count=len(episodes))


@router.get(
    "/episodes/{episode_id}",
    response_model=Episode,
    responses=ERRORS,
    summary="Get a single episode",
)
async def get_episode(
    episode_id: str, repo: LoreRepository = Depends(get_lore_repository)
) -> Episode:
    eid = parse_id(episode_id, "episode")
    with failure_message("Failed to fetch episode"):
        episode = await repo.get_episode(eid)
    if episode is None:
        raise NotFoundError(resource="Episode", resource_id=eid)
    return episode


@router.get(
    "/episodes/{episode_id}/characters",
    response_model=EpisodeWithCharacters,
    responses=ERRORS,
    summary="Get an episode with the characters appearing in it",
)
async def get_episode_characters(
    episode_id: str, repo: LoreRepository = Depends(get_lore_repository)
) -> EpisodeWithCharacters:
    eid = parse_id(episode_id, "episode")
    with failure_message("Failed to fetch episode with characters"):
        episode = await repo.get_episode_with_characters(eid)
    if episode is None:
        raise NotFoundError(resource="Episode", resource_id=eid)
    return episode
