"""Character extraction and question endpoints."""

import logging

from fastapi import APIRouter, HTTPException

from lorekeeper.api.dependencies import CharacterServiceDep
from lorekeeper.api.v1.schemas import AskRequest, SubmitStoryRequest, TextResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/characters", tags=["characters"])


@router.post("/names", response_model=TextResponse)
async def extract_character_names(
    request: SubmitStoryRequest,
    characters: CharacterServiceDep,
) -> TextResponse:
    """List the characters of a story (cached)."""
    try:
        names = await characters.extract_character_names(request.story)
    except Exception as e:
        logger.error(f"Error extracting character names: {e}", exc_info=True)
        raise HTTPException(
            status_code=500, detail="An error occurred while extracting character names."
        ) from e
    return TextResponse(response=names)


@router.post("/ask", response_model=TextResponse)
async def ask_character(
    request: AskRequest,
    characters: CharacterServiceDep,
) -> TextResponse:
    """Answer a question as a character of the summarized story (cached)."""
    try:
        answer = await characters.ask_character(
            query=request.query,
            character_name=request.character_name,
            summarized_story=request.summarized_story,
        )
    except Exception as e:
        logger.error(f"Error processing query: {e}", exc_info=True)
        raise HTTPException(
            status_code=500, detail="An error occurred while processing your query."
        ) from e
    return TextResponse(response=answer)
