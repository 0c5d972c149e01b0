"""Story submission and summary polling endpoints."""

import logging

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse

from lorekeeper.api.dependencies import JobTrackerDep
from lorekeeper.api.v1.schemas import (
    ErrorResponse,
    MessageResponse,
    SubmitStoryRequest,
    SubmitStoryResponse,
    SummaryResponse,
)
from lorekeeper.domain.story import JobStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stories", tags=["stories"])

SUBMITTED_MESSAGE = "Story submission received. Summarization in progress."
IN_PROGRESS_MESSAGE = "Summarization in progress. Please check back later."


@router.post("", response_model=SubmitStoryResponse)
async def submit_story(
    request: SubmitStoryRequest,
    job_tracker: JobTrackerDep,
) -> SubmitStoryResponse:
    """Store a story and summarize it in the background."""
    try:
        story_id = await job_tracker.submit(request.story)
    except Exception as e:
        logger.error(f"Error submitting story: {e}", exc_info=True)
        raise HTTPException(
            status_code=500, detail="An error occurred while submitting the story."
        ) from e

    return SubmitStoryResponse(message=SUBMITTED_MESSAGE, story_id=story_id)


@router.get(
    "/{story_id}/summary",
    response_model=SummaryResponse,
    responses={
        status.HTTP_202_ACCEPTED: {"model": MessageResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    },
)
async def get_summary(
    story_id: str,
    job_tracker: JobTrackerDep,
) -> SummaryResponse | JSONResponse:
    """Poll for a story's summary."""
    try:
        result = await job_tracker.poll(story_id)
    except Exception as e:
        logger.error(f"Error fetching summary: {e}", exc_info=True)
        raise HTTPException(
            status_code=500, detail="An error occurred while fetching the summary."
        ) from e

    if result.status is JobStatus.NOT_FOUND:
        raise HTTPException(status_code=404, detail="Story not found")
    if result.status is JobStatus.PENDING:
        return JSONResponse(
            MessageResponse(message=IN_PROGRESS_MESSAGE).model_dump(),
            status_code=status.HTTP_202_ACCEPTED,
        )
    return SummaryResponse(summary=result.summary)
