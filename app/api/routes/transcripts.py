# app/api/routes/transcripts.py
from http import HTTPStatus

from fastapi import APIRouter, Depends, Path

from app.api.dependencies.zoom import get_transcript_service
from app.schemas.transcript import TranscriptContent, TranscriptLocation
from app.services.transcript_service import TranscriptService

router = APIRouter(
    prefix="/transcripts",
    tags=["Transcripts"],
)


@router.get(
    "/{meeting_id}",
    response_model=TranscriptLocation,
    status_code=HTTPStatus.OK,
    summary="Locate the transcript file of a recorded meeting",
    description=(
        "Looks up the meeting's cloud recordings and returns the download URL of "
        "the TRANSCRIPT file, if any."
    ),
    responses={
        503: {"description": "Zoom credentials are not configured."},
    },
)
async def get_transcript(
    meeting_id: str = Path(..., description="Zoom meeting id or UUID."),
    transcripts: TranscriptService = Depends(get_transcript_service),
) -> TranscriptLocation:
    return await transcripts.locate_transcript(meeting_id)


@router.get(
    "/{meeting_id}/content",
    response_model=TranscriptContent,
    status_code=HTTPStatus.OK,
    summary="Download the transcript text of a recorded meeting",
    description=(
        "Downloads the transcript, trying each configured download strategy in "
        "order (authorized, anonymous with redirects, minimal headers).\n\n"
        "If the storage only answers with a redirect, `redirect_url` is returned "
        "with `download_method=redirect` so the client can fetch it directly."
    ),
    responses={
        503: {"description": "Zoom credentials are not configured."},
    },
)
async def get_transcript_content(
    meeting_id: str = Path(..., description="Zoom meeting id or UUID."),
    transcripts: TranscriptService = Depends(get_transcript_service),
) -> TranscriptContent:
    return await transcripts.download_transcript(meeting_id)
