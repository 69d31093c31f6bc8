# app/schemas/transcript.py
from pydantic import BaseModel, ConfigDict, Field


class RecordingFile(BaseModel):
    """
    One entry of `recording_files` in GET /meetings/{meeting_id}/recordings.
    """

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    meeting_id: str | None = None
    recording_start: str | None = None
    recording_end: str | None = None
    file_type: str | None = Field(None, examples=["TRANSCRIPT"])
    file_extension: str | None = Field(None, examples=["VTT"])
    file_size: int | None = None
    download_url: str | None = None
    play_url: str | None = None
    status: str | None = None
    recording_type: str | None = None


class TranscriptLocation(BaseModel):
    """
    Where a meeting's transcript can be downloaded from.
    """

    success: bool
    meeting_id: str
    transcript_available: bool = False
    error: str | None = None
    download_url: str | None = None
    file_id: str | None = None
    file_type: str | None = None
    file_extension: str | None = None


class TranscriptContent(BaseModel):
    """
    Outcome of downloading a transcript file.
    """

    success: bool
    meeting_id: str
    transcript_available: bool = True
    error: str | None = None
    content: str | None = None
    content_length: int = 0
    has_content: bool = False
    content_preview: str | None = Field(
        None, description="First 1000 characters of the content."
    )
    download_method: str | None = Field(
        None,
        description="Name of the download strategy that produced the result.",
        examples=["authorized_vtt"],
    )
    http_status: int | None = None
    redirect_url: str | None = Field(
        None,
        description="Location returned by Zoom when the file is served from a redirect.",
    )
