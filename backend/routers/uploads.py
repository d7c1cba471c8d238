"""
File upload endpoint for logos and avatars.
"""

from fastapi import APIRouter, Depends, File, UploadFile

from backend.dependencies import get_client
from backend.schemas import UploadResponse
from bizplanner.data.client import PlannerClient

router = APIRouter(prefix="/api/uploads", tags=["uploads"])


@router.post("", response_model=UploadResponse)
async def upload_file(
    file: UploadFile = File(...),
    client: PlannerClient = Depends(get_client),
):
    """
    Store a file in the public bucket.

    Returns the durable public URL; the caller saves it on the entity
    (``logo_url``, ``avatar_url``).
    """
    content = await file.read()
    url = await client.upload_file(file.filename or "", content)
    return UploadResponse(file_url=url)
