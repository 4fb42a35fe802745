"""Reel gallery, music and template endpoints"""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse, PlainTextResponse

from core.library import ReelLibrary
from server.dependencies import get_library
from server.models import ReelListResponse


router = APIRouter()


@router.get("/reels-list", response_model=ReelListResponse)
async def list_reels(page: int = 1, limit: int = 6, library: ReelLibrary = Depends(get_library)):
    """One page of finished reels, newest first"""
    try:
        return library.list_reels(page=page, limit=limit)
    except OSError:
        raise HTTPException(status_code=500, detail="Failed to list reels.")


@router.get("/music")
async def list_music(library: ReelLibrary = Depends(get_library)):
    """Available background music files"""
    try:
        return library.list_music()
    except OSError:
        raise HTTPException(status_code=500, detail="Could not read music directory.")


@router.get("/templates")
async def list_templates(library: ReelLibrary = Depends(get_library)):
    """Available script templates as {id, name}"""
    try:
        return library.list_templates()
    except (OSError, ValueError):
        raise HTTPException(status_code=500, detail="Could not read templates directory.")


@router.get("/reel/{reel_id}")
async def get_reel(reel_id: str, library: ReelLibrary = Depends(get_library)):
    """Stream a reel's video file"""
    try:
        video_path = library.reel_video_path(reel_id)
    except ValueError:
        return PlainTextResponse("Invalid Reel ID format.", status_code=400)
    except FileNotFoundError:
        return PlainTextResponse("Reel not found.", status_code=404)
    return FileResponse(video_path, media_type="video/mp4")
