"""Script drafting and reel production endpoints"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from core.library import ReelLibrary
from core.models.script import Script
from core.producer import ReelProducer
from core.script_writer import ScriptWriter
from server.dependencies import get_library, get_producer, get_script_writer
from server.errors import provider_error_response
from server.models import (
    CreateVideoRequest,
    CreateVideoResponse,
    GenerateScriptRequest,
    RegeneratePartRequest,
    RegeneratePartResponse,
)


router = APIRouter()


@router.post("/generate-script")
async def generate_script(
    body: GenerateScriptRequest,
    library: ReelLibrary = Depends(get_library),
    writer: ScriptWriter = Depends(get_script_writer),
):
    """Draft a script, either keeping the input sentences or via a template"""
    if not body.text:
        return JSONResponse(status_code=400, content={"error": "Input text is required."})

    if body.keepNarration:
        script_task = writer.split_text_to_script(body.text)
    else:
        try:
            template = library.load_template(body.templateId or "")
        except FileNotFoundError:
            return JSONResponse(status_code=400, content={"error": "Template not found."})
        script_task = writer.generate_script(body.text, template)

    try:
        script = await script_task
    except ValueError as e:
        return provider_error_response(e)
    return script.to_dict()


@router.post("/regenerate-part", response_model=RegeneratePartResponse)
async def regenerate_part(body: RegeneratePartRequest, writer: ScriptWriter = Depends(get_script_writer)):
    """Rewrite the narration or visual prompt of one scene"""
    script = Script.from_dict(body.script.model_dump())
    try:
        new_text = await writer.regenerate_script_part(script, body.sceneIndex, body.part)
    except IndexError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    return {"newText": new_text}


@router.post("/create-video", response_model=CreateVideoResponse)
async def create_video(body: CreateVideoRequest, producer: ReelProducer = Depends(get_producer)):
    """Produce a reel from an approved script"""
    reel = await producer.create_reel(
        script=Script.from_dict(body.script.model_dump()),
        music_file=body.musicFile,
        overlay_text=body.overlayText,
        voice_id=body.voiceId,
        original_text=body.originalText,
        template_id=body.templateId,
    )
    return {"videoUrl": reel.video_url}
