from fastapi import APIRouter, HTTPException, UploadFile, File, Form, Response
from config.settings import settings
from core import cache
from core.encoding import file_to_base64
from models.edit_session import SessionResponse
from models.image_edit import ImageEditResponse, SubmitEditPayload
from services.edit_session import EditSession, ALREADY_SUBMITTING, EMPTY_PROMPT
from services.gemini_service import get_gemini_service

router = APIRouter(prefix="/image-edit", tags=["image-edit"])

def get_edit_session(session_id: str) -> EditSession:
    # Every action keeps the session and its preview alive for another TTL
    session = cache.touch_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    if session.state.preview_token:
        cache.touch_preview(session.state.preview_token)
    return session

def ensure_image_upload(image: UploadFile) -> None:
    content_type = image.content_type or ""
    if not content_type.startswith(settings.ALLOWED_IMAGE_PREFIX):
        raise HTTPException(status_code=400, detail=f"Unsupported file type: {content_type or 'unknown'}")

@router.post("/", response_model=ImageEditResponse)
async def edit_image(image: UploadFile = File(...), prompt: str = Form(...)):
    """Edit an uploaded image in one call, without keeping a session"""
    ensure_image_upload(image)
    if not prompt.strip():
        return ImageEditResponse(success=False, error=EMPTY_PROMPT)

    success, image_data, error = await file_to_base64(image)
    if not success:
        return ImageEditResponse(success=False, error=error)

    success, result_image_url, error = await get_gemini_service().edit_image(
        image_data,
        image.content_type,
        prompt
    )
    return ImageEditResponse(success=success, image_url=result_image_url, error=error)

@router.post("/sessions", response_model=SessionResponse)
async def create_session():
    """Start a new editing session"""
    session = EditSession(get_gemini_service())
    cache.store_session(session.session_id, session)
    return SessionResponse(success=True, session=session.view())

@router.get("/sessions/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str):
    session = get_edit_session(session_id)
    return SessionResponse(success=True, session=session.view())

@router.post("/sessions/{session_id}/image", response_model=SessionResponse)
async def select_image(session_id: str, image: UploadFile = File(...)):
    """Replace the session's source image"""
    session = get_edit_session(session_id)
    ensure_image_upload(image)

    content = await image.read()
    session.select_image(image.filename, image.content_type, content)
    return SessionResponse(success=True, session=session.view())

@router.post("/sessions/{session_id}/submit", response_model=SessionResponse)
async def submit_edit(session_id: str, payload: SubmitEditPayload):
    """Run one edit for the session's current image and prompt"""
    session = get_edit_session(session_id)
    if session.state.is_loading:
        raise HTTPException(status_code=409, detail=ALREADY_SUBMITTING)

    success, error = await session.submit(payload.prompt)
    return SessionResponse(success=success, session=session.view(), error=error)

@router.get("/sessions/{session_id}/download")
async def download_result(session_id: str):
    """Download the edited image as a file"""
    session = get_edit_session(session_id)
    try:
        result = session.download()
    except ValueError as error:
        # binascii.Error is a ValueError: the service returned an undecodable payload
        print(f"❌ Session {session_id}: edited image could not be decoded: {error}")
        raise HTTPException(status_code=502, detail="The edited image could not be decoded. Please try generating it again.")
    if result is None:
        raise HTTPException(status_code=404, detail="No edited image to download")

    filename, media_type, content = result
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )

@router.delete("/sessions/{session_id}", response_model=SessionResponse)
async def close_session(session_id: str):
    """End a session and release its preview"""
    session = cache.drop_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")

    session.close()
    return SessionResponse(success=True)

@router.get("/previews/{token}")
async def get_preview(token: str):
    preview = cache.get_preview(token)
    if preview is None:
        raise HTTPException(status_code=404, detail="Preview not found")

    content_type, content = preview
    return Response(content=content, media_type=content_type)

@router.get("/health")
async def check_gemini_config():
    """Check if Gemini is properly configured"""
    has_key = get_gemini_service().is_configured()

    return {
        "configured": has_key,
        "message": "Gemini API key configured" if has_key else "Gemini API key not set"
    }
