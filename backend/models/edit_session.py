from pydantic import BaseModel
from typing import Optional

class UploadedImage(BaseModel):
    """Image selected by the user for one editing session"""
    filename: Optional[str] = None
    content_type: str
    content: bytes

    async def read(self) -> bytes:
        return self.content

class SessionState(BaseModel):
    image: Optional[UploadedImage] = None
    preview_token: Optional[str] = None
    edited_image: Optional[str] = None  # data:<mime>;base64,<payload>
    is_loading: bool = False
    error: Optional[str] = None
    prompt: str = ""

class SessionView(BaseModel):
    """Two-panel before/after view of a session"""
    session_id: str
    file_name: Optional[str] = None
    original_preview_url: Optional[str] = None
    edited_image: Optional[str] = None
    prompt: str = ""
    is_loading: bool = False
    can_submit: bool = False
    error: Optional[str] = None

class SessionResponse(BaseModel):
    success: bool
    session: Optional[SessionView] = None
    error: Optional[str] = None
