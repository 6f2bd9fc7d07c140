from typing import Optional, Tuple
import uuid

from config.settings import settings
from core import cache
from core.data_url import decode_data_url, extension_for
from core.encoding import file_to_base64
from models.edit_session import SessionState, SessionView, UploadedImage
from services.gemini_service import GeminiImageService

NO_IMAGE_SELECTED = "Please upload an image first."
EMPTY_PROMPT = "Please enter an editing prompt."
ALREADY_SUBMITTING = "An edit is already in progress."
UNEXPECTED_ERROR = "An unexpected error occurred."

PREVIEW_URL_PREFIX = "/api/image-edit/previews"

class EditSession:
    """Session state for one user editing one image at a time.

    All mutation happens here, in response to user actions and to the
    completion of the single in-flight submission.
    """

    def __init__(self, gemini_service: GeminiImageService, session_id: Optional[str] = None):
        self.session_id = session_id or uuid.uuid4().hex
        self.gemini_service = gemini_service
        self.state = SessionState()
        # Bumped on every new image so a late result for an older image is dropped
        self._generation = 0

    def select_image(self, filename: Optional[str], content_type: str, content: bytes) -> None:
        """Replace the source image, its preview, and clear any result or error"""
        self._release_preview()

        self._generation += 1
        self.state.image = UploadedImage(filename=filename, content_type=content_type, content=content)
        self.state.preview_token = cache.create_preview(content, content_type)
        self.state.edited_image = None
        self.state.error = None
        print(f"🔍 Session {self.session_id}: selected {filename or 'image'} ({content_type}, {len(content)} bytes)")

    async def submit(self, prompt: str) -> Tuple[bool, Optional[str]]:
        """Encode the current image and run one edit request against Gemini"""
        if self.state.is_loading:
            return False, ALREADY_SUBMITTING

        if self.state.image is None:
            self.state.error = NO_IMAGE_SELECTED
            return False, NO_IMAGE_SELECTED
        if not prompt.strip():
            self.state.error = EMPTY_PROMPT
            return False, EMPTY_PROMPT

        self.state.prompt = prompt
        image = self.state.image
        generation = self._generation

        self.state.is_loading = True
        self.state.error = None
        self.state.edited_image = None

        try:
            success, image_data, error = await file_to_base64(image)
            if success:
                success, result, error = await self.gemini_service.edit_image(image_data, image.content_type, prompt)

            if generation != self._generation:
                print(f"🔍 Session {self.session_id}: discarding result for a replaced image")
                return False, None

            if success:
                self.state.edited_image = result
                return True, None

            self.state.error = error or UNEXPECTED_ERROR
            return False, self.state.error
        except Exception as error:
            print(f"❌ Session {self.session_id}: edit failed: {error}")
            message = str(error) or UNEXPECTED_ERROR
            if generation == self._generation:
                self.state.error = message
            return False, message
        finally:
            self.state.is_loading = False

    def download(self) -> Optional[Tuple[str, str, bytes]]:
        """Return (filename, media_type, content) for the current result, or None"""
        if not self.state.edited_image:
            return None

        media_type, content = decode_data_url(self.state.edited_image)
        filename = f"{settings.DOWNLOAD_BASENAME}.{extension_for(self.state.edited_image)}"
        return filename, media_type, content

    def view(self) -> SessionView:
        state = self.state
        preview_url = f"{PREVIEW_URL_PREFIX}/{state.preview_token}" if state.preview_token else None
        return SessionView(
            session_id=self.session_id,
            file_name=state.image.filename if state.image else None,
            original_preview_url=preview_url,
            edited_image=state.edited_image,
            prompt=state.prompt,
            is_loading=state.is_loading,
            can_submit=not state.is_loading and state.image is not None,
            error=state.error
        )

    def close(self) -> None:
        """Release resources held by the session"""
        self._release_preview()

    def _release_preview(self) -> None:
        if self.state.preview_token:
            cache.release_preview(self.state.preview_token)
            self.state.preview_token = None
