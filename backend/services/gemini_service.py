import httpx
from typing import Tuple, Optional

from config.settings import settings
from core.data_url import build_data_url
from models.image_edit import GenerateContentResponse, find_first_inline_image

INVALID_API_KEY_MESSAGE = "The provided API key is not valid. Please check your configuration."
NO_IMAGE_MESSAGE = "No image data was found in the API response."
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred while communicating with the AI model."

PROMPT_PREAMBLE = (
    "A masterpiece, high-resolution, studio quality, intricate details, ethereal mood, "
    "dramatic lighting. Focus on textures like stained glass, iridescent crystal, and "
    "glowing filaments."
)

def build_enhanced_prompt(prompt: str) -> str:
    """Wrap the user's instruction with artistic keywords for better results"""
    return f'{PROMPT_PREAMBLE} Using the provided image as a base, edit it to: "{prompt}"'

class GeminiImageService:
    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gemini-2.5-flash-image",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def edit_image(self, image_data: str, mime_type: str, prompt: str) -> Tuple[bool, Optional[str], Optional[str]]:
        """Edit a base64 encoded image with Gemini and return the result as a data URL"""
        if not self.api_key:
            print("❌ Gemini API key not configured")
            return False, None, INVALID_API_KEY_MESSAGE

        payload = {
            "contents": [{
                "parts": [
                    {
                        "inlineData": {
                            "data": image_data,
                            "mimeType": mime_type
                        }
                    },
                    {
                        "text": build_enhanced_prompt(prompt)
                    }
                ]
            }],
            "generationConfig": {
                "responseModalities": ["IMAGE"]
            }
        }

        headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json"
        }

        try:
            print(f"🔍 Sending image edit request to Gemini model {self.model}")
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    f"{self.base_url}/models/{self.model}:generateContent",
                    json=payload,
                    headers=headers
                )
                response.raise_for_status()

                data = GenerateContentResponse.model_validate(response.json())

            inline_data = find_first_inline_image(data.parts())
            if inline_data is None:
                print("❌ Gemini response contained no image part")
                return False, None, NO_IMAGE_MESSAGE

            print(f"✅ Gemini returned an edited image ({inline_data.mime_type})")
            return True, build_data_url(inline_data.mime_type, inline_data.data), None

        except httpx.HTTPStatusError as error:
            return False, None, self._user_message(_service_error_message(error.response) or str(error))
        except Exception as error:
            return False, None, self._user_message(str(error))

    def _user_message(self, message: str) -> str:
        print(f"❌ Error editing image with Gemini: {message}")
        if not message.strip():
            return UNKNOWN_ERROR_MESSAGE
        if "API key not valid" in message:
            return INVALID_API_KEY_MESSAGE
        return f"Failed to edit image: {message}"

def _service_error_message(response: httpx.Response) -> Optional[str]:
    """Pull error.message out of a Gemini error body, if there is one"""
    try:
        error_data = response.json() if response.content else {}
    except ValueError:
        return response.text or None

    if not isinstance(error_data, dict):
        return None
    error = error_data.get("error")
    if isinstance(error, dict):
        return error.get("message")
    return None

def get_gemini_service() -> GeminiImageService:
    return GeminiImageService(
        api_key=settings.GEMINI_API_KEY,
        model=settings.GEMINI_MODEL,
        base_url=settings.GEMINI_API_BASE,
        timeout=settings.GEMINI_TIMEOUT_SECONDS
    )
