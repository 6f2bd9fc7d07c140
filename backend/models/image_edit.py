from pydantic import BaseModel, ConfigDict, Field
from typing import Annotated, List, Optional, Union

class ImageEditResponse(BaseModel):
    success: bool
    image_url: Optional[str] = None  # data:<mime>;base64,<payload>
    error: Optional[str] = None

class SubmitEditPayload(BaseModel):
    prompt: str

# Gemini generateContent wire models

class InlineData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    mime_type: str = Field("image/png", alias="mimeType")
    data: str

class InlineDataPart(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    inline_data: InlineData = Field(alias="inlineData")

class TextPart(BaseModel):
    text: str = ""

# Tried in order: a part is inline data if it carries inlineData, text otherwise
Part = Annotated[Union[InlineDataPart, TextPart], Field(union_mode="left_to_right")]

class Content(BaseModel):
    role: Optional[str] = None
    parts: List[Part] = []

class Candidate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: Optional[Content] = None
    finish_reason: Optional[str] = Field(None, alias="finishReason")

class GenerateContentResponse(BaseModel):
    candidates: List[Candidate] = []

    def parts(self) -> List[Union[InlineDataPart, TextPart]]:
        """Parts of the first candidate, in order"""
        if not self.candidates or self.candidates[0].content is None:
            return []
        return self.candidates[0].content.parts

def find_first_inline_image(parts: List[Union[InlineDataPart, TextPart]]) -> Optional[InlineData]:
    """Return the first part carrying inline image bytes, or None when no part does"""
    for part in parts:
        if isinstance(part, InlineDataPart) and part.inline_data.data:
            return part.inline_data
    return None
