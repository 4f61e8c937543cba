from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Optional

class ProcessingRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("content", "text"),
        description="Text to process"
    )
    operation: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("operation", "task"),
        description="Operation tag (e.g. 'summarize', 'translate')"
    )
    target_language: Optional[str] = Field(
        "en",
        validation_alias=AliasChoices("targetLanguage", "target_language"),
        description="Two-letter language code of the result"
    )
    summary_style: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("summaryStyle", "summary_style"),
        description="Summary style selected by the client"
    )

class ProcessingResponse(BaseModel):
    result: str

class UploadResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    extracted_text: str = Field(..., alias="extractedText")
    result: str

class ErrorResponse(BaseModel):
    error: str

class HealthResponse(BaseModel):
    status: str
    services: dict
