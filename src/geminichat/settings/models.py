"""Data model for persisted settings.

Independent of the storage backend used.
"""

from pydantic import BaseModel, Field, field_validator

from ..llm import DEFAULT_MODEL_ID


class SettingsState(BaseModel):
    """Credential, selected model and cached catalog.

    A blank or missing selected model is normalized to the default id, so a
    stored state always names a usable model.
    """

    api_key: str = Field(default="", description="Gemini API key")
    selected_model_id: str = Field(default=DEFAULT_MODEL_ID, description="Model used for new requests")
    available_model_ids: list[str] = Field(default_factory=list, description="Last fetched catalog")

    @field_validator("selected_model_id", mode="before")
    @classmethod
    def _default_blank_model(cls, value: object) -> object:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_MODEL_ID
        return value

    @field_validator("available_model_ids", mode="before")
    @classmethod
    def _default_missing_ids(cls, value: object) -> object:
        return [] if value is None else value
