"""Pydantic models describing the live session configuration."""

from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


TEXT_MODALITY = 'TEXT'
AUDIO_MODALITY = 'AUDIO'

DEFAULT_MODEL = 'gemini-2.0-flash-001'
DEFAULT_VOICE_NAME = 'Aoede'


class LiveBaseModel(BaseModel):
    """Base model for all live session types.

    Fields are declared in snake_case and serialized in the camelCase the
    service expects.
    """

    model_config = {
        'extra': 'allow',
        'populate_by_name': True,
        'alias_generator': to_camel,
    }

    def to_wire(self) -> dict[str, Any]:
        """Dumps the model using wire (camelCase) names, dropping unset values."""
        return self.model_dump(mode='json', by_alias=True, exclude_none=True)


class GenerationConfig(LiveBaseModel):
    """Sampling and output options sent with the setup frame."""

    candidate_count: int | None = None
    max_output_tokens: int | None = None
    temperature: float | None = None
    top_p: float | None = None
    top_k: int | None = None
    presence_penalty: float | None = None
    frequency_penalty: float | None = None
    response_modalities: list[str] = Field(
        default_factory=lambda: [TEXT_MODALITY]
    )
    """Output modalities requested from the model: TEXT, AUDIO or both."""
    speech_config: dict[str, Any] | None = None
    """Explicit speech config. When unset and AUDIO output is requested, a
    prebuilt voice config is generated from `LiveConnectConfig.voice_name`."""


class LiveConnectConfig(LiveBaseModel):
    """Everything the setup frame needs to open a live session."""

    model: str = DEFAULT_MODEL
    generation_config: GenerationConfig = Field(
        default_factory=GenerationConfig
    )
    system_instruction: str | None = None
    voice_name: str = DEFAULT_VOICE_NAME

    @property
    def response_modalities(self) -> list[str]:
        return [m.upper() for m in self.generation_config.response_modalities]

    @property
    def wants_text(self) -> bool:
        return TEXT_MODALITY in self.response_modalities

    @property
    def wants_audio(self) -> bool:
        return AUDIO_MODALITY in self.response_modalities
