"""Environment-driven configuration for the live client."""

import os

from collections.abc import Mapping
from dataclasses import dataclass, field

from genai_live.types import DEFAULT_MODEL, TEXT_MODALITY


GEMINI_API_ENDPOINT = (
    'wss://generativelanguage.googleapis.com/ws/'
    'google.ai.generativelanguage.v1alpha.GenerativeService/BidiGenerateContent'
)
VERTEX_AI_ENDPOINT = (
    'wss://{location}-aiplatform.googleapis.com/ws/'
    'google.cloud.aiplatform.v1beta1.LlmBidiService/BidiGenerateContent'
)

DEFAULT_LOCATION = 'us-central1'
DEFAULT_TIMEOUT = 60.0
DEFAULT_AUDIO_FILE = 'combined_audio.wav'


@dataclass
class LiveClientConfig:
    """Configuration for connecting to the live API.

    The Gemini Developer API is used whenever `api_key` is set; otherwise the
    session goes to Vertex AI in `project` / `location`.

    Attributes:
        api_key: Gemini Developer API key.
        project: Google Cloud project for Vertex AI.
        location: Google Cloud region for Vertex AI.
        access_token: Pre-minted Vertex AI access token. When unset,
            Application Default Credentials are used.
        model: Model name, without the Vertex AI resource prefix.
        response_modalities: Output modalities requested from the model.
        timeout: Seconds to wait for the setup acknowledgement and for each
            turn's response.
        audio_file: Where accumulated audio output is saved on close.
        log_level: Logging level name for the console entry point.
        endpoint: Overrides the endpoint derived from the settings above.
    """

    api_key: str | None = None
    project: str | None = None
    location: str = DEFAULT_LOCATION
    access_token: str | None = None
    model: str = DEFAULT_MODEL
    response_modalities: list[str] = field(
        default_factory=lambda: [TEXT_MODALITY]
    )
    timeout: float = DEFAULT_TIMEOUT
    audio_file: str = DEFAULT_AUDIO_FILE
    log_level: str = 'INFO'
    endpoint: str | None = None

    @property
    def use_vertexai(self) -> bool:
        return not self.api_key

    def resolve_endpoint(self) -> str:
        """Returns the WebSocket endpoint for this configuration."""
        if self.endpoint:
            return self.endpoint
        if self.use_vertexai:
            return VERTEX_AI_ENDPOINT.format(location=self.location)
        return GEMINI_API_ENDPOINT

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None
    ) -> 'LiveClientConfig':
        """Builds a configuration from environment variables."""
        env = os.environ if environ is None else environ
        modalities = [
            m.strip().upper()
            for m in env.get('GENAI_LIVE_RESPONSE_MODALITIES', '').split(',')
            if m.strip()
        ]
        return cls(
            api_key=env.get('GOOGLE_API_KEY') or None,
            project=env.get('GOOGLE_CLOUD_PROJECT') or None,
            location=env.get('GOOGLE_CLOUD_LOCATION') or DEFAULT_LOCATION,
            access_token=env.get('GOOGLE_ACCESS_TOKEN') or None,
            model=env.get('GENAI_LIVE_MODEL') or DEFAULT_MODEL,
            response_modalities=modalities or [TEXT_MODALITY],
            timeout=float(env.get('GENAI_LIVE_TIMEOUT') or DEFAULT_TIMEOUT),
            audio_file=env.get('GENAI_LIVE_AUDIO_FILE') or DEFAULT_AUDIO_FILE,
            log_level=(env.get('LOG_LEVEL') or 'INFO').upper(),
            endpoint=env.get('GENAI_LIVE_ENDPOINT') or None,
        )
