from __future__ import annotations

import logging

from collections.abc import Callable
from typing import Any

from genai_live.client.auth import (
    AuthInterceptor,
    CredentialService,
    GoogleDefaultCredentialService,
    StaticCredentialService,
)
from genai_live.client.frames import vertex_model_path
from genai_live.client.session import LiveSession
from genai_live.client.transports.base import LiveTransport
from genai_live.client.transports.websocket import WebSocketTransport
from genai_live.config import LiveClientConfig
from genai_live.types import GenerationConfig, LiveConnectConfig


logger = logging.getLogger(__name__)


class LiveClientFactory:
    """LiveClientFactory is used to generate live sessions from configuration.

    It picks the endpoint (Gemini Developer API or Vertex AI), applies
    credentials to the connect request, and qualifies the model name the way
    the chosen endpoint expects.
    """

    def __init__(
        self,
        config: LiveClientConfig,
        *,
        credential_service: CredentialService | None = None,
        transport_factory: Callable[[], LiveTransport] | None = None,
    ):
        self._config = config
        self._credential_service = (
            credential_service or self._default_credential_service()
        )
        self._transport_factory = transport_factory or (
            lambda: WebSocketTransport(open_timeout=config.timeout)
        )
        self._interceptor = AuthInterceptor(
            self._credential_service,
            'bearer' if config.use_vertexai else 'api_key',
        )

    def _default_credential_service(self) -> CredentialService:
        if not self._config.use_vertexai:
            return StaticCredentialService(self._config.api_key)
        if self._config.access_token:
            return StaticCredentialService(self._config.access_token)
        return GoogleDefaultCredentialService()

    def build_connect_config(
        self,
        *,
        system_instruction: str | None = None,
        **generation_options: Any,
    ) -> LiveConnectConfig:
        """Builds the setup configuration for the configured model.

        Args:
            system_instruction: Optional system instruction for the model.
            **generation_options: Extra `GenerationConfig` fields such as
                `temperature` or `max_output_tokens`.
        """
        generation_options.setdefault(
            'response_modalities', list(self._config.response_modalities)
        )
        return LiveConnectConfig(
            model=self._config.model,
            generation_config=GenerationConfig(**generation_options),
            system_instruction=system_instruction,
        )

    def model_path(self, model: str) -> str:
        """Returns the model name as the endpoint expects it in the setup frame.

        Raises:
            ValueError: If Vertex AI is selected without a project.
        """
        if not self._config.use_vertexai:
            return model
        if not self._config.project:
            raise ValueError(
                'GOOGLE_CLOUD_PROJECT must be set when no GOOGLE_API_KEY is given'
            )
        return vertex_model_path(
            self._config.project, self._config.location, model
        )

    async def create_session(
        self, connect_config: LiveConnectConfig | None = None
    ) -> LiveSession:
        """Creates a session with credentials applied, without connecting it."""
        connect_config = connect_config or self.build_connect_config()
        url, headers = await self._interceptor.intercept(
            self._config.resolve_endpoint(), {}
        )
        logger.debug(
            'Creating live session (vertexai=%s, model=%s)',
            self._config.use_vertexai,
            connect_config.model,
        )
        return LiveSession(
            url,
            connect_config,
            transport=self._transport_factory(),
            headers=headers,
            model_path=self.model_path(connect_config.model),
            timeout=self._config.timeout,
            audio_file=self._config.audio_file,
        )

    async def connect(
        self, connect_config: LiveConnectConfig | None = None
    ) -> LiveSession:
        """Creates a session and connects it."""
        session = await self.create_session(connect_config)
        await session.connect()
        return session
