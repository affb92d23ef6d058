import asyncio
import logging

from abc import ABC, abstractmethod

import google.auth
import google.auth.transport.requests


logger = logging.getLogger(__name__)

CLOUD_PLATFORM_SCOPE = 'https://www.googleapis.com/auth/cloud-platform'


class CredentialService(ABC):
    """An abstract service for retrieving the credential of a live session."""

    @abstractmethod
    async def get_credentials(self) -> str | None:
        """Retrieves a credential (API key or access token), if available."""


class StaticCredentialService(CredentialService):
    """Serves a credential known up front, such as an API key."""

    def __init__(self, credential: str | None) -> None:
        self._credential = credential

    async def get_credentials(self) -> str | None:
        return self._credential


class GoogleDefaultCredentialService(CredentialService):
    """Serves OAuth access tokens from Application Default Credentials.

    The token is refreshed through `google-auth` whenever it is missing or
    expired. The refresh performs blocking HTTP and runs in a worker thread.
    """

    def __init__(self, scopes: list[str] | None = None) -> None:
        self._scopes = scopes or [CLOUD_PLATFORM_SCOPE]
        self._credentials = None

    async def get_credentials(self) -> str | None:
        return await asyncio.to_thread(self._refresh_token)

    def _refresh_token(self) -> str | None:
        if self._credentials is None:
            self._credentials, project = google.auth.default(
                scopes=self._scopes
            )
            logger.debug('Loaded default credentials for project %s', project)
        if not self._credentials.valid:
            self._credentials.refresh(google.auth.transport.requests.Request())
        return self._credentials.token
