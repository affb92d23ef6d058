import logging  # noqa: I001
from typing import Literal
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from genai_live.client.auth.credentials import CredentialService

logger = logging.getLogger(__name__)


AuthScheme = Literal['api_key', 'bearer']


class AuthInterceptor:
    """Adds authentication details to the connect request of a live session.

    `api_key` puts the credential in a query parameter of the endpoint URL;
    `bearer` sends it as an `Authorization: Bearer` header.
    """

    def __init__(
        self,
        credential_service: CredentialService,
        scheme: AuthScheme,
        *,
        query_param: str = 'key',
    ):
        self._credential_service = credential_service
        self._scheme = scheme
        self._query_param = query_param

    async def intercept(
        self, url: str, headers: dict[str, str]
    ) -> tuple[str, dict[str, str]]:
        """Returns the URL and headers with credentials applied, if available."""
        credential = await self._credential_service.get_credentials()
        if not credential:
            logger.debug(
                "No credential available for scheme '%s'.", self._scheme
            )
            return url, headers

        if self._scheme == 'bearer':
            headers = {**headers, 'Authorization': f'Bearer {credential}'}
            logger.debug('Added Bearer token.')
            return url, headers

        parts = urlsplit(url)
        query = [
            (k, v)
            for k, v in parse_qsl(parts.query)
            if k != self._query_param
        ]
        query.append((self._query_param, credential))
        url = urlunsplit(parts._replace(query=urlencode(query)))
        logger.debug("Added API key query parameter '%s'.", self._query_param)
        return url, headers
