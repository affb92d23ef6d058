"""Client-side components for talking to a live streaming model."""

import logging

from genai_live.client.auth import (
    AuthInterceptor,
    CredentialService,
    GoogleDefaultCredentialService,
    StaticCredentialService,
)
from genai_live.client.client_factory import LiveClientFactory
from genai_live.client.errors import (
    LiveClientError,
    LiveClientInvalidStateError,
    LiveConnectError,
    LiveSendError,
)
from genai_live.client.rendezvous import TurnRendezvous
from genai_live.client.responses import (
    InlineData,
    ParsedResponse,
    RawText,
    ServerResponse,
    parse_server_frame,
)
from genai_live.client.session import LiveSession, TurnResult
from genai_live.client.transports import LiveTransport, WebSocketTransport


logger = logging.getLogger(__name__)


__all__ = [
    'AuthInterceptor',
    'CredentialService',
    'GoogleDefaultCredentialService',
    'InlineData',
    'LiveClientError',
    'LiveClientFactory',
    'LiveClientInvalidStateError',
    'LiveConnectError',
    'LiveSendError',
    'LiveSession',
    'LiveTransport',
    'ParsedResponse',
    'RawText',
    'ServerResponse',
    'StaticCredentialService',
    'TurnRendezvous',
    'TurnResult',
    'WebSocketTransport',
    'parse_server_frame',
]
