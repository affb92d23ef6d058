"""Transports for the live client."""

from genai_live.client.transports.base import LiveTransport
from genai_live.client.transports.websocket import WebSocketTransport


__all__ = [
    'LiveTransport',
    'WebSocketTransport',
]
