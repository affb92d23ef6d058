"""Parsing of inbound live frames into explicit result types.

Every inbound payload becomes either a `ParsedResponse` (a JSON object whose
known fields were extracted) or a `RawText` (anything that could not be decoded
as a JSON object). Parsing never raises; callers branch on the result type.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging

from dataclasses import dataclass, field
from typing import Any


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InlineData:
    """A binary blob carried inside a model turn part."""

    mime_type: str
    data: bytes

    @property
    def is_audio(self) -> bool:
        return self.mime_type.startswith('audio/')


@dataclass(frozen=True)
class ParsedResponse:
    """A structured server message."""

    raw: str
    payload: dict[str, Any]
    texts: list[str] = field(default_factory=list)
    inline_data: list[InlineData] = field(default_factory=list)
    setup_complete: bool = False
    turn_complete: bool = False

    @property
    def has_server_content(self) -> bool:
        return 'serverContent' in self.payload


@dataclass(frozen=True)
class RawText:
    """An opaque payload that could not be parsed as a JSON object."""

    text: str


ServerResponse = ParsedResponse | RawText


def decode_frame(frame: str | bytes) -> str:
    """Returns the frame as text, replacing undecodable bytes."""
    if isinstance(frame, bytes):
        return frame.decode('utf-8', errors='replace')
    return frame


def parse_server_frame(frame: str | bytes) -> ServerResponse:
    """Parses one inbound frame.

    Args:
        frame: The frame as delivered by the transport.

    Returns:
        A `ParsedResponse` for JSON objects, otherwise a `RawText`.
    """
    text = decode_frame(frame)
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning('Malformed JSON from server, treating as text: %s', e)
        return RawText(text=text)
    if not isinstance(payload, dict):
        logger.warning(
            'Unexpected %s payload from server, treating as text',
            type(payload).__name__,
        )
        return RawText(text=text)

    server_content = payload.get('serverContent')
    texts: list[str] = []
    inline_data: list[InlineData] = []
    turn_complete = False
    if isinstance(server_content, dict):
        turn_complete = bool(server_content.get('turnComplete'))
        for part in _model_turn_parts(server_content):
            if isinstance(part.get('text'), str):
                texts.append(part['text'])
            blob = _inline_data(part)
            if blob is not None:
                inline_data.append(blob)

    return ParsedResponse(
        raw=text,
        payload=payload,
        texts=texts,
        inline_data=inline_data,
        setup_complete='setupComplete' in payload,
        turn_complete=turn_complete,
    )


def _model_turn_parts(server_content: dict[str, Any]) -> list[dict[str, Any]]:
    model_turn = server_content.get('modelTurn')
    if not isinstance(model_turn, dict):
        return []
    parts = model_turn.get('parts')
    if not isinstance(parts, list):
        return []
    return [part for part in parts if isinstance(part, dict)]


def _inline_data(part: dict[str, Any]) -> InlineData | None:
    inline = part.get('inlineData')
    if not isinstance(inline, dict) or not isinstance(inline.get('data'), str):
        return None
    try:
        data = base64.b64decode(inline['data'], validate=True)
    except (binascii.Error, ValueError) as e:
        logger.warning('Dropping inline data with invalid base64: %s', e)
        return None
    return InlineData(
        mime_type=str(inline.get('mimeType', 'application/octet-stream')),
        data=data,
    )
