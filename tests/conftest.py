import base64
import json

from http import HTTPStatus

import pytest_asyncio

from websockets.asyncio.server import serve


VALID_TOKEN = 'good-token'
AUDIO_REPLY = b'\x01\x00\x02\x00\x03\x00\x04\x00'


def _reply_for(message: dict) -> list[dict]:
    """Scripted replies of the mock live service."""
    if 'client_content' in message:
        text = message['client_content']['turns'][0]['parts'][0]['text']
        return [
            {'serverContent': {'modelTurn': {'parts': [{'text': 'echo: '}]}}},
            {'serverContent': {'modelTurn': {'parts': [{'text': text}]}}},
            {'serverContent': {'turnComplete': True}},
        ]
    if 'realtime_input' in message:
        chunk = message['realtime_input']['media_chunks'][0]
        return [
            {
                'serverContent': {
                    'modelTurn': {
                        'parts': [
                            {'text': f'got {chunk["mime_type"]}'},
                            {
                                'inlineData': {
                                    'mimeType': 'audio/pcm;rate=24000',
                                    'data': base64.b64encode(
                                        AUDIO_REPLY
                                    ).decode(),
                                }
                            },
                        ]
                    },
                    'turnComplete': True,
                }
            }
        ]
    return []


def _turn_text(raw) -> str | None:
    try:
        message = json.loads(raw)
        return message['client_content']['turns'][0]['parts'][0]['text']
    except (ValueError, KeyError, IndexError, TypeError):
        return None


async def _handler(websocket):
    path = websocket.request.path
    async for raw in websocket:
        if raw == 'please close' or _turn_text(raw) == 'please close':
            await websocket.close(1011, 'closing on request')
            return
        if raw == 'garbage':
            await websocket.send(b'\x00not json')
            continue
        message = json.loads(raw)
        if 'setup' in message:
            if path.startswith('/silent'):
                continue
            if path.startswith('/reject'):
                await websocket.close(1008, 'unknown model')
                return
            await websocket.send(b'{"setupComplete": {}}')
            continue
        for reply in _reply_for(message):
            await websocket.send(json.dumps(reply).encode())


def _check_auth(connection, request):
    if request.path.startswith('/secure'):
        if request.headers.get('Authorization') != f'Bearer {VALID_TOKEN}':
            return connection.respond(HTTPStatus.UNAUTHORIZED, 'denied\n')
    return None


@pytest_asyncio.fixture
async def live_server():
    """Runs a scripted live service and yields its base URL."""
    async with serve(
        _handler, '127.0.0.1', 0, process_request=_check_auth
    ) as server:
        port = server.sockets[0].getsockname()[1]
        yield f'ws://127.0.0.1:{port}'
