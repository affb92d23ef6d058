"""Interactive console for a live session.

Reads lines from stdin and sends each one as a turn:

 - `exit` closes the session and quits.
 - `send_image <path>` sends an image file.
 - `send_audio <path>` sends a 16-bit PCM WAV (or raw `.pcm`) file.
 - anything else is sent as text.

Configuration comes from the environment (see `LiveClientConfig.from_env`).
"""

import asyncio
import logging
import sys

from pathlib import Path
from typing import TextIO

from genai_live.client import (
    LiveClientError,
    LiveClientFactory,
    LiveSession,
    TurnResult,
)
from genai_live.config import LiveClientConfig


logger = logging.getLogger(__name__)

PROMPT = (
    "Enter text input (type 'exit' to quit, 'send_image [file_path]' to send "
    "an image, 'send_audio [file_path]' to send audio):"
)

_MEDIA_COMMANDS = {
    'send_image': ('image', LiveSession.send_image),
    'send_audio': ('audio', LiveSession.send_audio),
}


def format_response(result: TurnResult) -> str:
    """Renders a turn result for the console."""
    if result.texts:
        return f'Gemini Response: {result.text}'
    if result.media_bytes:
        return f'Gemini Response: <{result.media_bytes} bytes of audio>'
    if result.timed_out:
        return 'Gemini Response: <no response before timeout>'
    return 'Gemini Response: '


async def run_console(
    session: LiveSession,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> None:
    """Runs the read-send-print loop until `exit`, EOF, or remote close."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    def emit(text: str) -> None:
        print(text, file=stdout, flush=True)

    emit(PROMPT)
    while True:
        line = await asyncio.to_thread(stdin.readline)
        if not line:
            break
        line = line.strip()
        if line.lower() == 'exit':
            break
        if not session.is_open:
            emit(f'Session closed: {session.close_reason}')
            break
        if not line:
            emit('Please input something!')
            continue

        command, _, argument = line.partition(' ')
        try:
            if command in _MEDIA_COMMANDS:
                kind, send = _MEDIA_COMMANDS[command]
                path = Path(argument.strip())
                if not argument.strip():
                    emit(f'Invalid command. Usage: {command} [file_path]')
                    continue
                if not path.is_file():
                    emit(f'Invalid {kind} file path.')
                    continue
                try:
                    await send(session, path)
                except OSError as e:
                    logger.debug('Could not read %s: %s', path, e)
                    emit(f'Invalid {kind} file path.')
                    continue
            else:
                await session.send_text(line)
        except ValueError as e:
            emit(str(e))
            continue
        except LiveClientError as e:
            logger.error('Turn failed: %s', e)
            break
        result = await session.await_response(until_turn_complete=True)
        emit(format_response(result))
        emit(PROMPT)
    await session.close()


async def run(config: LiveClientConfig) -> int:
    factory = LiveClientFactory(config)
    try:
        session = await factory.connect()
    except (LiveClientError, ValueError) as e:
        logger.error('Could not start live session: %s', e)
        return 1
    await run_console(session)
    return 0


def main() -> int:
    """Console entry point."""
    config = LiveClientConfig.from_env()
    logging.basicConfig(
        level=config.log_level, format='%(levelname)s  %(message)s'
    )
    return asyncio.run(run(config))
