import io

from unittest.mock import AsyncMock, patch

import pytest

from genai_live.client import LiveConnectError, LiveSession, TurnResult
from genai_live.config import LiveClientConfig
from genai_live.console import format_response, main, run, run_console
from genai_live.utils.media import write_wav


async def _run_script(live_server, script: str) -> tuple[str, LiveSession]:
    session = await LiveSession.open(f'{live_server}/ws', timeout=2)
    stdout = io.StringIO()
    await run_console(session, io.StringIO(script), stdout)
    return stdout.getvalue(), session


@pytest.mark.asyncio
async def test_text_turns_and_exit(live_server):
    output, session = await _run_script(live_server, 'hello\n\nEXIT\n')
    assert 'Gemini Response: echo: hello' in output
    assert 'Please input something!' in output
    assert not session.is_open


@pytest.mark.asyncio
async def test_eof_closes_session(live_server):
    output, session = await _run_script(live_server, 'hi\n')
    assert 'Gemini Response: echo: hi' in output
    assert not session.is_open


@pytest.mark.asyncio
async def test_send_image_command(live_server, tmp_path):
    image = tmp_path / 'cat.png'
    image.write_bytes(b'\x89PNG')
    output, _ = await _run_script(
        live_server, f'send_image {image}\nexit\n'
    )
    assert 'Gemini Response: got image/png' in output


@pytest.mark.asyncio
async def test_send_audio_command(live_server, tmp_path):
    audio = write_wav(tmp_path / 'in.wav', b'\x00\x00' * 16, rate=16000)
    output, _ = await _run_script(
        live_server, f'send_audio {audio}\nexit\n'
    )
    assert 'Gemini Response: got audio/pcm;rate=16000' in output


@pytest.mark.asyncio
async def test_media_command_errors(live_server, tmp_path):
    bad_audio = tmp_path / 'bad.wav'
    bad_audio.write_bytes(b'not a riff file')
    output, _ = await _run_script(
        live_server,
        'send_image\n'
        f'send_image {tmp_path / "missing.png"}\n'
        f'send_audio {tmp_path / "missing.wav"}\n'
        f'send_audio {bad_audio}\n'
        'exit\n',
    )
    assert 'Invalid command. Usage: send_image [file_path]' in output
    assert 'Invalid image file path.' in output
    assert 'Invalid audio file path.' in output
    assert 'not a PCM WAV file' in output


@pytest.mark.asyncio
async def test_remote_close_ends_loop(live_server):
    output, session = await _run_script(
        live_server, 'please close\nhello\n'
    )
    assert 'Session closed: closing on request' in output
    assert not session.is_open


@pytest.mark.parametrize(
    'result, expected',
    [
        (TurnResult(texts=['a', 'b']), 'Gemini Response: ab'),
        (TurnResult(media_bytes=10), 'Gemini Response: <10 bytes of audio>'),
        (
            TurnResult(timed_out=True),
            'Gemini Response: <no response before timeout>',
        ),
        (TurnResult(), 'Gemini Response: '),
    ],
)
def test_format_response(result, expected):
    assert format_response(result) == expected


@pytest.mark.asyncio
async def test_run_reports_connect_failure(caplog):
    with patch(
        'genai_live.console.LiveClientFactory.connect',
        new=AsyncMock(side_effect=LiveConnectError('Network error: refused')),
    ):
        assert await run(LiveClientConfig(api_key='k')) == 1
    assert 'Could not start live session' in caplog.text


def test_main_configures_logging_and_runs(monkeypatch):
    monkeypatch.setenv('LOG_LEVEL', 'warning')
    with (
        patch('genai_live.console.logging.basicConfig') as basic_config,
        patch('genai_live.console.run', new=AsyncMock(return_value=0)) as run_mock,
    ):
        assert main() == 0
    basic_config.assert_called_once_with(
        level='WARNING', format='%(levelname)s  %(message)s'
    )
    run_mock.assert_awaited_once()


@pytest.mark.asyncio
async def test_unreadable_media_file_is_reported(live_server, tmp_path):
    image = tmp_path / 'locked.png'
    image.write_bytes(b'\x89PNG')
    with patch(
        'genai_live.client.session.read_image',
        side_effect=PermissionError('denied'),
    ):
        output, session = await _run_script(
            live_server, f'send_image {image}\nhello\nexit\n'
        )
    assert 'Invalid image file path.' in output
    assert 'Gemini Response: echo: hello' in output
    assert not session.is_open
