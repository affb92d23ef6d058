"""Helpers for reading media turns from disk and saving audio responses."""

import logging
import wave

from pathlib import Path


logger = logging.getLogger(__name__)

OUTPUT_SAMPLE_RATE = 24000
"""Sample rate of the PCM audio the model streams back."""
DEFAULT_INPUT_SAMPLE_RATE = 16000
"""Sample rate assumed for headerless `.pcm` input files."""

_IMAGE_MIME_TYPES = {
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.png': 'image/png',
    '.gif': 'image/gif',
    '.webp': 'image/webp',
}


def guess_image_mime_type(path: str | Path) -> str:
    """Returns the image MIME type for a file name, by extension."""
    suffix = Path(path).suffix.lower()
    return _IMAGE_MIME_TYPES.get(suffix, 'application/octet-stream')


def read_image(path: str | Path) -> tuple[bytes, str]:
    """Reads an image file.

    Returns:
        The file contents and its MIME type.
    """
    path = Path(path)
    return path.read_bytes(), guess_image_mime_type(path)


def read_audio_pcm(path: str | Path) -> tuple[bytes, str]:
    """Reads 16-bit PCM audio from a WAV or raw `.pcm` file.

    No resampling or transcoding is done: the sample rate of the file is
    declared in the returned MIME type.

    Returns:
        The PCM frames and a MIME type of the form `audio/pcm;rate=N`.

    Raises:
        ValueError: If a WAV file is not 16-bit mono PCM.
    """
    path = Path(path)
    if path.suffix.lower() != '.wav':
        return path.read_bytes(), f'audio/pcm;rate={DEFAULT_INPUT_SAMPLE_RATE}'
    try:
        with wave.open(str(path), 'rb') as wf:
            if wf.getsampwidth() != 2 or wf.getnchannels() != 1:
                raise ValueError(
                    f'{path.name}: expected 16-bit mono PCM, got '
                    f'{wf.getsampwidth() * 8}-bit with {wf.getnchannels()} channels'
                )
            rate = wf.getframerate()
            frames = wf.readframes(wf.getnframes())
    except (wave.Error, EOFError) as e:
        raise ValueError(f'{path.name}: not a PCM WAV file ({e})') from e
    return frames, f'audio/pcm;rate={rate}'


def write_wav(
    path: str | Path,
    pcm: bytes,
    *,
    channels: int = 1,
    rate: int = OUTPUT_SAMPLE_RATE,
    sample_width: int = 2,
) -> Path:
    """Saves raw PCM data as a WAV file and returns its path."""
    path = Path(path)
    with wave.open(str(path), 'wb') as wf:
        wf.setnchannels(channels)
        wf.setsampwidth(sample_width)
        wf.setframerate(rate)
        wf.writeframes(pcm)
    logger.info('Saved audio data to: %s', path)
    return path
