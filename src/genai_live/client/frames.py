"""Builders for the outbound frames of a live session."""

import base64
import json

from typing import Any

from genai_live.types import LiveConnectConfig


def vertex_model_path(project: str, location: str, model: str) -> str:
    """Expands a bare model name into its Vertex AI resource path."""
    return (
        f'projects/{project}/locations/{location}'
        f'/publishers/google/models/{model}'
    )


def build_setup_message(
    config: LiveConnectConfig, *, model_path: str | None = None
) -> dict[str, Any]:
    """Builds the setup message sent as the first frame of a session.

    Args:
        config: The live connect configuration.
        model_path: Fully qualified model name to use instead of
            `config.model` (Vertex AI needs the resource path).

    Returns:
        The setup message as a dictionary.
    """
    generation_config = config.generation_config.to_wire()
    generation_config['responseModalities'] = config.response_modalities
    if config.wants_audio and 'speechConfig' not in generation_config:
        generation_config['speechConfig'] = {
            'voiceConfig': {
                'prebuiltVoiceConfig': {'voiceName': config.voice_name}
            }
        }

    setup: dict[str, Any] = {
        'model': model_path or config.model,
        'generationConfig': generation_config,
    }
    if config.system_instruction:
        setup['systemInstruction'] = {
            'parts': [{'text': config.system_instruction}]
        }
    return {'setup': setup}


def create_setup_frame(
    config: LiveConnectConfig, *, model_path: str | None = None
) -> str:
    """Serializes the setup message into a text frame."""
    return json.dumps(build_setup_message(config, model_path=model_path))


def create_text_turn_frame(text: str, *, turn_complete: bool = True) -> str:
    """Creates a `client_content` frame carrying a single user text turn."""
    return json.dumps(
        {
            'client_content': {
                'turns': [{'role': 'user', 'parts': [{'text': text}]}],
                'turn_complete': turn_complete,
            }
        }
    )


def create_media_frame(data: bytes, mime_type: str) -> str:
    """Creates a `realtime_input` frame carrying one base64-encoded media chunk."""
    return json.dumps(
        {
            'realtime_input': {
                'media_chunks': [
                    {
                        'mime_type': mime_type,
                        'data': base64.b64encode(data).decode('ascii'),
                    }
                ]
            }
        }
    )
