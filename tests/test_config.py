from genai_live.config import (
    DEFAULT_AUDIO_FILE,
    GEMINI_API_ENDPOINT,
    LiveClientConfig,
)
from genai_live.types import DEFAULT_MODEL


def test_defaults_from_empty_environment():
    config = LiveClientConfig.from_env({})
    assert config.use_vertexai
    assert config.location == 'us-central1'
    assert config.model == DEFAULT_MODEL
    assert config.response_modalities == ['TEXT']
    assert config.timeout == 60.0
    assert config.audio_file == DEFAULT_AUDIO_FILE
    assert config.log_level == 'INFO'
    assert config.resolve_endpoint() == (
        'wss://us-central1-aiplatform.googleapis.com/ws/'
        'google.cloud.aiplatform.v1beta1.LlmBidiService/BidiGenerateContent'
    )


def test_api_key_selects_gemini_endpoint():
    config = LiveClientConfig.from_env({'GOOGLE_API_KEY': 'abc'})
    assert not config.use_vertexai
    assert config.resolve_endpoint() == GEMINI_API_ENDPOINT


def test_environment_overrides():
    config = LiveClientConfig.from_env(
        {
            'GOOGLE_CLOUD_PROJECT': 'proj',
            'GOOGLE_CLOUD_LOCATION': 'asia-northeast1',
            'GOOGLE_ACCESS_TOKEN': 'tok',
            'GENAI_LIVE_MODEL': 'gemini-live',
            'GENAI_LIVE_RESPONSE_MODALITIES': 'audio, text',
            'GENAI_LIVE_TIMEOUT': '5',
            'GENAI_LIVE_AUDIO_FILE': 'out.wav',
            'LOG_LEVEL': 'debug',
        }
    )
    assert config.project == 'proj'
    assert config.access_token == 'tok'
    assert config.model == 'gemini-live'
    assert config.response_modalities == ['AUDIO', 'TEXT']
    assert config.timeout == 5.0
    assert config.audio_file == 'out.wav'
    assert config.log_level == 'DEBUG'
    assert config.resolve_endpoint().startswith('wss://asia-northeast1-')


def test_explicit_endpoint_wins(monkeypatch):
    monkeypatch.setenv('GENAI_LIVE_ENDPOINT', 'ws://localhost:9000/ws')
    monkeypatch.setenv('GOOGLE_API_KEY', 'abc')
    config = LiveClientConfig.from_env()
    assert config.resolve_endpoint() == 'ws://localhost:9000/ws'
