"""Python client for live (bidirectional streaming) generative model sessions.

A session opens one persistent WebSocket to the live endpoint, sends a setup
frame, and then exchanges turns: text via `client_content`, images and audio
via `realtime_input`. Responses stream back asynchronously and are handed to
the caller one turn at a time.

Example usage:

    from genai_live.client import LiveClientFactory
    from genai_live.config import LiveClientConfig

    factory = LiveClientFactory(LiveClientConfig.from_env())
    async with await factory.create_session() as session:
        result = await session.ask('Hello there')
        print(result.text)
"""

from genai_live import client, config, types


__all__ = ['client', 'config', 'types']
