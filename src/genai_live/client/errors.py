"""Custom exceptions for the live session client."""


class LiveClientError(Exception):
    """Base exception for live session client errors."""


class LiveConnectError(LiveClientError):
    """Client exception raised when a live session cannot be established.

    Covers transport failures, rejected credentials, and a missing setup
    acknowledgement. The session is unusable afterwards and must be recreated.
    """

    def __init__(self, message: str):
        """Initializes the LiveConnectError.

        Args:
            message: A descriptive error message.
        """
        self.message = message
        super().__init__(f'Connect Error: {message}')

    def __repr__(self) -> str:
        """Returns an unambiguous representation of the error."""
        return f'{self.__class__.__name__}(message={self.message!r})'


class LiveSendError(LiveClientError):
    """Client exception raised when a frame cannot be written to the channel."""

    def __init__(self, message: str):
        """Initializes the LiveSendError.

        Args:
            message: A descriptive error message.
        """
        self.message = message
        super().__init__(f'Send Error: {message}')

    def __repr__(self) -> str:
        """Returns an unambiguous representation of the error."""
        return f'{self.__class__.__name__}(message={self.message!r})'


class LiveClientInvalidStateError(LiveClientError):
    """Client exception for operations attempted in the wrong session state."""

    def __init__(self, message: str):
        """Initializes the LiveClientInvalidStateError.

        Args:
            message: A descriptive error message.
        """
        self.message = message
        super().__init__(f'Invalid state error: {message}')

    def __repr__(self) -> str:
        """Returns an unambiguous representation of the error."""
        return f'{self.__class__.__name__}(message={self.message!r})'
