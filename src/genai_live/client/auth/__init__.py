from genai_live.client.auth.credentials import (
    CredentialService,
    GoogleDefaultCredentialService,
    StaticCredentialService,
)
from genai_live.client.auth.interceptor import AuthInterceptor, AuthScheme


__all__ = [
    'AuthInterceptor',
    'AuthScheme',
    'CredentialService',
    'GoogleDefaultCredentialService',
    'StaticCredentialService',
]
