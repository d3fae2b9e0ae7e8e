from .base import GenerativeClient
from .factory import create_client
from .models import GenerateResult, Part, Role, Turn
from .providers import DEFAULT_BASE_URL, DEFAULT_MODEL_ID, GeminiClient

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_MODEL_ID",
    "GenerateResult",
    "GeminiClient",
    "GenerativeClient",
    "Part",
    "Role",
    "Turn",
    "create_client",
]
