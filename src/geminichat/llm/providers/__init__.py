from .gemini import DEFAULT_BASE_URL, DEFAULT_MODEL_ID, GeminiClient

__all__ = ["DEFAULT_BASE_URL", "DEFAULT_MODEL_ID", "GeminiClient"]
