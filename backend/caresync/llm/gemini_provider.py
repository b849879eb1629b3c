"""
Google Gemini LLM Provider.
Uses Gemini's OpenAI-compatible endpoint, so the wire format is shared with OpenAIProvider.
"""

from .openai_provider import OpenAIProvider


class GeminiProvider(OpenAIProvider):
    """
    Provider for Gemini models (multimodal, JSON mode supported).
    The API key is sent as a bearer token, as the compatibility endpoint expects.
    """

    name = "gemini"

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai",
        default_temperature: float = 0.4,
        default_max_tokens: int = 4096,
        timeout: float = 120.0,
    ):
        super().__init__(
            api_key,
            model=model,
            base_url=base_url,
            default_temperature=default_temperature,
            default_max_tokens=default_max_tokens,
            timeout=timeout,
        )
