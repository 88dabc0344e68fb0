"""Provider integrations."""

from .gemini import for_signature, generation_config, request_body

__all__ = ["for_signature", "generation_config", "request_body"]
