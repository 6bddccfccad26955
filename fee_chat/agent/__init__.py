"""Completion provider integration and prompt assembly.

Turns a composed system + user exchange into generated text.

Responsibilities:
    - Configuration for the provider, prompt sources and request limits
    - One-time system prompt assembly from persona and context files
    - Single-shot completion calls with provider error classification

Maintains clean separation from the HTTP layer.
"""

from fee_chat.agent.completion import FALLBACK_REPLY, CompletionService, ProviderError
from fee_chat.agent.config import ChatConfig, get_chat_config
from fee_chat.agent.prompt import PromptInitializationError, build_system_prompt

__all__ = [
    "FALLBACK_REPLY",
    "ChatConfig",
    "CompletionService",
    "PromptInitializationError",
    "ProviderError",
    "build_system_prompt",
    "get_chat_config",
]
