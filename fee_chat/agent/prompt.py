"""System prompt assembly from the persona and context Markdown sources.

The prompt is built once at startup and handed to the chat orchestrator.
Unreadable sources degrade to an empty string; if neither source yields any
text the service has no grounding context and must not start.
"""

import logging
import re
from pathlib import Path

from fee_chat.agent.config import ChatConfig

logger = logging.getLogger(__name__)

INSTRUCTION_TEMPLATE = (
    "You are {persona}, a knowledgeable and insightful reviewer for {domain}. "
    "You provide thoughtful analyses and reviews based on the provided documents "
    "and your extensive understanding of {domain}."
)


class PromptInitializationError(Exception):
    """Raised when no grounding context could be loaded for the system prompt."""

    pass


def markdown_to_text(text: str) -> str:
    """Strip Markdown syntax and HTML tags, keeping the readable text.

    Handles: fenced and inline code, images, links, headings, emphasis,
    block quotes, list bullets, horizontal rules.
    """
    # Fenced code blocks keep their body
    text = re.sub(r"```[^\n]*\n([\s\S]*?)```", r"\1", text)
    text = re.sub(r"`([^`]+)`", r"\1", text)

    # Images before links, both keep their label
    text = re.sub(r"!\[([^\]]*)\]\([^)]*\)", r"\1", text)
    text = re.sub(r"\[([^\]]+)\]\([^)]*\)", r"\1", text)

    # Raw HTML
    text = re.sub(r"<[^>]+>", "", text)

    lines = []
    for line in text.split("\n"):
        stripped = line.strip()
        if re.fullmatch(r"([-*_]\s*){3,}", stripped):
            continue
        stripped = re.sub(r"^#{1,6}\s+", "", stripped)
        stripped = re.sub(r"^>\s?", "", stripped)
        stripped = re.sub(r"^([-*+]|\d+\.)\s+", "", stripped)
        lines.append(stripped)
    text = "\n".join(lines)

    # Bold then italic
    text = re.sub(r"\*\*(.+?)\*\*", r"\1", text)
    text = re.sub(r"__(.+?)__", r"\1", text)
    text = re.sub(r"\*([^*\n]+)\*", r"\1", text)
    text = re.sub(r"(?<!\w)_([^_\n]+)_(?!\w)", r"\1", text)

    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def load_markdown_text(path: Path) -> str:
    """Read a Markdown file and return it as plain text.

    Args:
        path: Markdown file to read.

    Returns:
        Plain text content, or an empty string if the file cannot be read.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Error reading prompt source at {path}: {e}")
        return ""
    return markdown_to_text(content)


def build_system_prompt(config: ChatConfig) -> str:
    """Assemble the fixed system prompt used for every request.

    Args:
        config: Chat configuration naming the sources and persona.

    Returns:
        Context, persona and instruction joined by blank lines.

    Raises:
        PromptInitializationError: If both sources are missing or empty.
    """
    context = load_markdown_text(config.context_path)
    persona = load_markdown_text(config.persona_path)

    if not context and not persona:
        raise PromptInitializationError(
            f"No prompt context loaded from {config.context_path} or {config.persona_path}"
        )

    instruction = INSTRUCTION_TEMPLATE.format(
        persona=config.persona_name,
        domain=config.domain_name,
    )
    parts = [part for part in (context, persona, instruction) if part]
    system_prompt = "\n\n".join(parts)

    logger.info(
        f"System prompt ready ({len(system_prompt)} chars, "
        f"context={'yes' if context else 'no'}, persona={'yes' if persona else 'no'})"
    )
    return system_prompt
