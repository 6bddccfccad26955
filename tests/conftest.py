"""Pytest fixtures and shared test configuration.

Fixtures:
    - prompt_dir: Persona and context Markdown sources
    - chat_config: ChatConfig pointing at temporary prompt and upload dirs
    - fake_completion: Recording stand-in for the completion provider
    - app / async_client: FastAPI app and HTTPX client over ASGI
    - hello_pdf: One-page PDF containing "Hello World"

Also exposes ``build_pdf`` for tests that need other documents.
"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("OPENAI_API_KEY", "sk-test-key")

from fee_chat.agent.config import ChatConfig  # noqa: E402
from fee_chat.api.app import create_app  # noqa: E402

SYSTEM_PROMPT = "You are Fee, a test reviewer."


def build_pdf(*page_texts: str) -> bytes:
    """Build a minimal PDF with one Helvetica text line per page."""
    page_count = len(page_texts)
    font_id = 3 + 2 * page_count
    kids = " ".join(f"{3 + 2 * i} 0 R" for i in range(page_count))

    objects: list[bytes] = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {page_count} >>".encode(),
    ]
    for i, text in enumerate(page_texts):
        stream = f"BT /F1 24 Tf 72 720 Td ({text}) Tj ET".encode("latin-1")
        objects.append(
            (
                f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Contents {4 + 2 * i} 0 R "
                f"/Resources << /Font << /F1 {font_id} 0 R >> >> >>"
            ).encode()
        )
        objects.append(
            f"<< /Length {len(stream)} >>\nstream\n".encode() + stream + b"\nendstream"
        )
    objects.append(b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>")

    out = bytearray(b"%PDF-1.4\n")
    offsets: list[int] = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"

    xref_offset = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_offset}\n%%EOF\n"
    ).encode()
    return bytes(out)


class FakeCompletionService:
    """Records every message list it receives and returns a canned reply."""

    def __init__(self, reply: str = "A thoughtful review.", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[list[dict[str, Any]]] = []

    async def complete(self, messages: list[dict[str, Any]]) -> str:
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.reply

    async def aclose(self) -> None:
        pass

    @property
    def last_user_text(self) -> str:
        return self.calls[-1][1]["content"]


@pytest.fixture
def prompt_dir(tmp_path: Path) -> Path:
    """Directory holding persona and context Markdown sources."""
    directory = tmp_path / "prompts"
    directory.mkdir()
    (directory / "context.md").write_text("# Context\n\nSESMag reviews look at **SES** factors.\n")
    (directory / "persona.md").write_text("# Fee\n\n- Accountant\n- High self-efficacy\n")
    return directory


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def chat_config(prompt_dir: Path, upload_dir: Path) -> ChatConfig:
    """Configuration isolated from the environment and the packaged prompts."""
    return ChatConfig(
        api_key="sk-test-key",
        base_url=None,
        model_name="gpt-4o",
        temperature=0.7,
        max_tokens=1500,
        timeout=5.0,
        context_path=prompt_dir / "context.md",
        persona_path=prompt_dir / "persona.md",
        persona_name="Fee",
        domain_name="SESMag",
        upload_dir=upload_dir,
        max_upload_bytes=1024 * 1024,
        rate_limit_requests=100,
        rate_limit_window_seconds=900,
    )


@pytest.fixture
def fake_completion() -> FakeCompletionService:
    return FakeCompletionService()


@pytest.fixture
def app(chat_config: ChatConfig, fake_completion: FakeCompletionService) -> FastAPI:
    return create_app(
        config=chat_config,
        system_prompt=SYSTEM_PROMPT,
        completion_service=fake_completion,
    )


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def hello_pdf() -> bytes:
    return build_pdf("Hello World")
