"""Unit tests for the UI's HTTP client."""

import httpx
import pytest

from fee_chat.ui.client import Attachment, ChatClientError, post_chat_message


def transport_returning(response: httpx.Response, seen: list[httpx.Request]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return response

    return httpx.MockTransport(handler)


async def test_posts_multipart_message() -> None:
    seen: list[httpx.Request] = []
    transport = transport_returning(httpx.Response(200, json={"message": "Hi!"}), seen)

    reply = await post_chat_message("Summarize this", base_url="http://api", transport=transport)

    assert reply == "Hi!"
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "http://api/api/chat"
    assert request.headers["content-type"].startswith("multipart/form-data")
    body = request.read()
    assert b'name="message"' in body
    assert b"Summarize this" in body
    assert b'name="file"' not in body


async def test_posts_attachment_as_file_field() -> None:
    seen: list[httpx.Request] = []
    transport = transport_returning(httpx.Response(200, json={"message": "ok"}), seen)
    attachment = Attachment(name="report.pdf", content=b"%PDF-1.4 test")

    await post_chat_message("", attachment, base_url="http://api", transport=transport)

    body = seen[0].read()
    assert b'name="file"; filename="report.pdf"' in body
    assert b"%PDF-1.4 test" in body
    assert b"application/pdf" in body


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": "boom"}),
        httpx.Response(429, json={"error": "rate limited"}),
        httpx.Response(200, text="not json"),
        httpx.Response(200, json={"unexpected": "shape"}),
        httpx.Response(200, json={"message": 42}),
    ],
    ids=["server-error", "rate-limited", "not-json", "missing-field", "wrong-type"],
)
async def test_failures_raise_client_error(response: httpx.Response) -> None:
    transport = transport_returning(response, [])

    with pytest.raises(ChatClientError):
        await post_chat_message("hi", base_url="http://api", transport=transport)


async def test_connection_failure_raises_client_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(ChatClientError, match="Connection failed"):
        await post_chat_message(
            "hi", base_url="http://api", transport=httpx.MockTransport(handler)
        )
