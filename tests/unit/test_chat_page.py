"""Unit tests for reply rendering on the chat page."""

import pytest

from fee_chat.ui.chat_page import _escape, markdown_to_html


class TestMarkdownToHtml:
    def test_bold_and_italic(self) -> None:
        html = markdown_to_html("**Strong** and *soft*")

        assert html == "<strong>Strong</strong> and <em>soft</em>"

    def test_link_rendered(self) -> None:
        html = markdown_to_html("[docs](https://example.com/guide)")

        assert html.startswith('<a href="https://example.com/guide" class="underline"')
        assert html.endswith(">docs</a>")

    def test_bullet_list(self) -> None:
        html = markdown_to_html("- one\n- two")

        assert '<ul class="list-disc list-inside my-2">' in html
        assert "<li>one</li>" in html
        assert "<li>two</li>" in html

    def test_raw_html_is_escaped(self) -> None:
        html = markdown_to_html("<script>alert(1)</script>")

        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    @pytest.mark.parametrize(
        ("reply", "href"),
        [
            (
                '[click](https://x.example/"onmouseover="alert(1))',
                "https://x.example/&quot;onmouseover=&quot;alert(1",
            ),
            (
                "[click](https://x.example/'onmouseover='alert(1))",
                "https://x.example/&#x27;onmouseover=&#x27;alert(1",
            ),
        ],
        ids=["double-quote", "single-quote"],
    )
    def test_link_target_cannot_leave_href(self, reply: str, href: str) -> None:
        html = markdown_to_html(reply)

        assert html.startswith(f'<a href="{href}" class="underline"')
        assert '"onmouseover' not in html
        assert "'" not in html


def test_user_text_escaped_with_line_breaks() -> None:
    assert _escape('a < "b"\nc') == "a &lt; &quot;b&quot;<br>c"
