"""NiceGUI chat page for talking to Fee."""

import re

from nicegui import events, ui

from fee_chat.models.schemas import Message, Sender
from fee_chat.ui.transcript import TranscriptController

TITLE = "Chat with Fee - SESMag"


def _wrap_lists(text: str, item_pattern: str, tag: str, classes: str) -> str:
    """Group consecutive lines matching ``item_pattern`` into an HTML list."""
    result: list[str] = []
    in_list = False
    for line in text.split("\n"):
        stripped = line.strip()
        if re.match(item_pattern, stripped):
            if not in_list:
                result.append(f'<{tag} class="{classes}">')
                in_list = True
            result.append(f"<li>{re.sub(item_pattern, '', stripped)}</li>")
            continue
        if in_list:
            result.append(f"</{tag}>")
            in_list = False
        result.append(line)
    if in_list:
        result.append(f"</{tag}>")
    return "\n".join(result)


def markdown_to_html(text: str) -> str:
    """Render the Markdown subset replies tend to use as HTML.

    Supports: bold, italic, inline code, code blocks, links, lists.
    Quotes are escaped so link targets cannot leave their attribute.
    """
    text = _escape_html(text)

    text = re.sub(
        r"```(\w*)\n?([\s\S]*?)```",
        r'<pre class="bg-slate-800 text-slate-100 rounded-md p-3 my-2 overflow-x-auto text-xs">'
        r"<code>\2</code></pre>",
        text,
    )
    text = re.sub(r"`([^`]+)`", r'<code class="bg-slate-200 px-1 rounded text-xs">\1</code>', text)
    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"__(.+?)__", r"<strong>\1</strong>", text)
    text = re.sub(r"\*([^*\n]+)\*", r"<em>\1</em>", text)
    text = re.sub(
        r"\[([^\]]+)\]\((https?://[^)\s]+)\)",
        r'<a href="\2" class="underline" target="_blank" rel="noopener">\1</a>',
        text,
    )

    text = _wrap_lists(text, r"^[-*]\s+", "ul", "list-disc list-inside my-2")
    text = _wrap_lists(text, r"^\d+\.\s+", "ol", "list-decimal list-inside my-2")

    return text.replace("\n", "<br>")


def _escape_html(text: str) -> str:
    escaped = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    return escaped.replace('"', "&quot;").replace("'", "&#x27;")


def _escape(text: str) -> str:
    return _escape_html(text).replace("\n", "<br>")


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    messages_container: ui.column
    input_field: ui.input
    send_btn: ui.button
    uploader: ui.upload
    attachment_label: ui.label

    def render_message(msg: Message) -> None:
        is_user = msg.sender == Sender.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "bg-blue-500 text-white" if is_user else "bg-gray-300 text-gray-800"
        content = _escape(msg.content) if is_user else markdown_to_html(msg.content)
        with ui.row().classes(f"w-full {align}"):
            with ui.element("div").classes(f"rounded-lg p-2 max-w-md {bubble}"):
                ui.html(content, sanitize=False).classes("text-sm leading-relaxed")

    def refresh() -> None:
        messages_container.clear()
        with messages_container:
            for msg in controller.messages:
                render_message(msg)
            if controller.awaiting_reply:
                with ui.row().classes("w-full justify-start"):
                    ui.label("Fee is typing...").classes(
                        "rounded-lg p-2 bg-gray-300 text-gray-800 italic"
                    )
        send_btn.set_enabled(not controller.awaiting_reply)
        if controller.attachment is None:
            attachment_label.set_text("")
        else:
            attachment_label.set_text(f"Attached: {controller.attachment.name}")

    def notify_error(error: str) -> None:
        ui.notify(error, type="negative")

    controller = TranscriptController(on_change=refresh, on_error=notify_error)

    async def handle_upload(e: events.UploadEventArguments) -> None:
        controller.attach(e.file.name, await e.file.read())
        uploader.reset()

    async def send_message() -> None:
        controller.input_text = input_field.value or ""
        if not controller.can_send:
            return
        input_field.value = ""
        await controller.send()

    # === UI Layout ===
    with ui.column().classes("w-full h-screen bg-gray-100 gap-0"):
        with ui.row().classes("w-full bg-blue-600 p-4 items-center justify-between"):
            ui.label(TITLE).classes("text-2xl text-white")
            ui.button(icon="add", on_click=controller.clear).props("flat round color=white")

        with ui.scroll_area().classes("flex-grow w-full"):
            messages_container = ui.column().classes("w-full p-4 gap-4")

        with ui.row().classes("w-full p-4 bg-white items-center gap-2"):
            uploader = (
                ui.upload(on_upload=handle_upload, auto_upload=True, max_files=1)
                .props("accept=application/pdf flat dense")
                .classes("w-48")
            )
            with ui.column().classes("flex-grow gap-0"):
                input_field = (
                    ui.input(placeholder="Type your message...")
                    .props("outlined dense")
                    .classes("w-full")
                    .on("keydown.enter", send_message)
                )
                attachment_label = ui.label().classes("text-xs text-gray-500")
            send_btn = ui.button("Send", on_click=send_message).props("unelevated color=primary")

    refresh()


def run(port: int = 8080) -> None:
    """Serve the chat page on its own NiceGUI server."""
    ui.run(title=TITLE, port=port, reload=False, show=False)
