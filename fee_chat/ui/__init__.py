"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Chat transcript display with Markdown rendering for replies
    - PDF picker for a single attachment per message
    - Typing indicator and disabled send while a reply is awaited

Contains minimal business logic. Delegates all operations to the API.
"""
