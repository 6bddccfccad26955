"""Test package for Fee chat.

Structure:
    - unit/: Individual function and class tests
    - integration/: Endpoint tests through the full FastAPI stack

Test PDFs are generated in fixtures; the completion provider is faked or
served by an httpx MockTransport, so no API key or network is needed.
Leverages pytest with pytest-check for soft assertions.
"""
