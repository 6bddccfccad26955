"""Fee Chat - an SESMag reviewer persona backed by an LLM.

Combines FastAPI for the chat endpoint, the OpenAI SDK for completions,
pypdf for document text, NiceGUI for the chat page, and Pydantic for
configuration and schemas.

Components:
    - api: HTTP endpoint, upload handling and middleware
    - agent: Configuration, system prompt and completion provider
    - parsing: PDF text extraction
    - ui: Chat page and transcript state
    - models: Response and transcript schemas
"""

__version__ = "0.1.0"
