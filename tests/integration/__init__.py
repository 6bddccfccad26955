"""Integration tests for the chat endpoint working as a system.

Real FastAPI app, real form parsing, real PDF extraction and temp storage;
only the completion provider's network is replaced.
"""
