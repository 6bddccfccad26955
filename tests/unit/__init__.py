"""Unit tests for individual components in isolation.

Coverage:
    - agent/: Configuration, prompt assembly, completion client
    - parsing/: PDF text extraction
    - api/: Upload storage and middleware
    - ui/: Transcript controller and HTTP client
"""
