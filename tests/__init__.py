"""Test package for Companion Chat.

Structure:
    - unit/: Store, names, session orchestration, streaming adapter
    - integration/: HTTP endpoints through the ASGI app

The Gemini API is never called; the adapter is replaced by a scripted fake
or the SDK client is mocked.
"""
