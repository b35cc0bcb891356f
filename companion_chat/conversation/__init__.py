"""Conversation state and the submission orchestration.

Responsibilities:
    - Ordered, append-only message store with replace-by-id and reset
    - Assistant display name validation and persistence
    - Streaming accumulation loop that fills the placeholder answer
"""
