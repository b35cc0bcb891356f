"""NiceGUI interface - thin visualization layer for the chat.

Responsibilities:
    - Chat message display with streaming updates and a typing indicator
    - Assistant name settings dialog
    - Clear-conversation confirmation

Contains no business logic. Every action goes through ChatSession.
"""
