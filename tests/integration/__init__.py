"""Integration tests for the FastAPI app with a scripted streamer."""
