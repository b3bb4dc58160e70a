"""
Tests for the assistant app.

- test_responder: intent routing and the response builders
"""
