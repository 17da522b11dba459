"""
Test suite for the Discord Bouncer bot.

This package contains tests organized by type:
- Unit tests for individual components
- Integration tests for the voice event flow end to end
"""
