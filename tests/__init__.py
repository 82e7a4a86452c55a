"""
Tests for the Mini Arcade games
===============================

Run all tests:
    pytest tests/

Run with coverage:
    pytest tests/ --cov=minigames --cov-report=html
"""
