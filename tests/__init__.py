"""Test suite for Grammar-Gen.

Test organization:
- fixtures/: Fake engines and grammar tree builders
- unit/: Unit tests for individual modules

Run tests with:
    pytest tests/
    pytest tests/unit/
    pytest tests/ -v --tb=short
"""
