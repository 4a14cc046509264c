"""
Test suite for the Sliques booking backend.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_availability_service.py -v
"""
