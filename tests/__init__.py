"""
Test suite for the FixedFloat client.

Run all tests from project root:
    pytest
    pytest tests/test_fixedfloat/

Run specific test file:
    pytest tests/test_fixedfloat/test_client.py

Run with coverage:
    pytest --cov=fixedfloat --cov-report=html
"""
