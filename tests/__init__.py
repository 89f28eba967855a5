"""
Test suite for the Deal Requirements Service.

Run all tests: pytest
Run with coverage: pytest --cov=. --cov-report=html
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_sku_matcher.py -v
"""
