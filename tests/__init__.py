"""
Test suite for the Task Manager application.

This package contains:
- unit/: Model, store and API client tests
- integration/: API and UI tests through the Flask test client
"""
