"""
Integration test package for the Task Manager.

This package contains tests for the REST API endpoints and the UI
routes. Tests use the Flask test client and demonstrate:
- CRUD operation testing
- Input validation testing
- Error handling testing
- UI-to-API call forwarding with monkeypatched HTTP
"""
