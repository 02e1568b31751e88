"""
Routes package for the Task Manager application.

This package contains route blueprints:
- api: REST API endpoints for programmatic access
- views: HTML page routes for the web interface
"""
