"""
Feature modules for the dashboard.

Each feature is a self-contained module with:
- models.py - Pydantic models
- schemas.py - Response schemas (optional)
- service.py / client.py / cache.py - Business logic
"""
