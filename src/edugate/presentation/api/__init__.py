"""REST API presentation layer for EduGate.

This package provides the FastAPI application behind the school
registry front end.

Structure:
    api/
    ├── app.py                # FastAPI application factory
    ├── config.py             # API configuration
    ├── dependencies.py       # Dependency injection
    ├── exception_handlers.py # Exception -> {"message": code} mapping
    ├── routers/              # API route handlers
    └── schemas/              # Pydantic request/response models
"""
