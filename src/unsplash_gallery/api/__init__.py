"""Unsplash Gallery - FastAPI presentation adapter.

This package exposes the feed store to a gallery front end over HTTP.

Modules
-------
main
    FastAPI application with all route handlers and the ``main()`` CLI
    entry point.
models
    Pydantic models for API request and response validation.
"""
