"""POMPR-FUN — FastAPI REST API layer.

This package contains the FastAPI application and the Pydantic
request/response models that expose the session handlers over HTTP.

Modules
-------
main
    FastAPI application with all route handlers and the ``main()`` CLI
    entry point.
models
    Pydantic models for API request and response validation, plus the
    state interchange snapshot.
"""
