"""
Taskboard edge service.

A FastAPI application exposing a small task/theme/summary JSON API under
``/api`` and serving the single-page frontend for every other path.
"""
