"""
Book Review Service Package

Core package for the review and comment service. Users rate books and
comment on each other's reviews; this package validates those mutations,
enforces ownership, guards review deletion and assembles comment threads.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine, session factory and storage error guard
- errors.py: Error taxonomy and the Ok/Err result types
- authorization.py: Ownership predicate
- validators/: Raw input → typed commands (never touches storage)
- models/: SQLAlchemy ORM models
- schemas/: Pydantic response schemas
- services/: Review and comment domain services, token helpers
- routers/: Thin FastAPI layer mapping results to HTTP responses
- main.py: FastAPI application factory
"""

__version__ = "0.1.0"
