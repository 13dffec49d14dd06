"""
API Routers Package

Thin HTTP layer over the services: pass raw values to the validators, call
the service with the resolved actor, map the result to a response.

Router Structure:
- reviews.py: /api/v1/reviews/* endpoints
- comments.py: /api/v1/reviews/{review_id}/comments endpoints
- responses.py: Shared success/error envelopes

Each router is registered in main.py.
"""

from bookreview.routers.comments import router as comments_router
from bookreview.routers.reviews import router as reviews_router

__all__ = [
    "comments_router",
    "reviews_router",
]
