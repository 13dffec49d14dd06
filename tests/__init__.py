"""
Test Suite for the Book Review Service

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- test_validators.py: Input validation rules
- test_authorization.py: Ownership predicate
- test_comment_tree.py: Two-level thread assembly
- test_review_service.py / test_comment_service.py: Services on SQLite
- test_reviews_api.py / test_comments_api.py: HTTP layer
- test_security.py: Bearer token helpers
- test_config.py: Settings validation

Running Tests:
    pytest
    pytest tests/test_review_service.py -v
"""
