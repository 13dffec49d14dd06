"""
Services Package

Business logic kept apart from HTTP handling:
- reviews.py: Review listing, detail, create/update/delete with the
  delete-guard
- comments.py: Comment listing as two-level threads, comment creation
- security.py: Bearer token encoding and decoding
"""
