"""Report module for duplicate detection results.

This package contains:
- collision: DuplicateGroup, DuplicateReport and find_collisions()
- render: console text lines for a report
- serialize: JSON and msgpack encodings of a report
"""
