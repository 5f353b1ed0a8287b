"""
Swagger document modifier.

Bundles a Swagger v2 document and rewrites its schema graph so that code
generators produce cleaner models: inline titled schemas become named
definitions, enum arrays are shared, referenced models get per-operation
prefixes and suffixes, and unused definitions are pruned.
"""

__version__ = "1.0.0"
