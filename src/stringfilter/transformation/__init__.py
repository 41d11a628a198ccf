"""
Transformation Layer - Pure, Deterministic Functions

This layer contains the string filters themselves.
- Pure functions (input → output)
- No I/O operations
- Unit testable
- Deterministic results
"""
