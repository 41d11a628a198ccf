"""
Orchestration Layer - Filter Chain Coordination

This layer composes the transformation filters.
- Pure workflow coordination
- No filtering rules of its own
- Applies filter chains to records and DataFrames
"""
