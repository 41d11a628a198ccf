"""
Core Utilities

Logging setup and .env-backed configuration shared by every layer.
"""
