"""Core utilities and shared infrastructure.

- config: Configuration loading, validation and logging setup
- constants: Named constants (geometry kinds, Earth model, messages)
- exceptions: Custom exception hierarchy
"""
