"""Core utilities and shared infrastructure.

- config: Loader configuration loading and validation
- constants: KML tag names and defaults
- exceptions: Custom exception hierarchy
- params: Named-option binding onto item options
"""
