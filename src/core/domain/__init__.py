"""Domain data: API payload models, run context and pipeline values.

Nothing here knows about HTTP clients or the CLI.
"""
