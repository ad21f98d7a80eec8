"""Core logic for the LLM output format generator.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- edit an ordered list of typed fields
- render the field list as a JSON Schema for structured LLM output
- encode/decode the field list as share-link query parameters
"""
