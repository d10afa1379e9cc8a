"""
Domain models and services that do not talk to the language model:
the report data model, local persistence and PDF export.
"""
