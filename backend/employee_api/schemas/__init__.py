"""Pydantic Schemas — response projections and the JSON envelope.

Invariants:
    - Schemas shape API output; models are persistence
    - JSON keys are camelCase, Python attributes snake_case
"""
