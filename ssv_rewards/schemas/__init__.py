"""Pydantic Schemas: parsing and validation of inbound callback parameters.

Invariants:
    - Schemas validate at the system boundary (network query strings)
    - Separate from models: schemas are wire contracts, models are persistence
"""
