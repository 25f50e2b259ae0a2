"""Infrastructure Layer: database, HTTP key fetching and logging.

Invariants:
    - Infrastructure never imports business rules from core/ (only types and errors)
    - All external failures mapped to typed RewardsError subclasses
"""
