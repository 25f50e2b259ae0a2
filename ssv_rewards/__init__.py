"""SSV Rewards: server-side verification of ad-network reward callbacks.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
