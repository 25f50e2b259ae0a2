"""Services Layer: SSV verifiers and the rewards orchestrator (imperative shell).

Invariants:
    - Services depend on core Protocols, never on concrete repositories
    - All IO (key fetch, storage) happens here or below; core/ stays pure
"""
