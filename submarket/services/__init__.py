"""Services Layer — one async orchestrator per marketplace operation.

Invariants:
    - Each service is a single transition: one commit on success, rollback otherwise
    - Services never re-implement core checks; they feed core functions loaded state
"""
