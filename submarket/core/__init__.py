"""Core Layer — pure marketplace rules, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (time and balances are passed in)

Design Decisions:
    - Functional core separated from imperative shell: services read the clock
      and balances, core decides, services apply the effects
"""
