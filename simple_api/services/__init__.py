"""Services - imperative shell around the core rules.

Invariants:
    - Services receive their UserRepository; they never build one

Design Decisions:
    - Routes and the admin CLI call the same services (one code path per verb)
"""
