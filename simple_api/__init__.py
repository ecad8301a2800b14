"""Simple Users API Package - create/read REST API over a MongoDB users collection.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
