"""
Student API — Authentication Package
=====================================

What:  Credential hashing, bearer token issuing/verification, and the
       FastAPI dependency that gates write routes.

Module Inventory:
    - passwords.py:     PasswordHasher (bcrypt, cost factor 10)
    - tokens.py:        TokenService (PyJWT, HS256, one hour TTL)
    - dependencies.py:  require_auth (Authorization: Bearer <token>)

There are no roles: any valid token grants every protected operation.
"""
