"""
Auth package for FastAPI applications.

Provides bcrypt password hashing, JWT bearer tokens, the register/login
service and a `get_current_user` dependency that gates protected routes.
"""
