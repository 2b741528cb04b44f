"""Authentication: password hashing, bearer tokens and request dependencies."""
