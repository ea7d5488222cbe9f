"""
Configuration constants for the auth module.

These are the defaults and hard limits the hasher, token issuer and service
fall back to. Runtime values (secret, lifetime, cost factor) are resolved from
the environment in `loot_platform.config` and injected at construction time.
"""

# Token signing
TOKEN_ALGORITHM: str = "HS256"
DEFAULT_TOKEN_TTL_SECONDS: int = 3600  # 1 hour

# bcrypt cost factor; bcrypt itself accepts 4..31
DEFAULT_BCRYPT_ROUNDS: int = 10
MIN_BCRYPT_ROUNDS: int = 4
MAX_BCRYPT_ROUNDS: int = 31

# bcrypt only consumes the first 72 bytes of a password
MAX_PASSWORD_BYTES: int = 72

# Matches users.username VARCHAR(255)
MAX_USERNAME_LENGTH: int = 255

# Claims every issued token must carry
REQUIRED_CLAIMS = ("sub", "id", "username", "iat", "exp")
