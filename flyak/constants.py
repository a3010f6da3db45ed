"""Shared constants used across the application."""

# Tokens are only ever issued and accepted with these exact values
JWT_ISSUER = "org.nzvirtual.api"
JWT_AUDIENCE = "flyak"
JWT_ALGORITHM = "HS512"

# HS512 needs at least 512 bits of key material
JWT_MIN_KEY_BYTES = 64

JWT_REQUIRED_CLAIMS = frozenset({"sub", "iat", "exp", "iss", "aud"})
