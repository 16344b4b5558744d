import os

# api.security refuses to import without a signing key
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("JWT_EXPIRES_IN", "1h")
