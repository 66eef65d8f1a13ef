"""Configuration settings for the file server."""

import os


DATABASE_PATH = os.environ.get("UPZ_DATABASE_PATH", "./data/users.db")

STORAGE_ROOT = os.environ.get("UPZ_STORAGE_ROOT", "./uploads")

SERVER_HOST = os.environ.get("UPZ_HOST", "0.0.0.0")

SERVER_PORT = int(os.environ.get("UPZ_PORT", "3000"))

MAX_ALLOCATION_ATTEMPTS = int(os.environ.get("UPZ_MAX_ALLOCATION_ATTEMPTS", "16"))

MAX_TREE_DEPTH = int(os.environ.get("UPZ_MAX_TREE_DEPTH", "32"))

BCRYPT_ROUNDS = int(os.environ.get("UPZ_BCRYPT_ROUNDS", "10"))

SESSION_COOKIE_NAME = os.environ.get("UPZ_SESSION_COOKIE", "upzload_session")
