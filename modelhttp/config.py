"""Server-wide settings."""

DEFAULT_PORT = 7999
SERVER_NAME = "Model HTTP Server/0.1"