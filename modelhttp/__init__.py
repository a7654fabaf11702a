"""A small threaded HTTP/1.0 file server with CGI support, and the pieces of a small scripting language."""

__version__ = "0.1.0"