"""
Main module entry point.

Runs the HTTP server as: python -m memguard.main
"""

from .server import main

if __name__ == "__main__":
    main()
