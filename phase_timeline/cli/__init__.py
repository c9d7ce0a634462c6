"""Command-line interface; the entrypoint lives in ``__main__``."""
