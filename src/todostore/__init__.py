"""todostore: a file-per-record text store with a durable id counter."""

__version__ = "0.1.0"
