# developer tooling: inspect ranking of an items file from the command line
from .cli import main

__all__ = ["main"]
