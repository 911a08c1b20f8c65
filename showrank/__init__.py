"""showrank - rank the shows you've been to, one pairwise choice at a time."""

__version__ = "0.1.0"
