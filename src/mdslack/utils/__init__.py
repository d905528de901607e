from .chunk import chunk_blocks
from .redact import redact
from .text import truncate

__all__ = [
    "chunk_blocks",
    "redact",
    "truncate",
]
