from .text_split import split_string

__all__ = [
    "split_string",
]
