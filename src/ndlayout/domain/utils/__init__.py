from ._memo import MemoCell, MemoTable

__all__ = [MemoCell.__name__, MemoTable.__name__]
