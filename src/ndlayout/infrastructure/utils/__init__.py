from ._logging import get_logger

__all__ = [get_logger.__name__]
