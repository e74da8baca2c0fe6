from ._data_buffer import DataBuffer

__all__ = [DataBuffer.__name__]
