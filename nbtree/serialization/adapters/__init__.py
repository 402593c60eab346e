from .generic_adapter import GenericDeserializerAdapter
from .max_bytes import MaxBytesDeserializer

__all__ = [
    'GenericDeserializerAdapter',
    'MaxBytesDeserializer',
]
