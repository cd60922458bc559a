from currency_converter.repositories.interfaces import ConversionLogRepository
from currency_converter.repositories.json_file import JsonConversionLogRepository

__all__ = [
    "ConversionLogRepository",
    "JsonConversionLogRepository",
]
