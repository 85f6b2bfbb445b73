from .source_data_repository import SourceDataRepository

__all__ = ["SourceDataRepository"]
