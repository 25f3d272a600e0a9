"""
Repositories Package - Infrastructure Layer

Concrete readings repositories for MongoDB and for daily CSV files.
"""

from .csv_readings_repository import CsvReadingsRepository
from .mongo_readings_repository import MongoReadingsRepository

__all__ = ["CsvReadingsRepository", "MongoReadingsRepository"]
