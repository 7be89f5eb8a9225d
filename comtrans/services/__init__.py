"""
Business logic services - locale catalog, translation import, stats invalidation
"""
from comtrans.services.locale_service import LocaleService
from comtrans.services.stats_service import StatsInvalidator
from comtrans.services.translation_gateway import TranslationGateway, BulkInserter
from comtrans.services.importer import TranslationImporter

__all__ = [
    "LocaleService",
    "StatsInvalidator",
    "TranslationGateway",
    "BulkInserter",
    "TranslationImporter",
]
