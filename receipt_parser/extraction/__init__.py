from receipt_parser.extraction.base import BaseExtractor
from receipt_parser.extraction.extractor import ReceiptExtractor
from receipt_parser.extraction.factory import ExtractorFactory

__all__ = ["BaseExtractor", "ExtractorFactory", "ReceiptExtractor"]
