"""
Interaction layer for spoken command parsing.

Deterministic, vocabulary-driven parsing of the verb, the quantity and the
item phrase of one transcript. No model calls and no guessing.
"""
from .operation_classifier import OperationClassifier, OperationMatch, classify_operation
from .quantity_extractor import NUMBER_WORDS, extract_number, extract_quantity
from .item_phrase import extract_item_phrase, tokenize

__all__ = [
    "OperationClassifier",
    "OperationMatch",
    "classify_operation",
    "NUMBER_WORDS",
    "extract_number",
    "extract_quantity",
    "extract_item_phrase",
    "tokenize",
]
