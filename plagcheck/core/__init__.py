"""
Core functionality for document similarity detection.

This package contains the similarity engine and its boundary:
- Tokenization, vocabulary and IDF weighting
- TF-IDF vectorization and cosine similarity matrix
- Threshold flagging
- Text file discovery, session state and configuration
"""

from .tokenizer import tokenize, DEFAULT_STOPWORDS
from .document import Document
from .vocabulary import build_vocabulary
from .idf import compute_idf
from .vectorizer import vectorize, vectorize_corpus
from .similarity_matrix import cosine_similarity, build_matrix, TfidfSimilarityCalculator
from .threshold import Flag, flag_pairs, to_percent, from_percent
from .pipeline import SessionConfig, SimilarityReport, analyze_corpus
from .text_handler import TextHandler, extract_zip_archive, find_text_files
from .session import CheckerSession
from .config import AppSettings, load_settings
from .logging_config import setup_logging, get_logger, LoggerMixin, ProductionLogger
from .validation import (
    ValidationError, FileValidationError, DirectoryValidationError,
    ParameterValidationError, CorpusValidationError,
    FileValidator, DirectoryValidator, ParameterValidator,
    validate_inputs, handle_exceptions
)

__all__ = [
    'tokenize',
    'DEFAULT_STOPWORDS',
    'Document',
    'build_vocabulary',
    'compute_idf',
    'vectorize',
    'vectorize_corpus',
    'cosine_similarity',
    'build_matrix',
    'TfidfSimilarityCalculator',
    'Flag',
    'flag_pairs',
    'to_percent',
    'from_percent',
    'SessionConfig',
    'SimilarityReport',
    'analyze_corpus',
    'TextHandler',
    'find_text_files',
    'extract_zip_archive',
    'CheckerSession',
    'AppSettings',
    'load_settings',
    'setup_logging',
    'get_logger',
    'LoggerMixin',
    'ProductionLogger',
    'ValidationError',
    'FileValidationError',
    'DirectoryValidationError',
    'ParameterValidationError',
    'CorpusValidationError',
    'FileValidator',
    'DirectoryValidator',
    'ParameterValidator',
    'validate_inputs',
    'handle_exceptions'
]
