"""
TF-IDF Plagiarism Checker

Pairwise document similarity for surfacing candidate plagiarism.
"""

__version__ = "1.0.0"

from .core import *
from .utils import *
