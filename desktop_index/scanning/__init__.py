#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""Desktop Index scanning package.

DirectoryScanner reads one directory; Aggregator fans out over all
source directories.
"""

from .aggregator import Aggregator, merge_results
from .directory_scanner import DirectoryScanner

__all__ = [
    "Aggregator",
    "DirectoryScanner",
    "merge_results",
]
