# keyword_scout/__init__.py
"""
KeywordScout package initializer.
CLI entry point lives in :mod:`keyword_scout.cli`.
"""
__version__ = "0.1.0"
