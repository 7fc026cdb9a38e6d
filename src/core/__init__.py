"""Core domain package for newslens.

Core contains the query language (normalization, tokenizing, parsing) and the
news search logic without any file, HTTP or terminal code, keeping the
business logic portable.
"""
