"""
Replicate API client - Utility Modules

This package contains:
- json_parser: JSON value helpers and body codecs
- encoding: Data URI encoding for binary inputs
- logger: Logging utilities
"""
