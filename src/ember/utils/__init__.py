"""Utility functions and tools used across the EMBER package.

- `config`: YAML configuration file loading
- `enums`: enumerated types (tool status, signal type)
- `errors`: typed exceptions
- `factory`: build classes from configuration blocks
- `globals`: constants shared across the package
- `logger`: package logger
"""
