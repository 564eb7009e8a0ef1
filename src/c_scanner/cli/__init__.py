"""
C Scanner Command-Line Interface
================================

- **cscan**: print the token stream of a C source file

The tool is a Click-based CLI application; exit codes are shared
through ``c_scanner.cli.errors``.
"""

__all__ = ["cscan"]
