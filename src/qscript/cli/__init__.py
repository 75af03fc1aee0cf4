"""
qscript Command-Line Interface
==============================

- **qslex**: Dump the token stream of a qscript source file

Implemented as a Click-based CLI application.
"""

__all__ = ["qslex"]
