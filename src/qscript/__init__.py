"""
qscript - Lexical Front End for the qscript Language
====================================================

qscript is a small language mixing imperative statements (if, while,
function, let, action/start/do/stop), typed record declarations (type,
record, array, number, string, date, ...) and query clauses (select, from,
where, browse, between, like, in, case).

This package provides its scanner: source text in, a stream of classified
tokens with line and column information out, ready for a parser.

Main Components
---------------
- **scanner**: Scanner, Token, TokenKind and the tokenize() helper
- **options**: ScannerOptions, including legacy compatibility mode
- **errors**: Exception hierarchy rooted at QScriptError
- **cli**: The qslex token dump tool

Quick Start
-----------
    >>> from qscript import tokenize
    >>> [t.text for t in tokenize("select name from people")]
    ['select', 'name', 'from', 'people', '']

Or from the command line:
    $ qslex orders.qs
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from qscript.errors import (
    QScriptError,
    SourceLocation,
    LexicalError,
    UnrecognizedCharacterError,
    UnterminatedStringError,
    UnterminatedCommentError,
)
from qscript.options import ScannerOptions
from qscript.scanner import (
    Scanner,
    Token,
    TokenKind,
    KEYWORDS,
    tokenize,
)

__all__ = [
    # Version
    "__version__",
    # Scanner
    "Scanner",
    "Token",
    "TokenKind",
    "KEYWORDS",
    "tokenize",
    "ScannerOptions",
    # Errors
    "QScriptError",
    "SourceLocation",
    "LexicalError",
    "UnrecognizedCharacterError",
    "UnterminatedStringError",
    "UnterminatedCommentError",
]
