"""
qscript Scanner (Tokenizer)
===========================

This module implements the scanner for qscript, a small language mixing
imperative statements, typed record declarations and query clauses.
It converts source text into a stream of tokens for a parser.

Token Categories
----------------
- Keywords: if, while, function, let, record, select, where, browse, etc.
  (matched case-insensitively)
- Identifiers: letters, digits and underscores, not starting with a digit
- Numbers: decimal integers only
- Strings: "double quoted" or 'single quoted', may span lines
- Operators: + - * / = == != <> < <= > >= -> <- ! and the keyword
  operators in, like, between, not
- Delimiters: ( ) [ ] ; : , .

Comments
--------
- Block: (* comment *), may span lines, does not nest

Example Usage
-------------
>>> from qscript.scanner import Scanner
>>> scanner = Scanner('let x = 10;')
>>> for token in scanner.tokenize():
...     print(token)
Token(LET, 'let', 1:1)
Token(IDENTIFIER, 'x', 1:5)
Token(ASSIGN, '=', 1:7)
Token(NUMBER, '10', 1:9)
Token(SEMICOLON, ';', 1:11)
Token(EOF, 1:12)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional
import logging

from qscript.errors import (
    SourceLocation,
    UnrecognizedCharacterError,
    UnterminatedStringError,
    UnterminatedCommentError,
)
from qscript.options import ScannerOptions

logger = logging.getLogger(__name__)


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(Enum):
    """
    Token kinds for qscript.

    FLOAT, BOOL, DATE and TIME are reserved classification slots: no reader
    produces them yet, but a parser may already refer to them. FOREACH is
    reserved the same way and has no entry in KEYWORDS.
    """

    # === Sentinels ===
    EOF = auto()            # End of input (legacy: also unknown characters)
    EOL = auto()            # Carriage return

    # === Literals ===
    IDENTIFIER = auto()
    NUMBER = auto()         # 42
    FLOAT = auto()          # reserved
    STRING = auto()         # "text" / 'text'
    BOOL = auto()           # reserved
    DATE = auto()           # reserved
    TIME = auto()           # reserved

    # === Operators ===
    PLUS = auto()           # +
    MINUS = auto()          # -
    MULTIPLY = auto()       # *
    DIVIDE = auto()         # /
    ASSIGN = auto()         # =
    EQUAL = auto()          # ==
    NOT_EQUAL = auto()      # != or <>
    LESS = auto()           # <
    LESS_EQUAL = auto()     # <=
    GREATER = auto()        # >
    GREATER_EQUAL = auto()  # >=
    IN = auto()             # in
    LIKE = auto()           # like
    BETWEEN = auto()        # between
    RARROW = auto()         # ->
    LARROW = auto()         # <-
    NOT = auto()            # ! or not

    # === Delimiters ===
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    LBRACKET = auto()       # [
    RBRACKET = auto()       # ]
    SEMICOLON = auto()      # ;
    COLON = auto()          # :
    COMMA = auto()          # ,
    DOT = auto()            # .

    # === Keywords - Statements ===
    IF = auto()
    ELSE = auto()
    WHILE = auto()
    FOR = auto()
    FOREACH = auto()        # reserved
    FUNCTION = auto()
    RETURN = auto()
    LET = auto()
    TYPE = auto()
    RECORD = auto()
    ACTION = auto()
    START = auto()
    END = auto()
    DO = auto()
    STOP = auto()

    # === Keywords - Type Names ===
    NUMBER_TYPE = auto()    # number
    FLOAT_TYPE = auto()     # float
    STRING_TYPE = auto()    # string
    BOOL_TYPE = auto()      # boolean
    DATE_TYPE = auto()      # date
    TIME_TYPE = auto()      # time
    ARRAY = auto()          # array

    # === Keywords - Queries ===
    SELECT = auto()
    FROM = auto()
    WHERE = auto()
    RECURSIVE = auto()
    BROWSE = auto()
    CASE = auto()


# =============================================================================
# Keyword Mapping
# =============================================================================

# Lower-case spelling -> kind; lookups lower-case the identifier first
KEYWORDS: dict[str, TokenKind] = {
    # Statements
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "while": TokenKind.WHILE,
    "for": TokenKind.FOR,
    "function": TokenKind.FUNCTION,
    "return": TokenKind.RETURN,
    "let": TokenKind.LET,
    "type": TokenKind.TYPE,
    "record": TokenKind.RECORD,
    "action": TokenKind.ACTION,
    "start": TokenKind.START,
    "end": TokenKind.END,
    "do": TokenKind.DO,
    "stop": TokenKind.STOP,

    # Type names
    "number": TokenKind.NUMBER_TYPE,
    "float": TokenKind.FLOAT_TYPE,
    "string": TokenKind.STRING_TYPE,
    "boolean": TokenKind.BOOL_TYPE,
    "date": TokenKind.DATE_TYPE,
    "time": TokenKind.TIME_TYPE,
    "array": TokenKind.ARRAY,

    # Queries
    "select": TokenKind.SELECT,
    "from": TokenKind.FROM,
    "where": TokenKind.WHERE,
    "recursive": TokenKind.RECURSIVE,
    "browse": TokenKind.BROWSE,
    "case": TokenKind.CASE,

    # Keyword operators
    "in": TokenKind.IN,
    "like": TokenKind.LIKE,
    "between": TokenKind.BETWEEN,
    "not": TokenKind.NOT,
}

TYPE_KEYWORDS = frozenset({
    TokenKind.NUMBER_TYPE,
    TokenKind.FLOAT_TYPE,
    TokenKind.STRING_TYPE,
    TokenKind.BOOL_TYPE,
    TokenKind.DATE_TYPE,
    TokenKind.TIME_TYPE,
    TokenKind.ARRAY,
})

KEYWORD_KINDS = frozenset(
    kind for kind in KEYWORDS.values()
    if kind not in (TokenKind.IN, TokenKind.LIKE, TokenKind.BETWEEN, TokenKind.NOT)
) | {TokenKind.FOREACH}

OPERATOR_KINDS = frozenset({
    TokenKind.PLUS,
    TokenKind.MINUS,
    TokenKind.MULTIPLY,
    TokenKind.DIVIDE,
    TokenKind.ASSIGN,
    TokenKind.EQUAL,
    TokenKind.NOT_EQUAL,
    TokenKind.LESS,
    TokenKind.LESS_EQUAL,
    TokenKind.GREATER,
    TokenKind.GREATER_EQUAL,
    TokenKind.IN,
    TokenKind.LIKE,
    TokenKind.BETWEEN,
    TokenKind.RARROW,
    TokenKind.LARROW,
    TokenKind.NOT,
})

DELIMITER_KINDS = frozenset({
    TokenKind.LPAREN,
    TokenKind.RPAREN,
    TokenKind.LBRACKET,
    TokenKind.RBRACKET,
    TokenKind.SEMICOLON,
    TokenKind.COLON,
    TokenKind.COMMA,
    TokenKind.DOT,
})

# Characters that always form a token on their own
SINGLE_CHAR_TOKENS: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "*": TokenKind.MULTIPLY,
    "/": TokenKind.DIVIDE,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    ";": TokenKind.SEMICOLON,
    ":": TokenKind.COLON,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "\r": TokenKind.EOL,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from qscript source.

    Attributes:
        kind: The TokenKind classification
        text: Source text of the token (string contents without quotes)
        line: Line of the token's first character (1-indexed)
        column: Column of the token's first character (1-indexed)
        filename: Name of the source file
    """
    kind: TokenKind
    text: str
    line: int
    column: int
    filename: str = "<input>"

    def __repr__(self) -> str:
        """Format token for debugging output."""
        if self.text:
            return f"Token({self.kind.name}, {self.text!r}, {self.line}:{self.column})"
        return f"Token({self.kind.name}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    @property
    def value(self) -> str | int:
        """The integer value for NUMBER tokens, the text for all others."""
        if self.kind is TokenKind.NUMBER:
            return int(self.text)
        return self.text

    def is_eof(self) -> bool:
        """Return True if this token marks the real end of input."""
        return self.kind is TokenKind.EOF and not self.text

    def is_keyword(self) -> bool:
        return self.kind in KEYWORD_KINDS

    def is_type_keyword(self) -> bool:
        return self.kind in TYPE_KEYWORDS

    def is_operator(self) -> bool:
        return self.kind in OPERATOR_KINDS

    def is_delimiter(self) -> bool:
        return self.kind in DELIMITER_KINDS


# =============================================================================
# Scanner Implementation
# =============================================================================

class Scanner:
    """
    Tokenizes qscript source text.

    A Scanner is a cursor over one source text. Each call to next_token()
    skips whitespace and block comments, then reads and returns exactly one
    token. Once the input is exhausted every further call returns an EOF
    token at the same position.

    Scanners share no state, so independent sources can be scanned in
    parallel by giving each its own Scanner.

    Usage:
        scanner = Scanner(source_text, "orders.qs")
        tokens = list(scanner.tokenize())

    Attributes:
        source: The source text being scanned (never modified)
        options: The ScannerOptions in effect
        filename: Name of the source (for locations)
    """

    def __init__(
        self,
        source: str,
        filename: Optional[str] = None,
        options: Optional[ScannerOptions] = None,
    ):
        """
        Initialize the scanner with source text.

        Args:
            source: The qscript source to tokenize
            filename: Overrides options.filename when given
            options: Scanner configuration (defaults to ScannerOptions())
        """
        self.source = source
        self.options = options or ScannerOptions()
        self.filename = filename or self.options.filename

        # Cursor
        self._pos = 0
        self._line = 1
        self._column = 1

        # Offset of the first character of the current line
        self._line_start_pos = 0

    @property
    def pos(self) -> int:
        return self._pos

    @property
    def line(self) -> int:
        return self._line

    @property
    def column(self) -> int:
        return self._column

    def __iter__(self) -> Iterator[Token]:
        return self.tokenize()

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens up to and including the end-of-input token.

        Yields:
            Token objects for each lexeme, then one EOF token

        Raises:
            LexicalError: On unrecognized characters or unterminated
                literals (never in legacy mode)
        """
        while True:
            token = self.next_token()
            yield token
            if token.is_eof():
                return

    def next_token(self) -> Token:
        """
        Scan and return the next token.

        Returns:
            The next Token; an EOF token once the input is exhausted

        Raises:
            UnrecognizedCharacterError: Character matches no rule. The
                scanner has already moved past it.
            UnterminatedStringError: String reaches end of input
            UnterminatedCommentError: Comment reaches end of input
        """
        self._skip_trivia()

        if self._at_end():
            return self._make_token(TokenKind.EOF, "", self._line, self._column)

        start_line = self._line
        start_column = self._column

        char = self._peek()

        if char.isalpha() or char == "_":
            return self._scan_identifier(start_line, start_column)

        if char.isdecimal():
            return self._scan_number(start_line, start_column)

        if char in "\"'":
            return self._scan_string(start_line, start_column)

        return self._scan_operator(start_line, start_column)

    def peek_token(self) -> Token:
        """
        Return the next token without consuming it.

        Saves the cursor, scans one token, then restores the cursor, so
        the following next_token() call returns the same token.
        """
        saved_pos = self._pos
        saved_line = self._line
        saved_column = self._column
        saved_line_start = self._line_start_pos

        try:
            return self.next_token()
        finally:
            self._pos = saved_pos
            self._line = saved_line
            self._column = saved_column
            self._line_start_pos = saved_line_start

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """
        Look at character at current position + offset without advancing.

        Returns empty string if past end of source.
        """
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """
        Consume and return the current character.

        A newline moves to column 1 of the next line; any other character
        moves one column right.
        """
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    def _match(self, expected: str) -> bool:
        """Consume the current character if it is expected."""
        if self._peek() == expected:
            self._advance()
            return True
        return False

    # =========================================================================
    # Token Creation
    # =========================================================================

    def _make_token(
        self,
        kind: TokenKind,
        text: str,
        start_line: int,
        start_column: int,
    ) -> Token:
        return Token(
            kind=kind,
            text=text,
            line=start_line,
            column=start_column,
            filename=self.filename,
        )

    def _line_text(self, line_start_pos: int) -> str:
        """Return the source line beginning at line_start_pos."""
        line_end = self.source.find("\n", line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[line_start_pos:line_end].rstrip("\r")

    # =========================================================================
    # Trivia (Whitespace and Comments)
    # =========================================================================

    def _skip_trivia(self) -> None:
        """Skip whitespace, newlines and block comments."""
        while not self._at_end():
            char = self._peek()

            if char in " \t\r\n":
                self._advance()
                continue

            if char == "(" and self._peek(1) == "*":
                self._skip_block_comment()
                continue

            break

    def _skip_block_comment(self) -> None:
        """
        Skip a block comment (* ... *), including both delimiters.

        Raises:
            UnterminatedCommentError: If no closing *) is found
                (legacy mode stops silently at end of input)
        """
        start_line = self._line
        start_column = self._column
        start_line_pos = self._line_start_pos

        # Consume the (*
        self._advance()
        self._advance()

        while not self._at_end():
            if self._peek() == "*" and self._peek(1) == ")":
                self._advance()
                self._advance()
                return
            self._advance()

        if self.options.legacy:
            logger.debug(
                f"{self.filename}:{start_line}:{start_column}: "
                f"unterminated comment runs to end of input"
            )
            return

        raise UnterminatedCommentError(
            SourceLocation(self.filename, start_line, start_column),
            self._line_text(start_line_pos),
        )

    # =========================================================================
    # Lexeme Readers
    # =========================================================================

    def _scan_identifier(self, start_line: int, start_column: int) -> Token:
        """
        Scan an identifier or keyword.

        Consumes the longest run of letters, digits and underscores, then
        looks the lower-cased run up in KEYWORDS. The token keeps the text
        exactly as written.
        """
        start = self._pos
        while not self._at_end():
            char = self._peek()
            if not (char.isalpha() or char.isdecimal() or char == "_"):
                break
            self._advance()

        name = self.source[start:self._pos]
        kind = KEYWORDS.get(name.lower(), TokenKind.IDENTIFIER)
        return self._make_token(kind, name, start_line, start_column)

    def _scan_number(self, start_line: int, start_column: int) -> Token:
        """Scan a run of decimal digits. Signs and fractions are not part of it."""
        start = self._pos
        while self._peek().isdecimal():
            self._advance()

        return self._make_token(
            TokenKind.NUMBER, self.source[start:self._pos], start_line, start_column
        )

    def _scan_string(self, start_line: int, start_column: int) -> Token:
        """
        Scan a quoted string literal.

        The closing quote is the opening one; in legacy mode only '"'
        closes a string, whichever quote opened it. Newlines inside the
        literal are kept and counted. No escape sequences are recognized.
        """
        start_line_pos = self._line_start_pos
        quote = self._advance()
        closing = '"' if self.options.legacy else quote

        chars = []
        while not self._at_end():
            if self._peek() == closing:
                self._advance()
                return self._make_token(
                    TokenKind.STRING, "".join(chars), start_line, start_column
                )
            chars.append(self._advance())

        if self.options.legacy:
            logger.debug(
                f"{self.filename}:{start_line}:{start_column}: "
                f"unterminated string runs to end of input"
            )
            return self._make_token(
                TokenKind.STRING, "".join(chars), start_line, start_column
            )

        raise UnterminatedStringError(
            quote,
            SourceLocation(self.filename, start_line, start_column),
            self._line_text(start_line_pos),
        )

    def _scan_operator(self, start_line: int, start_column: int) -> Token:
        """
        Scan an operator or delimiter.

        One character of lookahead decides between the one and two
        character forms; the longer form wins.
        """
        char = self._advance()

        def token(kind: TokenKind, text: str) -> Token:
            return self._make_token(kind, text, start_line, start_column)

        if char == "-":
            if self._match(">"):
                return token(TokenKind.RARROW, "->")
            return token(TokenKind.MINUS, "-")

        if char == "=":
            if self._match("="):
                return token(TokenKind.EQUAL, "==")
            return token(TokenKind.ASSIGN, "=")

        if char == "<":
            if self._match("="):
                return token(TokenKind.LESS_EQUAL, "<=")
            if self._match(">"):
                return token(TokenKind.NOT_EQUAL, "<>")
            if self._match("-"):
                return token(TokenKind.LARROW, "<-")
            return token(TokenKind.LESS, "<")

        if char == ">":
            if self._match("="):
                return token(TokenKind.GREATER_EQUAL, ">=")
            return token(TokenKind.GREATER, ">")

        if char == "!":
            if self._match("="):
                return token(TokenKind.NOT_EQUAL, "!=")
            return token(TokenKind.NOT, "!")

        if self.options.legacy:
            # Legacy brackets only exist as '[=' and ']='
            if char in "[]":
                if self._match("="):
                    return token(SINGLE_CHAR_TOKENS[char], char + "=")
                return self._unrecognized(char, start_line, start_column)

            # Legacy colon is indistinguishable from a dot
            if char == ":":
                return token(TokenKind.DOT, ".")

        if char in SINGLE_CHAR_TOKENS:
            return token(SINGLE_CHAR_TOKENS[char], char)

        return self._unrecognized(char, start_line, start_column)

    def _unrecognized(self, char: str, start_line: int, start_column: int) -> Token:
        """
        Handle a character no rule accepts. It has already been consumed.

        Legacy mode folds it into an EOF-kind token carrying the character;
        otherwise UnrecognizedCharacterError is raised.
        """
        if self.options.legacy:
            logger.debug(
                f"{self.filename}:{start_line}:{start_column}: "
                f"unrecognized character {char!r} returned as EOF token"
            )
            return self._make_token(TokenKind.EOF, char, start_line, start_column)

        raise UnrecognizedCharacterError(
            char,
            SourceLocation(self.filename, start_line, start_column),
            self._line_text(self._line_start_pos),
        )


# =============================================================================
# Convenience Functions
# =============================================================================

def tokenize(
    source: str,
    filename: Optional[str] = None,
    options: Optional[ScannerOptions] = None,
) -> list[Token]:
    """
    Tokenize a complete source text with a fresh Scanner.

    Args:
        source: The qscript source
        filename: Name recorded in token locations
        options: Scanner configuration

    Returns:
        All tokens, ending with the EOF token
    """
    return list(Scanner(source, filename, options).tokenize())
