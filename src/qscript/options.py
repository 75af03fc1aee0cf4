"""
Scanner Configuration
=====================

Options controlling how a Scanner treats the constructs whose behavior
differs between the corrected scanner and the legacy one. Configuration can
come from:
- Default values (defined here)
- Environment variables (ScannerOptions.from_env)
- Explicit keyword arguments

Legacy Mode
-----------
| Construct            | Default                    | legacy=True                      |
|----------------------|----------------------------|----------------------------------|
| ':'                  | COLON                      | DOT with text '.'                |
| '[' / ']'            | LBRACKET / RBRACKET        | only '[=' / ']=' form a token    |
| 'text'               | closed by "'"              | closed only by '"'               |
| unknown character    | UnrecognizedCharacterError | EOF-kind token carrying the char |
| unterminated string  | UnterminatedStringError    | runs to end of input             |
| unterminated comment | UnterminatedCommentError   | runs to end of input             |

Legacy bracket tokens carry both consumed characters as their text ('[=' and
']='), where the old scanner reported just '[' and ']'. Token texts therefore
still concatenate back to the source.
"""

from dataclasses import dataclass, fields
import os


# Environment variables read by ScannerOptions.from_env()
ENV_LEGACY = "QSCRIPT_LEGACY"
ENV_FILENAME = "QSCRIPT_FILENAME"

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class ScannerOptions:
    """
    Configuration for a scanning session.

    Attributes:
        filename: Name recorded in token and error locations
        legacy: Reproduce the permissive behavior of the legacy scanner
    """

    filename: str = "<input>"
    legacy: bool = False

    @classmethod
    def from_env(cls, **overrides) -> "ScannerOptions":
        """
        Create ScannerOptions from environment variables.

        Environment variables (all optional):
            QSCRIPT_LEGACY: "1", "true", "yes" or "on" enables legacy mode
            QSCRIPT_FILENAME: filename recorded in locations

        Keyword arguments override whatever the environment provides.
        """
        options = cls()

        if ENV_FILENAME in os.environ:
            options.filename = os.environ[ENV_FILENAME]
        if ENV_LEGACY in os.environ:
            options.legacy = os.environ[ENV_LEGACY].strip().lower() in _TRUE_VALUES

        names = {f.name for f in fields(cls)}
        for name, value in overrides.items():
            if name not in names:
                raise TypeError(f"unknown scanner option '{name}'")
            setattr(options, name, value)

        return options
