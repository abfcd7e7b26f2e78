from typing import Optional

from ctxl.types import PathType


class PresetParseError(Exception):
    """
    Exception raised when a user preset file exists but cannot be parsed.

    The preset file is loaded as a whole; when it is not valid YAML, is not a mapping of
    preset names to preset definitions, or an entry lacks a required field, nothing from
    the file is used and this exception is surfaced to the caller.

    Attributes:
        path (str): Path of the offending preset file.
        reason (str): Description of what was wrong with the file.

    Example:
        >>> error = PresetParseError("ctxl_presets.yaml", "expected a mapping at top level")
        >>> str(error)
        'Invalid preset file ctxl_presets.yaml: expected a mapping at top level'
    """

    def __init__(self, path: PathType, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Invalid preset file {self.path}: {reason}")


class TokenizerNotAvailableError(Exception):
    """
    Exception raised when token counting is requested without the required tokenizer package.

    The `tiktoken` package is an optional dependency that must be explicitly installed
    using the 'token_counting' extra.

    Attributes:
        message (str): Detailed error message including installation instructions.

    Example:
        >>> error = TokenizerNotAvailableError()
        >>> str(error).startswith('Tokenizer (tiktoken) is not installed')
        True
    """

    def __init__(self, message: Optional[str] = None) -> None:
        base = message or "Tokenizer (tiktoken) is not installed."
        self.message = (
            f"{base} To enable token counting, install ctxl with the 'token_counting' "
            "extra: 'pip install ctxl[token_counting]'."
        )
        super().__init__(self.message)


class TokenizationError(Exception):
    """
    Exception raised when token counting fails during execution.

    Example:
        >>> error = TokenizationError("Failed to tokenize: invalid input")
        >>> str(error)
        'Failed to tokenize: invalid input'
    """

    pass
