"""Counter for tokens, lines, and characters in generated context.

Token counting uses OpenAI's tiktoken library, an optional dependency
installed with the ``token_counting`` extra. Lines and characters are always
counted. The size of a context payload matters because it is meant to be
pasted into a language model prompt with a finite context window.
"""

import importlib.util
from collections import namedtuple
from typing import Any, Optional

from ctxl.exceptions import TokenizationError, TokenizerNotAvailableError

CountResult = namedtuple("CountResult", ["lines", "tokens", "characters"])


def check_tiktoken_available() -> bool:
    """Check if the tiktoken library is available."""
    return importlib.util.find_spec("tiktoken") is not None


class TokenCounter:
    """Counter for tokens, lines, and characters in text content.

    If no model is specified the counter only counts lines and characters and
    reports None for token counts.

    Attributes:
        model (Optional[str]): Name of the model whose tokenizer to use, or None if token counting is disabled.
        encoder (Optional[Any]): The tiktoken encoder, or None if token counting is disabled.

    Example:
        >>> counter = TokenCounter()
        >>> result = counter.count("Hello\\nworld!")
        >>> result.lines, result.characters, result.tokens
        (1, 12, None)

    Raises:
        ValueError: If the specified model's tokenizer cannot be loaded.
        TokenizerNotAvailableError: If a model is given but tiktoken is not installed.
    """

    def __init__(self, model: Optional[str] = None):
        self.model = model
        self.encoder: Optional[Any] = None

        if self.model is not None:
            if not check_tiktoken_available():
                raise TokenizerNotAvailableError()
            self.encoder = self._get_encoder(self.model)

        self._total_tokens: Optional[int] = None if self.encoder is None else 0
        self._total_lines = 0
        self._total_characters = 0

    @staticmethod
    def _get_encoder(model: str) -> Any:
        # Imported lazily since tiktoken is optional
        import tiktoken

        try:
            return tiktoken.encoding_for_model(model)
        except KeyError:
            raise ValueError(
                f"Could not load tokenizer for model '{model}'. Consider using a "
                "well-supported model like 'gpt-4' (cl100k_base encoding) for token counting. "
                "While token counts may not exactly match your target model, they can provide "
                "useful approximations."
            )

    def count(self, text: str) -> CountResult:
        """Count lines, tokens, and characters in text and add them to the running totals.

        Raises:
            TokenizationError: If token counting is enabled but fails.
        """
        lines = text.count("\n")
        chars = len(text)
        tokens = None

        self._total_lines += lines
        self._total_characters += chars

        if self.encoder is not None:
            try:
                # Special-token markers in source files are ordinary text here
                tokens = len(self.encoder.encode(text, disallowed_special=()))
            except Exception as e:
                raise TokenizationError(f"Failed to tokenize text: {str(e)}")
            self._total_tokens = (self._total_tokens or 0) + tokens

        return CountResult(lines=lines, tokens=tokens, characters=chars)

    def get_total_tokens(self) -> Optional[int]:
        return self._total_tokens

    def get_total_lines(self) -> int:
        return self._total_lines

    def get_total_characters(self) -> int:
        return self._total_characters

    def reset_counts(self) -> None:
        """Reset all running totals while keeping the tokenizer configuration."""
        self._total_tokens = None if self.encoder is None else 0
        self._total_lines = 0
        self._total_characters = 0
