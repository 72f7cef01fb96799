"""
Command Parser Module

Parses an input line into a command name, its arguments and any
redirection targets.

Quoting follows POSIX shell rules:
- Outside quotes, whitespace separates words and a backslash makes the
  next character literal
- Inside single quotes, every character is literal
- Inside double quotes, a backslash only escapes ", \\, $, ` and newline
- Adjacent quoted and unquoted fragments join into one word

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, List

from pysh.exceptions import (
    UnclosedQuoteError,
    RedirectionSyntaxError,
    MissingCommandError,
)
from pysh.logger import get_logger


BACKSLASH = '\\'
SINGLE_QUOTE = "'"
DOUBLE_QUOTE = '"'

# Characters a backslash escapes inside double quotes.
ESCAPABLE_IN_DOUBLE_QUOTES = frozenset({DOUBLE_QUOTE, BACKSLASH, '$', '`', '\n'})

STDOUT_OPERATORS = frozenset({'>', '1>'})
STDERR_OPERATORS = frozenset({'2>'})


class ParserState(Enum):
    """States of the tokenizer."""
    NORMAL = auto()
    SINGLE_QUOTED = auto()
    DOUBLE_QUOTED = auto()
    ESCAPING = auto()
    ESCAPING_IN_DOUBLE_QUOTES = auto()


class TokenType(Enum):
    """Token types for command parsing."""
    WORD = "word"
    REDIRECT_STDOUT = "redirect_stdout"
    REDIRECT_STDERR = "redirect_stderr"


@dataclass
class Token:
    """A parsed token."""
    type: TokenType
    value: str


@dataclass
class ParsedCommand:
    """A parsed command line."""
    name: str
    args: List[str] = field(default_factory=list)
    stdout_target: Optional[str] = None
    stderr_target: Optional[str] = None

    @property
    def argv(self) -> List[str]:
        return [self.name, *self.args]


class CommandParser:
    """
    Parses shell command lines.

    Handles:
    - Command and arguments
    - Single quotes, double quotes and backslash escapes
    - Redirections (>, 1>, 2>)

    Example:
        >>> parser = CommandParser()
        >>> cmd = parser.parse("echo 'hello   world' > out.txt")
        >>> cmd.name, cmd.args, cmd.stdout_target
        ('echo', ['hello   world'], 'out.txt')
    """

    def __init__(self):
        self._logger = get_logger('parser')

    def parse(self, line: str) -> Optional[ParsedCommand]:
        """
        Parse a command line.

        Args:
            line: Command line string

        Returns:
            ParsedCommand, or None if the line is blank

        Raises:
            UnclosedQuoteError: A quote is still open at end of input
            RedirectionSyntaxError: A redirection has no target
            MissingCommandError: The line holds no command word
        """
        if not line.strip():
            return None

        tokens = self._tokenize(line)
        cmd = self._parse_tokens(tokens, line)

        self._logger.debug(
            "Parsed command",
            context={
                'name': cmd.name,
                'argc': len(cmd.args),
                'stdout': cmd.stdout_target,
                'stderr': cmd.stderr_target,
            }
        )
        return cmd

    def _tokenize(self, line: str) -> List[Token]:
        """Convert a line into tokens."""
        tokens: List[Token] = []
        current: List[str] = []
        # Set once quoting or escaping contributes to the current word;
        # such a word is never a redirection operator.
        literal = False
        state = ParserState.NORMAL

        def finish_word() -> None:
            nonlocal current, literal
            if current:
                tokens.append(self._classify(''.join(current), literal))
            current = []
            literal = False

        for char in line:
            if state is ParserState.NORMAL:
                if char.isspace():
                    finish_word()
                elif char == BACKSLASH:
                    state = ParserState.ESCAPING
                    literal = True
                elif char == SINGLE_QUOTE:
                    state = ParserState.SINGLE_QUOTED
                    literal = True
                elif char == DOUBLE_QUOTE:
                    state = ParserState.DOUBLE_QUOTED
                    literal = True
                else:
                    current.append(char)

            elif state is ParserState.SINGLE_QUOTED:
                if char == SINGLE_QUOTE:
                    state = ParserState.NORMAL
                else:
                    current.append(char)

            elif state is ParserState.DOUBLE_QUOTED:
                if char == DOUBLE_QUOTE:
                    state = ParserState.NORMAL
                elif char == BACKSLASH:
                    state = ParserState.ESCAPING_IN_DOUBLE_QUOTES
                else:
                    current.append(char)

            elif state is ParserState.ESCAPING:
                current.append(char)
                state = ParserState.NORMAL

            elif state is ParserState.ESCAPING_IN_DOUBLE_QUOTES:
                if char not in ESCAPABLE_IN_DOUBLE_QUOTES:
                    current.append(BACKSLASH)
                current.append(char)
                state = ParserState.DOUBLE_QUOTED

        if state is ParserState.SINGLE_QUOTED:
            raise UnclosedQuoteError(SINGLE_QUOTE, line=line)
        if state in (ParserState.DOUBLE_QUOTED, ParserState.ESCAPING_IN_DOUBLE_QUOTES):
            raise UnclosedQuoteError(DOUBLE_QUOTE, line=line)

        # A trailing lone backslash (state ESCAPING) is dropped.
        finish_word()
        return tokens

    @staticmethod
    def _classify(word: str, literal: bool) -> Token:
        """Turn a finished word into a token."""
        if not literal:
            if word in STDOUT_OPERATORS:
                return Token(TokenType.REDIRECT_STDOUT, word)
            if word in STDERR_OPERATORS:
                return Token(TokenType.REDIRECT_STDERR, word)
        return Token(TokenType.WORD, word)

    def _parse_tokens(self, tokens: List[Token], line: str) -> ParsedCommand:
        """Parse tokens into a command structure."""
        words: List[str] = []
        stdout_target: Optional[str] = None
        stderr_target: Optional[str] = None

        i = 0
        while i < len(tokens):
            token = tokens[i]

            if token.type is TokenType.WORD:
                words.append(token.value)
                i += 1
                continue

            # Redirection: the next token must be a plain word
            if i + 1 >= len(tokens):
                raise RedirectionSyntaxError('newline', line=line)
            target = tokens[i + 1]
            if target.type is not TokenType.WORD:
                raise RedirectionSyntaxError(target.value, line=line)

            # A later redirection of the same stream replaces the earlier one
            if token.type is TokenType.REDIRECT_STDOUT:
                stdout_target = target.value
            else:
                stderr_target = target.value
            i += 2

        if not words:
            raise MissingCommandError(line=line)

        return ParsedCommand(
            name=words[0],
            args=words[1:],
            stdout_target=stdout_target,
            stderr_target=stderr_target,
        )


def tokenize(line: str) -> Optional[ParsedCommand]:
    """Parse ``line`` with a fresh CommandParser."""
    return CommandParser().parse(line)
