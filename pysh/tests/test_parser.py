"""
Parser Tests

Quoting, escaping and redirection extraction.

Run with: python -m pytest pysh/tests -v
Or: python -m unittest discover pysh/tests
"""

import unittest

from pysh.exceptions import (
    ParseError,
    UnclosedQuoteError,
    RedirectionSyntaxError,
    MissingCommandError,
)
from pysh.shell.parser import CommandParser, ParsedCommand, tokenize


def argv(line):
    cmd = tokenize(line)
    return [cmd.name, *cmd.args]


class TestWhitespace(unittest.TestCase):
    """Unquoted whitespace separates words."""

    def test_simple_command(self):
        cmd = CommandParser().parse('ls -la /home')
        self.assertEqual(cmd.name, 'ls')
        self.assertEqual(cmd.args, ['-la', '/home'])
        self.assertIsNone(cmd.stdout_target)
        self.assertIsNone(cmd.stderr_target)

    def test_runs_of_whitespace_collapse(self):
        for line in ('echo hello world', '  echo   hello \t world  ', 'echo\thello\t\tworld'):
            with self.subTest(line=line):
                self.assertEqual(argv(line), line.split())

    def test_blank_line_is_none(self):
        self.assertIsNone(tokenize(''))
        self.assertIsNone(tokenize('   \t '))

    def test_argv_property(self):
        cmd = ParsedCommand(name='echo', args=['a', 'b'])
        self.assertEqual(cmd.argv, ['echo', 'a', 'b'])


class TestSingleQuotes(unittest.TestCase):
    """Everything inside single quotes is literal."""

    def test_internal_spaces_preserved(self):
        self.assertEqual(argv("echo 'hello     world'"), ['echo', 'hello     world'])

    def test_no_escape_processing(self):
        for text in ('a\\b', '\\n', 'x"y', 'tab\there', '$HOME', 'back\\'):
            with self.subTest(text=text):
                self.assertEqual(argv(f"echo '{text}'"), ['echo', text])

    def test_quoted_command_name(self):
        cmd = tokenize("'my program' arg")
        self.assertEqual(cmd.name, 'my program')
        self.assertEqual(cmd.args, ['arg'])


class TestDoubleQuotes(unittest.TestCase):
    """Backslash is selective inside double quotes."""

    def test_escaped_quotes(self):
        self.assertEqual(argv('echo "say \\"hi\\""'), ['echo', 'say "hi"'])

    def test_escapable_characters_lose_backslash(self):
        for char in ('"', '\\', '$', '`'):
            with self.subTest(char=char):
                self.assertEqual(argv(f'echo "\\{char}"'), ['echo', char])

    def test_escaped_newline(self):
        self.assertEqual(argv('echo "a\\\nb"'), ['echo', 'a\nb'])

    def test_other_characters_keep_backslash(self):
        for char in ('n', 't', 'a', "'", ' ', '5'):
            with self.subTest(char=char):
                self.assertEqual(argv(f'echo "\\{char}"'), ['echo', f'\\{char}'])

    def test_single_quote_inside_double_quotes(self):
        self.assertEqual(argv('echo "it\'s"'), ['echo', "it's"])

    def test_whitespace_preserved(self):
        self.assertEqual(argv('echo "hello     world"'), ['echo', 'hello     world'])


class TestEscaping(unittest.TestCase):
    """Backslash outside quotes."""

    def test_escaped_space_joins_words(self):
        self.assertEqual(argv('echo hello\\ \\ world'), ['echo', 'hello  world'])

    def test_escaped_quote_is_literal(self):
        self.assertEqual(argv("echo \\'hi\\'"), ['echo', "'hi'"])
        self.assertEqual(argv('echo \\"hi\\"'), ['echo', '"hi"'])

    def test_escaped_backslash(self):
        self.assertEqual(argv('echo a\\\\b'), ['echo', 'a\\b'])

    def test_escaped_ordinary_character(self):
        self.assertEqual(argv('echo \\n'), ['echo', 'n'])

    def test_trailing_backslash_dropped(self):
        self.assertEqual(argv('echo abc\\'), ['echo', 'abc'])
        self.assertEqual(argv('echo abc \\'), ['echo', 'abc'])


class TestConcatenation(unittest.TestCase):
    """Adjacent fragments form one word."""

    def test_adjacent_fragments(self):
        for line in ("echo 'a''b'", "echo a''b", "echo 'a'\"b\"", 'echo a""b'):
            with self.subTest(line=line):
                self.assertEqual(argv(line), ['echo', 'ab'])

    def test_quoted_and_unquoted(self):
        self.assertEqual(argv("echo 'foo'bar"), ['echo', 'foobar'])
        self.assertEqual(argv('echo foo"bar baz"qux'), ['echo', 'foobar bazqux'])

    def test_standalone_empty_quotes_are_dropped(self):
        self.assertEqual(argv("echo a '' b"), ['echo', 'a', 'b'])
        self.assertEqual(argv('echo "" b'), ['echo', 'b'])


class TestUnclosedQuotes(unittest.TestCase):
    """An open quote at end of input rejects the line."""

    def test_unclosed_single_quote(self):
        with self.assertRaises(UnclosedQuoteError) as ctx:
            tokenize("echo 'abc")
        self.assertEqual(ctx.exception.quote, "'")

    def test_unclosed_double_quote(self):
        with self.assertRaises(UnclosedQuoteError) as ctx:
            tokenize('echo "abc')
        self.assertEqual(ctx.exception.quote, '"')

    def test_backslash_at_end_of_double_quote(self):
        with self.assertRaises(UnclosedQuoteError):
            tokenize('echo "abc\\')

    def test_escaped_closing_quote_leaves_quote_open(self):
        with self.assertRaises(UnclosedQuoteError):
            tokenize('echo "abc\\"')

    def test_is_a_parse_error(self):
        with self.assertRaises(ParseError):
            tokenize("'")


class TestRedirection(unittest.TestCase):
    """Redirection operators and their targets."""

    def test_stdout_redirect(self):
        cmd = tokenize('echo hello > output.txt')
        self.assertEqual(cmd.name, 'echo')
        self.assertEqual(cmd.args, ['hello'])
        self.assertEqual(cmd.stdout_target, 'output.txt')
        self.assertIsNone(cmd.stderr_target)

    def test_explicit_stdout_redirect(self):
        cmd = tokenize('echo test content 1> output2.txt')
        self.assertEqual(cmd.args, ['test', 'content'])
        self.assertEqual(cmd.stdout_target, 'output2.txt')

    def test_stderr_redirect(self):
        cmd = tokenize('cat missing 2> errors.txt')
        self.assertEqual(cmd.args, ['missing'])
        self.assertEqual(cmd.stderr_target, 'errors.txt')
        self.assertIsNone(cmd.stdout_target)

    def test_both_redirects(self):
        cmd = tokenize('cmd a > out.txt 2> err.txt b')
        self.assertEqual(cmd.args, ['a', 'b'])
        self.assertEqual(cmd.stdout_target, 'out.txt')
        self.assertEqual(cmd.stderr_target, 'err.txt')

    def test_quoted_target(self):
        cmd = tokenize("echo hi > 'my file.txt'")
        self.assertEqual(cmd.stdout_target, 'my file.txt')

    def test_later_redirect_wins(self):
        cmd = tokenize('echo hi > first.txt > second.txt')
        self.assertEqual(cmd.stdout_target, 'second.txt')
        self.assertEqual(cmd.args, ['hi'])

    def test_quoted_operator_is_an_argument(self):
        for line in ("echo '>' x", 'echo ">" x', 'echo \\> x', "echo '2>' x"):
            with self.subTest(line=line):
                cmd = tokenize(line)
                self.assertEqual(len(cmd.args), 2)
                self.assertIsNone(cmd.stdout_target)
                self.assertIsNone(cmd.stderr_target)

    def test_operator_must_stand_alone(self):
        cmd = tokenize('echo a>b')
        self.assertEqual(cmd.args, ['a>b'])
        self.assertIsNone(cmd.stdout_target)

    def test_missing_target(self):
        with self.assertRaises(RedirectionSyntaxError) as ctx:
            tokenize('echo hi >')
        self.assertEqual(ctx.exception.token, 'newline')

    def test_operator_as_target(self):
        with self.assertRaises(RedirectionSyntaxError) as ctx:
            tokenize('echo hi > 2> x')
        self.assertEqual(ctx.exception.token, '2>')

    def test_redirect_without_command(self):
        with self.assertRaises(MissingCommandError):
            tokenize('> out.txt')

    def test_only_empty_quotes(self):
        with self.assertRaises(MissingCommandError):
            tokenize("'' \"\"")


if __name__ == '__main__':
    unittest.main()
