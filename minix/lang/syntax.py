"""Recursive-descent parser for minix language. Turns the token list produced by lexical.py into a Program.

The grammar is small enough to be stated in full:

```
<program>    ::= <statement>*
<statement>  ::= <let_stmt> | <print_stmt>
<let_stmt>   ::= "let" <ident> "=" <string> ";"                 ; right-hand side must be a string literal
<print_stmt> ::= "print" "(" <string> ("," <ident>)* ")" ";"    ; each "{}" in the string takes the next <ident>
```

The parser looks one token ahead and never backtracks. Any error aborts the whole parse: a Program never holds a
statement that failed to parse.
"""

from dataclasses import dataclass, field

from minix.lang.error import ParseError
from minix.lang.lexical import Token, TokenKind


@dataclass(frozen=True)
class Let:
    """Binds string literal value to name."""
    name: str
    value: str
    pos: int = field(default=None, compare=False)
    end: int = field(default=None, compare=False)


@dataclass(frozen=True)
class Print:
    """Prints format, with each "{}" marker replaced by the value of the next name in args."""
    format: str
    args: tuple = ()
    pos: int = field(default=None, compare=False)
    end: int = field(default=None, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "args", tuple(self.args))


@dataclass(frozen=True)
class Program:
    """Statements in declaration (and execution) order."""
    body: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "body", tuple(self.body))

    def __iter__(self):
        return iter(self.body)

    def __len__(self):
        return len(self.body)


class Parser:
    """Cursor over a token list. source is only used to locate errors."""

    def __init__(self, tokens, source=None):
        self.tokens = list(tokens)
        self.source = source
        self.idx = 0
        self.stopped_early = False  # whether parse stopped on a '}' rather than at end of input

    def peek(self):
        """Returns next token without consuming it. Past the end of self.tokens, this is always an EOF token."""
        if self.idx < len(self.tokens):
            return self.tokens[self.idx]

        end = self.tokens[-1].end if self.tokens else 0
        return Token(TokenKind.EOF, pos=end, end=end)

    def bump(self):
        """Consumes and returns next token."""
        token = self.peek()
        self.idx += 1
        return token

    def expect(self, kind):
        """Consumes next token, raising a ParseError if it is not of kind."""
        token = self.bump()
        if token.kind is not kind:
            raise self.error(f"expected {Token.spelling(kind)}, found {token.describe()}", token)
        return token

    def expect_text(self, kind, context):
        """Like expect, but for tokens that carry text (IDENT, STR). Returns that text."""
        token = self.bump()
        if token.kind is not kind:
            raise self.error(f"expected {Token.spelling(kind)} {context}, found {token.describe()}", token)
        return token.text

    def error(self, msg, token):
        return ParseError(msg, token, self.source)

    def parse(self):
        """Parses statements until end of input (or a stray '}') and returns them as a Program."""
        body = []
        while self.peek().kind not in (TokenKind.RBRACE, TokenKind.EOF):
            body.append(self.parse_statement())

        self.stopped_early = self.peek().kind is TokenKind.RBRACE
        return Program(body)

    def parse_statement(self):
        token = self.peek()
        if token.kind is TokenKind.LET:
            return self.parse_let()
        elif token.kind is TokenKind.PRINT:
            return self.parse_print()
        raise self.error(f"unexpected token in statement: {token.describe()}", token)

    def parse_let(self):
        start = self.expect(TokenKind.LET).pos
        name = self.expect_text(TokenKind.IDENT, "after 'let'")
        self.expect(TokenKind.EQUAL)
        value = self.expect_text(TokenKind.STR, "after '='")
        end = self.expect(TokenKind.SEMICOLON).end

        return Let(name, value, start, end)

    def parse_print(self):
        start = self.expect(TokenKind.PRINT).pos
        self.expect(TokenKind.LPAREN)
        fmt = self.expect_text(TokenKind.STR, "in print(...)")

        args = []
        while self.peek().kind is TokenKind.COMMA:
            self.bump()
            args.append(self.expect_text(TokenKind.IDENT, "as print argument"))

        self.expect(TokenKind.RPAREN)
        end = self.expect(TokenKind.SEMICOLON).end

        return Print(fmt, args, start, end)


def parse(tokens, source=None):
    """Shorthand for Parser(tokens, source).parse()."""
    return Parser(tokens, source).parse()
