"""Lexical analysis for minix language. Turns source text into a list of Tokens, always terminated by exactly one EOF
token.

Tokens can be loosely defined as follows:

```
<keyword>     ::= "let" | "print"
<punctuation> ::= "(" | ")" | "{" | "}" | "," | ";" | "="     ; braces are lexed, but no statement uses them
<ident>       ::= (<alpha> | "_") (<alnum> | "_")*           ; any ident spelled like a keyword is that keyword
<string>      ::= '"' (<char> | <escape>)* '"'
<escape>      ::= "\n" | "\t" | '\"' | "\\"
```

Whitespace between tokens is skipped. Tokenization is a single forward pass with one character of lookahead.
"""

from dataclasses import dataclass, field
from enum import Enum

from minix.lang.error import LexError


class TokenKind(Enum):
    LET = "Let"
    PRINT = "Print"
    LPAREN = "LParen"
    RPAREN = "RParen"
    LBRACE = "LBrace"
    RBRACE = "RBrace"
    COMMA = "Comma"
    SEMICOLON = "Semicolon"
    EQUAL = "Equal"
    IDENT = "Ident"
    STR = "Str"
    EOF = "Eof"


PUNCTUATION = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMICOLON,
    "=": TokenKind.EQUAL,
}
KEYWORDS = {"let": TokenKind.LET, "print": TokenKind.PRINT}
ESCAPES = {"n": "\n", "t": "\t", "\"": "\"", "\\": "\\"}

SPELLINGS = {kind: f"'{spelling}'" for spelling, kind in {**PUNCTUATION, **KEYWORDS}.items()}
SPELLINGS.update({TokenKind.IDENT: "identifier", TokenKind.STR: "string literal", TokenKind.EOF: "end of input"})

UNTERMINATED = "unterminated string"


@dataclass(frozen=True)
class Token:
    """Immutable lexical unit. Only IDENT (name) and STR (literal with escapes resolved) tokens carry text. pos and end
    are the source offsets the token spans, and are ignored when comparing tokens.
    """
    kind: TokenKind
    text: str = None
    pos: int = field(default=None, compare=False)
    end: int = field(default=None, compare=False)

    @classmethod
    def ident(cls, name, pos=None, end=None):
        return cls(TokenKind.IDENT, name, pos, end)

    @classmethod
    def string(cls, literal, pos=None, end=None):
        return cls(TokenKind.STR, literal, pos, end)

    @staticmethod
    def spelling(kind):
        """How a token of kind is referred to in error messages."""
        return SPELLINGS[kind]

    def describe(self):
        """How this token is referred to in error messages: its spelling, plus its text if it has any."""
        if self.kind is TokenKind.IDENT:
            return f"identifier '{self.text}'"
        elif self.kind is TokenKind.STR:
            return f"string literal {self.text!r}"
        return Token.spelling(self.kind)

    def __repr__(self):
        if self.text is None:
            return self.kind.value
        return f"{self.kind.value}({self.text!r})"


class Lexer:
    """Cursor over source text. Each Lexer tokenizes its source once."""

    def __init__(self, source):
        self.source = source
        self.idx = 0
        self.last_end = 0  # end of the last token read, where EOF is placed

    def peek(self):
        """Returns next character without consuming it, or None at end of input."""
        return self.source[self.idx] if self.idx < len(self.source) else None

    def bump(self):
        """Consumes and returns next character, or None at end of input."""
        char = self.peek()
        if char is not None:
            self.idx += 1
        return char

    def skip_whitespace(self):
        while self.peek() is not None and self.peek().isspace():
            self.idx += 1

    def string(self, start):
        """Reads a string literal, resolving escapes. Assumes the opening quote (at start) was already consumed."""
        chars = []
        while True:
            char = self.bump()

            if char is None:
                raise LexError(UNTERMINATED, self.source, start, self.idx)
            elif char == "\"":
                return "".join(chars)
            elif char == "\\":
                esc = self.bump()
                if esc is None:
                    raise LexError("unfinished escape in string", self.source, self.idx - 1, self.idx)
                elif esc not in ESCAPES:
                    raise LexError(f"unsupported escape: '\\{esc}'", self.source, self.idx - 2, self.idx)
                chars.append(ESCAPES[esc])
            else:
                chars.append(char)

    def ident_or_keyword(self, first):
        """Reads the rest of an identifier that begins with first."""
        chars = [first]
        while self.peek() is not None and (self.peek().isalnum() or self.peek() == "_"):
            chars.append(self.bump())
        return "".join(chars)

    def next_token(self):
        """Skips whitespace and returns the next Token. Once source is exhausted, returns an EOF token placed right
        after the last token read, so trailing whitespace never moves it.
        """
        self.skip_whitespace()

        start = self.idx
        char = self.bump()

        if char is None:
            return Token(TokenKind.EOF, pos=self.last_end, end=self.last_end)
        elif char in PUNCTUATION:
            return Token(PUNCTUATION[char], pos=start, end=self.idx)
        elif char == "\"":
            literal = self.string(start)
            return Token.string(literal, start, self.idx)
        elif char.isalpha() or char == "_":
            name = self.ident_or_keyword(char)
            if name in KEYWORDS:
                return Token(KEYWORDS[name], pos=start, end=self.idx)
            return Token.ident(name, start, self.idx)

        raise LexError(f"unexpected character '{char}' at {start}", self.source, start)

    def tokenize(self):
        """Returns the full list of tokens in self.source. Stops right after the EOF token."""
        tokens = []
        while not tokens or tokens[-1].kind is not TokenKind.EOF:
            tokens.append(self.next_token())
            self.last_end = tokens[-1].end
        return tokens


def tokenize(source):
    """Shorthand for Lexer(source).tokenize()."""
    return Lexer(source).tokenize()
