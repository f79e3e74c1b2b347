import unittest

from minix.lang.error import LexError
from minix.lang.lexical import Lexer, Token, TokenKind, tokenize

LET, PRINT, EQUAL, SEMICOLON, EOF = (Token(kind) for kind in
                                     (TokenKind.LET, TokenKind.PRINT, TokenKind.EQUAL, TokenKind.SEMICOLON,
                                      TokenKind.EOF))


class TokenTestCase(unittest.TestCase):

    def test_eq(self):
        self.assertEqual(Token(TokenKind.LET), Token(TokenKind.LET, pos=17, end=20))
        self.assertEqual(Token.ident("x"), Token(TokenKind.IDENT, "x", 3, 4))
        self.assertNotEqual(Token.ident("x"), Token.ident("y"))
        self.assertNotEqual(Token.ident("x"), Token.string("x"))

    def test_repr(self):
        cases = {
            Token(TokenKind.LET): "Let",
            Token(TokenKind.RBRACE): "RBrace",
            Token(TokenKind.EOF): "Eof",
            Token.ident("x"): "Ident('x')",
            Token.string("a\nb"): "Str('a\\nb')",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, repr(case), case)

    def test_describe(self):
        cases = {
            Token(TokenKind.SEMICOLON): "';'",
            Token(TokenKind.PRINT): "'print'",
            Token(TokenKind.EOF): "end of input",
            Token.ident("name"): "identifier 'name'",
            Token.string("abc"): "string literal 'abc'",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, case.describe(), case)


class LexerTestCase(unittest.TestCase):

    def test_tokenize(self):
        cases = {
            "": [EOF],
            "  \n\t ": [EOF],
            "let x = \"a\\nb\";": [LET, Token.ident("x"), EQUAL, Token.string("a\nb"), SEMICOLON, EOF],
            "print(\"hi\");": [
                PRINT, Token(TokenKind.LPAREN), Token.string("hi"), Token(TokenKind.RPAREN), SEMICOLON, EOF
            ],
            "(){},;=": [Token(kind) for kind in (
                TokenKind.LPAREN, TokenKind.RPAREN, TokenKind.LBRACE, TokenKind.RBRACE, TokenKind.COMMA,
                TokenKind.SEMICOLON, TokenKind.EQUAL, TokenKind.EOF
            )],
            "letter printer _let let_ lets": [
                Token.ident("letter"), Token.ident("printer"), Token.ident("_let"), Token.ident("let_"),
                Token.ident("lets"), EOF
            ],
            "x1 _ héllo": [Token.ident("x1"), Token.ident("_"), Token.ident("héllo"), EOF],
            "let\nprint": [LET, PRINT, EOF],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, tokenize(case), case)

    def test_escapes(self):
        cases = {
            r'"\n"': "\n",
            r'"\t"': "\t",
            r'"\""': "\"",
            r'"\\"': "\\",
            r'"a\\nb"': "a\\nb",
            '"{} and {}"': "{} and {}",
            '"multi\nline"': "multi\nline",
            '""': "",
        }
        for case, expected in cases.items():
            self.assertEqual([Token.string(expected), EOF], tokenize(case), case)

    def test_single_eof(self):
        tokens = tokenize("let x = \"y\";   ")
        self.assertEqual(1, sum(token.kind is TokenKind.EOF for token in tokens))
        self.assertIs(TokenKind.EOF, tokens[-1].kind)

    def test_positions(self):
        tokens = tokenize("let  name = \"v\";")
        self.assertEqual([(0, 3), (5, 9), (10, 11), (12, 15), (15, 16), (16, 16)],
                         [(token.pos, token.end) for token in tokens])

    def test_eof_position(self):
        cases = {
            "": 0,
            "   \n": 0,
            "let x = \"abc\"": 13,
            "let x = \"abc\"\n\n  \t": 13,
            "print(\"hi\");\n": 12,
        }
        for case, pos in cases.items():
            eof = tokenize(case)[-1]
            self.assertEqual((pos, pos), (eof.pos, eof.end), case)

    def test_errors(self):
        should_raise = {
            "let x = \"abc": ("unterminated string", 8),
            "\"abc\\": ("unfinished escape in string", 4),
            "\"a\\qb\"": ("unsupported escape: '\\q'", 2),
            "let x = 5;": ("unexpected character '5' at 8", 8),
            "print(\"hi\") # comment": ("unexpected character '#' at 12", 12),
            "let x = 'abc';": ("unexpected character ''' at 8", 8),
        }
        for case, (msg, start) in should_raise.items():
            with self.assertRaises(LexError, msg=case) as ctx:
                tokenize(case)
            self.assertEqual(msg, ctx.exception.msg, case)
            self.assertEqual(start, ctx.exception.start, case)
            self.assertEqual(case, ctx.exception.source, case)

    def test_error_str(self):
        with self.assertRaises(LexError) as ctx:
            tokenize("@")
        self.assertEqual("Lex error: unexpected character '@' at 0", str(ctx.exception))

    def test_cursor(self):
        lexer = Lexer("ab")
        self.assertEqual("a", lexer.peek())
        self.assertEqual("a", lexer.bump())
        self.assertEqual("b", lexer.bump())
        self.assertIsNone(lexer.peek())
        self.assertIsNone(lexer.bump())
        self.assertEqual(2, lexer.idx)


if __name__ == '__main__':
    unittest.main()
