"""Session control for minix language. Runs the lexer, parser and interpreter one after the other, either over a
whole .x file or over lines typed into the command-line interpreter.
"""

import sys

from minix.lang.error import GenericException, LexError
from minix.lang.lexical import UNTERMINATED, TokenKind, tokenize
from minix.lang.runtime import Interpreter
from minix.lang.syntax import Parser


class Session:
    """Governs a minix session. Bindings made by let statements last as long as the session: one file run, or the
    whole command-line session.
    """
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line, out=None, dump_tokens=False, dump_program=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path                  # used for error messages
        self.cmd_line = cmd_line          # whether or not in command-line mode
        self.dump_tokens = dump_tokens    # print tokens before parsing
        self.dump_program = dump_program  # print program before running

        self.out = sys.stdout if out is None else out
        self.interpreter = Interpreter(out=self.out)
        self.source = None

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r", encoding="utf-8") as file:
                    self.source = file.read()
            except OSError:
                raise GenericException(f"'{path}' could not be opened", diagnosis=False)
            except UnicodeDecodeError:
                raise GenericException(f"'{path}' is not valid UTF-8", diagnosis=False)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def needs_continuation(source):
        """Whether source is an unfinished statement: an open string literal, or anything not yet ended by ';'. Used
        for line continuations in command-line mode.
        """
        try:
            tokens = tokenize(source)
        except LexError as error:
            return error.msg == UNTERMINATED

        return len(tokens) > 1 and tokens[-2].kind not in (TokenKind.SEMICOLON, TokenKind.RBRACE)

    def run_source(self, source, line_num=None):
        """Lexes, parses and runs source, which starts at line_num of self.path. Each stage either fully succeeds or
        raises its own GenericException subclass. Returns the lines printed.
        """
        if line_num is not None:
            self.error_handler.register_line(self.path, source, line_num)  # in case error is raised

        try:
            tokens = tokenize(source)
            if self.dump_tokens:
                print(f"Tokens: {tokens}", file=self.out)

            parser = Parser(tokens, source)
            program = parser.parse()
            if self.dump_program:
                print(f"Program: {program}", file=self.out)

            if parser.stopped_early:
                brace = parser.peek()
                self.error_handler.warn("'}' does not close a block, ignoring the rest of the input", source,
                                        brace.pos, brace.end)

            lines = self.interpreter.run(program)

        except GenericException as error:
            raise error.locate(source=source)

        if line_num is not None:
            self.error_handler.remove_line(self.path)  # error was not raised
        return lines

    def run(self):
        """Runs the file this session was created with."""
        if self.cmd_line:
            raise GenericException("only file sessions can be run as a whole", internal=True)
        return self.run_source(self.source)
