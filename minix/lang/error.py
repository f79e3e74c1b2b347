"""Error handling for minix language. Every stage of the pipeline raises its own GenericException subclass: LexError,
ParseError, or MinixRuntimeError. If another type of error makes it all the way to ErrorHandler, it is assumed to be an
internal issue.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates a minix error/warning message. source, start and end locate the offending text, if known."""
    stage = None

    def __init__(self, msg, source=None, start=None, end=None, diagnosis=True, internal=False):
        super().__init__(msg)

        self.msg = msg
        self.source = source
        self.start = start
        self.end = end if end is not None or start is None else start + 1  # needed for error display

        self.diagnosis = diagnosis
        self.internal = internal

    def locate(self, start=None, end=None, source=None):
        """Fills in whichever parts of the location are still unknown. Returns self so it can be re-raised."""
        if self.start is None and start is not None:
            self.start = start
            self.end = end if end is not None else start + 1
        if self.source is None:
            self.source = source
        return self

    def __str__(self):
        return f"{self.stage}: {self.msg}" if self.stage else self.msg


class LexError(GenericException):
    """Unexpected character, unterminated string literal, or unsupported escape sequence."""
    stage = "Lex error"


class ParseError(GenericException):
    """Token that does not fit the grammar. token is the offending token, and locates the error."""
    stage = "Parse error"

    def __init__(self, msg, token=None, source=None, **kwargs):
        start, end = (token.pos, token.end) if token is not None else (None, None)
        super().__init__(msg, source, start, end, **kwargs)
        self.token = token


class MinixRuntimeError(GenericException):
    """Undefined variable, or placeholder/argument count mismatch in a print statement."""
    stage = "Runtime error"


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom minix errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback. Source read from path starts at line 1."""
        self.traceback[path] = (None, 1)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to running a single line."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after a line ran successfully."""
        self.traceback[path] = (None, 1)

    @staticmethod
    def locate(source, offset):
        """Returns (line index, column, line) of offset within source. offset may point one past the end."""
        line_start = source.rfind("\n", 0, offset) + 1
        line_end = source.find("\n", offset)
        if line_end == -1:
            line_end = len(source)

        return source.count("\n", 0, offset), offset - line_start, source[line_start:line_end]

    @staticmethod
    def diagnose(error, warning=False):
        """Returns the line holding the offending part of error, highlighted and bolded, with a caret underneath."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        __, col, line = ErrorHandler.locate(error.source, error.start)
        width = max(min(error.end, error.start + len(line) - col) - error.start, 1)  # spans never cross lines

        diagnosis = "  " + line[:col]
        diagnosis += colored(line[col:col + width], color, attrs=["bold"])
        diagnosis += line[col + width:] + "\n"

        diagnosis += "  " + " " * col
        diagnosis += colored("^" + "~" * (width - 1), color, attrs=["bold"])

        return diagnosis

    def origin(self, error):
        """Returns '<file>:<line>:<col>: ' for error using self.traceback, or as much of it as is known."""
        if not self.traceback:
            return ""

        file, (__, line_num) = list(self.traceback.items())[-1]
        origin = f"{file}:"
        if error.source is not None and error.start is not None:
            line_idx, col, __ = ErrorHandler.locate(error.source, error.start)
            origin += f"{line_num + line_idx}:{col + 1}:"

        return colored(origin + " ", attrs=["bold"])

    def can_diagnose(self, error):
        return not error.internal and error.diagnosis and error.source is not None and error.start is not None

    def warn(self, *args, **kwargs):
        """Generates and prints warning message based on args. Never fatal."""
        warning = GenericException(*args, **kwargs)

        warning_msg = self.origin(warning)
        warning_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + warning.msg
        print(warning_msg)

        if self.can_diagnose(warning):
            print(ErrorHandler.diagnose(warning, warning=True))

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        error_msg = self.origin(error)
        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + str(error)
        print(error_msg)

        if self.can_diagnose(error):
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        self.traceback = {}  # if error occurred, reset traceback (no need if error is fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
