"""Uses implementation of minix language to interpret .x files/run in command-line mode. Also uses error handling
context manager. Installed as the minix executable.
"""

import argparse

from minix.lang.error import ErrorHandler
from minix.lang.session import Session
from minix.lang.shell import Shell


def main(argv=None):
    """Runs minix interpreter. Called from minix executable script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="minix", description="minix language interpreter")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--tokens", action="store_true", help="print tokens before parsing")
        parser.add_argument("--ast", action="store_true", help="print parsed program before running it")
        args = parser.parse_args(argv)

        dumps = {"dump_tokens": args.tokens, "dump_program": args.ast}

        if args.file is not None:
            Session(error_handler, args.file, cmd_line=False, **dumps).run()
        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, **dumps)).cmdloop()


if __name__ == "__main__":
    main()
