"""Handles interactive/command-line mode for minix interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """minix interpreter shell."""
    intro = "minix interpreter :: Python backend\nType 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continutations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self._tmp_line_num = None  # line the continued statement started on
        self.line_num = 0

    def onecmd(self, line):
        """While a statement is being continued, every line belongs to it, even one that looks like a command. End of
        input is the exception: the unfinished statement is run as is, so its error gets reported, and the shell exits.
        """
        if self._tmp_line and line == "EOF":
            with self.sess.error_handler:
                source, self._tmp_line = self._tmp_line, ""
                self.prompt = self._tmp_prompt
                self.sess.run_source(source, self._tmp_line_num)
            return self.do_EOF("")
        elif self._tmp_line:
            return self.default(line)
        return super().onecmd(line)

    def default(self, line):
        """Executes arbitrary minix statements."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            if not self._tmp_line:
                self._tmp_line_num = self.line_num

            source = f"{self._tmp_line}\n{line}" if self._tmp_line else line

            if self.sess.needs_continuation(source):
                self._tmp_line = source
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            self.sess.run_source(source, self._tmp_line_num)

    def do_vars(self, arg):
        """Shows every variable bound so far in this session."""
        if self.sess.interpreter.env:
            print(self.sess.interpreter.env.display(), file=self.stdout)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the minix interpreter!\n\n"
              "minix has two statements. 'let' binds a string to a name, and 'print' prints a \n"
              "string, replacing each '{}' in it with the value of the next name given.\n\n"
              "Try it out by typing 'let name = \"Bob\";'. Next, try typing \n"
              "'print(\"Hello, {}!\", name);'. This will print 'Hello, Bob!'. Type 'vars' to \n"
              "see every binding made so far, and 'exit' to leave.", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
