"""Lexical analysis for pylox: converts source text into a list of Tokens in one left-to-right pass. See
pylox/grammar/tokens.py for the lexical grammar.

Lexical errors never stop a scan. They are reported through the ErrorHandler and the offending characters are
dropped, so the parser still sees every well-formed token that follows.
"""

from pylox.grammar.tokens import EQUAL_SUFFIXED, KEYWORDS, SINGLE_CHARS, Token, TokenType
from pylox.lang.error import ErrorHandler, ScanError


class Scanner:
    """Single-use scanner over one source string. Create a new Scanner for every scan."""
    WHITESPACE = " \r\t"

    def __init__(self, source, error_handler=None):
        self.source = source
        self.error_handler = error_handler if error_handler is not None else ErrorHandler(echo=False)
        self.tokens = []

        self.start = 0    # start of current lexeme
        self.current = 0  # next unconsumed char
        self.line = 1

    def scan_tokens(self):
        """Scans the whole source. Always ends with an EOF token."""
        while not self.is_at_end():
            self.start = self.current
            self.scan_token()

        self.tokens.append(Token(TokenType.EOF, "", self.line))
        return self.tokens

    def scan_token(self):
        char = self.advance()

        if char in SINGLE_CHARS:
            self.add_token(SINGLE_CHARS[char])
        elif char in EQUAL_SUFFIXED:
            plain, suffixed = EQUAL_SUFFIXED[char]
            self.add_token(suffixed if self.match("=") else plain)
        elif char == "/":
            if self.match("/"):
                while self.peek() != "\n" and not self.is_at_end():
                    self.advance()  # comments run to end of line
            else:
                self.add_token(TokenType.SLASH)
        elif char == "\n":
            self.line += 1
        elif char in Scanner.WHITESPACE:
            pass
        elif char == "\"":
            self.string()
        elif Scanner.is_digit(char):
            self.number()
        elif Scanner.is_alpha(char):
            self.identifier()
        else:
            self.error(f"Unexpected character '{char}'.")

    def string(self):
        while self.peek() != "\"" and not self.is_at_end():
            if self.peek() == "\n":
                self.line += 1
            self.advance()

        if self.is_at_end():
            self.error("Unterminated string.")
            return

        self.advance()  # closing "
        self.add_token(TokenType.STRING, self.source[self.start + 1:self.current - 1])

    def number(self):
        while Scanner.is_digit(self.peek()):
            self.advance()

        # fractional part needs at least one digit after "."
        if self.peek() == "." and Scanner.is_digit(self.peek_next()):
            self.advance()
            while Scanner.is_digit(self.peek()):
                self.advance()

        self.add_token(TokenType.NUMBER, float(self.source[self.start:self.current]))

    def identifier(self):
        while Scanner.is_alphanumeric(self.peek()):
            self.advance()

        text = self.source[self.start:self.current]
        self.add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    def error(self, message):
        self.error_handler.report(self.line, "", message, ScanError)

    def add_token(self, kind, literal=None):
        self.tokens.append(Token(kind, self.source[self.start:self.current], self.line, literal))

    def advance(self):
        self.current += 1
        return self.source[self.current - 1]

    def match(self, expected):
        """Consumes the next char only if it is expected."""
        if self.is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def peek(self):
        if self.is_at_end():
            return "\0"
        return self.source[self.current]

    def peek_next(self):
        if self.current + 1 >= len(self.source):
            return "\0"
        return self.source[self.current + 1]

    def is_at_end(self):
        return self.current >= len(self.source)

    @staticmethod
    def is_digit(char):
        return "0" <= char <= "9"

    @staticmethod
    def is_alpha(char):
        return "a" <= char <= "z" or "A" <= char <= "Z" or char == "_"

    @staticmethod
    def is_alphanumeric(char):
        return Scanner.is_alpha(char) or Scanner.is_digit(char)
