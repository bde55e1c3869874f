"""Recursive-descent parser for pylox. Builds the syntax tree described in pylox/grammar/nodes.py from a list of Tokens.

Expression precedence, lowest to highest:

```
assignment  ->  IDENTIFIER "=" assignment | equality    ; right-associative
equality    ->  comparison ( ( "!=" | "==" ) comparison )*
comparison  ->  term ( ( ">" | ">=" | "<" | "<=" ) term )*
term        ->  factor ( ( "-" | "+" ) factor )*
factor      ->  unary ( ( "/" | "*" ) unary )*
unary       ->  ( "!" | "-" ) unary | primary          ; right-associative
```

Syntax errors do not abort a parse. A ParseError is reported through the ErrorHandler at the declaration that raised
it, after which the parser discards tokens up to the next statement boundary and carries on, so all errors in a
source are found in one pass.
"""

from pylox.grammar import nodes
from pylox.grammar.tokens import TokenType
from pylox.lang.error import ErrorHandler, ParseError


class Parser:
    """Single-token lookahead cursor over a token list that ends with EOF."""
    BOUNDARIES = {
        TokenType.CLASS, TokenType.FUN, TokenType.VAR, TokenType.FOR,
        TokenType.IF, TokenType.WHILE, TokenType.PRINT, TokenType.RETURN,
    }
    LITERALS = {TokenType.NUMBER, TokenType.STRING, TokenType.TRUE, TokenType.FALSE, TokenType.NIL}

    def __init__(self, tokens, error_handler=None):
        self.tokens = tokens
        self.error_handler = error_handler if error_handler is not None else ErrorHandler(echo=False)
        self.current = 0

    def parse(self):
        """Parses every declaration in self.tokens. Declarations with syntax errors are reported and left out."""
        statements = []
        while not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        return statements

    # statements

    def declaration(self):
        try:
            if self.match(TokenType.VAR):
                return self.var_declaration()
            return self.statement()
        except ParseError as error:
            self.error_handler.throw(error)
            self.synchronize()
            return None

    def var_declaration(self):
        name = self.consume(TokenType.IDENTIFIER, "Expect variable name.")

        initializer = None
        if self.match(TokenType.EQUAL):
            initializer = self.expression()

        self.consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return nodes.Var(name, initializer)

    def statement(self):
        if self.match(TokenType.PRINT):
            return self.print_statement()
        elif self.match(TokenType.LEFT_BRACE):
            return nodes.Block(self.block())
        elif self.match(TokenType.IF):
            return self.if_statement()
        elif self.match(TokenType.WHILE):
            return self.while_statement()
        return self.expression_statement()

    def print_statement(self):
        value = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return nodes.Print(value)

    def block(self):
        """Parses declarations up to the closing brace. Assumes the opening brace has been consumed."""
        statements = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)

        self.consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def if_statement(self):
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")

        then_branch = self.statement()
        else_branch = self.statement() if self.match(TokenType.ELSE) else None
        return nodes.If(condition, then_branch, else_branch)

    def while_statement(self):
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after condition.")

        return nodes.While(condition, self.statement())

    def expression_statement(self):
        expr = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return nodes.Expression(expr)

    # expressions

    def expression(self):
        return self.assignment()

    def assignment(self):
        expr = self.equality()

        if self.match(TokenType.EQUAL):
            equals = self.previous()
            value = self.assignment()

            if isinstance(expr, nodes.Variable):
                return nodes.Assign(expr.name, value)

            # reported, but the parser is not confused, so no need to synchronize
            self.error_handler.throw(ParseError.at(equals, "Invalid assignment target."))

        return expr

    def binary(self, operand, *operators):
        """Left-associative chain of operand separated by any of operators."""
        expr = operand()
        while self.match(*operators):
            operator = self.previous()
            expr = nodes.Binary(expr, operator, operand())
        return expr

    def equality(self):
        return self.binary(self.comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def comparison(self):
        return self.binary(
            self.term, TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL
        )

    def term(self):
        return self.binary(self.factor, TokenType.MINUS, TokenType.PLUS)

    def factor(self):
        return self.binary(self.unary, TokenType.SLASH, TokenType.STAR)

    def unary(self):
        if self.match(TokenType.BANG, TokenType.MINUS):
            operator = self.previous()
            return nodes.Unary(operator, self.unary())
        return self.primary()

    def primary(self):
        if self.match(*Parser.LITERALS):
            return nodes.Literal(self.previous())
        elif self.match(TokenType.IDENTIFIER):
            return nodes.Variable(self.previous())
        elif self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return nodes.Grouping(expr)

        raise ParseError.at(self.peek(), "Expect expression.")

    # cursor

    def synchronize(self):
        """Discards tokens until just after a ";" or just before a statement-starting keyword."""
        self.advance()
        while not self.is_at_end():
            if self.previous().kind == TokenType.SEMICOLON or self.peek().kind in Parser.BOUNDARIES:
                return
            self.advance()

    def consume(self, kind, message):
        if self.check(kind):
            return self.advance()
        raise ParseError.at(self.peek(), message)

    def match(self, *kinds):
        for kind in kinds:
            if self.check(kind):
                self.advance()
                return True
        return False

    def check(self, kind):
        return not self.is_at_end() and self.peek().kind == kind

    def advance(self):
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self):
        return self.peek().kind == TokenType.EOF

    def peek(self):
        return self.tokens[self.current]

    def previous(self):
        return self.tokens[self.current - 1]
