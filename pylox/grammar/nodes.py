"""Abstract syntax tree for pylox. Expression and statement nodes are closed sets of dataclasses; every node owns its
children exclusively, so a parsed program is always a tree.

Formally, the syntax the parser builds these nodes from can be defined as

```
<program>     ::= <declaration>* EOF
<declaration> ::= "var" IDENTIFIER ( "=" <expression> )? ";"          ; Var
                | <statement>
<statement>   ::= "print" <expression> ";"                            ; Print
                | "{" <declaration>* "}"                              ; Block
                | "if" "(" <expression> ")" <statement>               ; If
                  ( "else" <statement> )?                             ; - else binds to the nearest if
                | "while" "(" <expression> ")" <statement>            ; While
                | <expression> ";"                                    ; Expression

<expression>  ::= IDENTIFIER "=" <expression>                         ; Assign (right-associative)
                | <binary>
<binary>      ::= <expression> <operator> <expression>                ; Binary, see Parser for precedence
<unary>       ::= ( "!" | "-" ) <expression>                          ; Unary
<primary>     ::= NUMBER | STRING | "true" | "false" | "nil"          ; Literal
                | IDENTIFIER                                          ; Variable
                | "(" <expression> ")"                                ; Grouping
```

str(node) renders a node in parenthesized prefix form, e.g. `(+ 1 (group (* 2 3)))`; Expr.rpn renders expressions in
reverse Polish notation, e.g. `1 2 3 * +`.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from pylox.grammar.tokens import Token


def parenthesize(name, *parts):
    return f"({' '.join([name] + [str(part) for part in parts])})"


class Expr(ABC):
    """Superclass of every expression node."""

    @abstractmethod
    def rpn(self):
        """Renders this expression in reverse Polish notation."""


@dataclass
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr

    def rpn(self):
        return f"{self.left.rpn()} {self.right.rpn()} {self.operator.lexeme}"

    def __str__(self):
        return parenthesize(self.operator.lexeme, self.left, self.right)


@dataclass
class Unary(Expr):
    operator: Token
    right: Expr

    def rpn(self):
        return f"{self.right.rpn()} {self.operator.lexeme}"

    def __str__(self):
        return parenthesize(self.operator.lexeme, self.right)


@dataclass
class Grouping(Expr):
    expression: Expr

    def rpn(self):
        return self.expression.rpn()  # RPN needs no parentheses

    def __str__(self):
        return parenthesize("group", self.expression)


@dataclass
class Literal(Expr):
    """number/string/true/false/nil. The value is derived from the token, so the token is the only state."""
    token: Token

    def rpn(self):
        return str(self)

    def __str__(self):
        return self.token.lexeme


@dataclass
class Variable(Expr):
    name: Token

    def rpn(self):
        return str(self)

    def __str__(self):
        return self.name.lexeme


@dataclass
class Assign(Expr):
    name: Token
    value: Expr

    def rpn(self):
        return f"{self.name.lexeme} {self.value.rpn()} ="

    def __str__(self):
        return parenthesize("=", self.name.lexeme, self.value)


class Stmt(ABC):
    """Superclass of every statement node."""


@dataclass
class Expression(Stmt):
    expression: Expr

    def __str__(self):
        return parenthesize("expr", self.expression)


@dataclass
class Print(Stmt):
    expression: Expr

    def __str__(self):
        return parenthesize("print", self.expression)


@dataclass
class Var(Stmt):
    name: Token
    initializer: Optional[Expr] = None

    def __str__(self):
        if self.initializer is None:
            return parenthesize("var", self.name.lexeme)
        return parenthesize("var", self.name.lexeme, self.initializer)


@dataclass
class Block(Stmt):
    statements: List[Stmt] = field(default_factory=list)

    def __str__(self):
        return parenthesize("block", *self.statements)


@dataclass
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt] = None

    def __str__(self):
        if self.else_branch is None:
            return parenthesize("if", self.condition, self.then_branch)
        return parenthesize("if", self.condition, self.then_branch, self.else_branch)


@dataclass
class While(Stmt):
    condition: Expr
    body: Stmt

    def __str__(self):
        return parenthesize("while", self.condition, self.body)
