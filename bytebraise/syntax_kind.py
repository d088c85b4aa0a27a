"""Kinds of tokens and nodes in a BitBake syntax tree."""

from enum import IntEnum, auto


class SyntaxKind(IntEnum):
    """Every kind of token and node in a syntax tree.

    Values up to and including ``WHITESPACE`` are tokens; everything after
    it is a compound node, with ``ROOT_NODE`` always last.
    """

    ERROR = 0

    # Tokens
    ADD_HANDLER = auto()
    ADD_TASK = auto()
    AFTER = auto()
    BEFORE = auto()
    CLOSE_PARENTHESIS = auto()
    COLON = auto()
    COLON_EQUALS = auto()
    COMMENT = auto()
    DEFAULT_EQUALS = auto()
    DEL_TASK = auto()
    DOT_EQUALS = auto()
    DOUBLE_QUOTE = auto()
    DOUBLE_QUOTED_VALUE = auto()
    END_OF_INPUT = auto()
    EQUALS = auto()
    EQUALS_DOT = auto()
    EQUALS_PLUS = auto()
    ESCAPED_NEWLINE = auto()
    EXPORT = auto()
    EXPORT_FUNCTIONS = auto()
    FAKEROOT = auto()
    IDENTIFIER = auto()
    DIRECTIVE_ARGUMENT = auto()
    INCLUDE = auto()
    INHERIT = auto()
    NEWLINE = auto()
    OPEN_PARENTHESIS = auto()
    PLUS_EQUALS = auto()
    PYTHON = auto()
    PYTHON_DEF_KEYWORD = auto()
    PYTHON_DEF_FUNCTION_NAME = auto()
    PYTHON_DEF_FUNCTION_ARGS = auto()
    PYTHON_DEF_FUNCTION_BODY = auto()
    REQUIRE = auto()
    SINGLE_QUOTE = auto()
    SINGLE_QUOTED_VALUE = auto()
    SQUARE_CLOSE_BRACKET = auto()
    SQUARE_OPEN_BRACKET = auto()
    TASK = auto()
    UNQUOTED_VALUE = auto()
    UNSET = auto()
    VARFLAG = auto()
    WEAK_EQUALS = auto()
    WHITESPACE = 0x200  # last token

    # Compound nodes representing top-level metadata items
    ASSIGNMENT_NODE = auto()
    EXPORT_NODE = auto()
    INCLUDE_NODE = auto()
    REQUIRE_NODE = auto()
    TASK_NODE = auto()
    UNSET_NODE = auto()
    EXPORT_FUNCTIONS_NODE = auto()
    INHERIT_NODE = auto()
    PYTHON_DEF_NODE = auto()
    ADD_TASK_NODE = auto()
    DEL_TASK_NODE = auto()
    ADD_HANDLER_NODE = auto()

    # Helper node that never appears at the root
    IDENTIFIER_EXPRESSION_NODE = auto()

    # The whole metadata or configuration file; must stay last
    ROOT_NODE = auto()

    def is_token(self) -> bool:
        return self <= SyntaxKind.WHITESPACE

    def is_node(self) -> bool:
        return not self.is_token()

    def is_whitespace(self) -> bool:
        return self in (SyntaxKind.WHITESPACE, SyntaxKind.NEWLINE)

    def is_end_of_input(self) -> bool:
        return self is SyntaxKind.END_OF_INPUT

    def is_assignment_operator(self) -> bool:
        return self in _ASSIGNMENT_OPERATORS


_ASSIGNMENT_OPERATORS = frozenset(
    {
        SyntaxKind.EQUALS,
        SyntaxKind.EQUALS_PLUS,
        SyntaxKind.EQUALS_DOT,
        SyntaxKind.WEAK_EQUALS,
        SyntaxKind.DEFAULT_EQUALS,
        SyntaxKind.DOT_EQUALS,
        SyntaxKind.PLUS_EQUALS,
        SyntaxKind.COLON_EQUALS,
    }
)