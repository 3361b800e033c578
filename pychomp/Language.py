from dataclasses import replace

from .Token import LanguageDef, TokenParser

# -----------------------------------------------------------
# Minimal language definition
# -----------------------------------------------------------

# This is the most minimal token definition. It is recommended to use
# this definition as the basis for other definitions.
empty_def = LanguageDef(
    comment_start="",
    comment_end="",
    comment_line="",
    nested_comments=True,
    ident_start=lambda c: c.isalpha() or c == "_",
    ident_letter=lambda c: c.isalnum() or c in "_'",
    reserved_names=frozenset(),
    reserved_op_names=frozenset(),
)

# -----------------------------------------------------------
# Styles: haskell_style, c_style, python_style
# -----------------------------------------------------------

# Nested {- -} block comments and -- line comments.
haskell_style = replace(
    empty_def,
    comment_start="{-",
    comment_end="-}",
    comment_line="--",
    nested_comments=True,
    ident_start=str.isalpha,
)

# /* */ block comments, which do not nest, and // line comments.
c_style = replace(
    empty_def,
    comment_start="/*",
    comment_end="*/",
    comment_line="//",
    nested_comments=False,
    ident_letter=lambda c: c.isalnum() or c == "_",
)

# # line comments only.
python_style = replace(
    empty_def,
    comment_line="#",
    nested_comments=False,
    ident_letter=lambda c: c.isalnum() or c == "_",
    reserved_names=frozenset([
        "def", "class", "if", "else", "elif", "while", "for", "return",
        "import", "from", "try", "except", "raise", "pass", "with", "as",
        "lambda", "yield", "None", "True", "False", "await", "async",
    ]),
    reserved_op_names=frozenset([
        "+", "-", "*", "/", "%", "**", "//", "==", "!=", "<", ">", "<=",
        ">=", "=", "+=", "-=", "*=", "/=",
    ]),
)

# A lexer for Python-like languages.
python = TokenParser(python_style)
