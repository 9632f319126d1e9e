import json
import logging

import ply.lex as lex

from origami.errors import ParseError, SourceLocation, get_source_context

logger = logging.getLogger(__name__)

class Lexer:
    # A string containing ignored characters (spaces and tabs)
    t_ignore = ' \t\r'

    # Keywords
    reserved = {
        'union': 'UNION',
        'define': 'DEFINE',
        'import': 'IMPORT',
        'from': 'FROM',
        'let': 'LET',
        'return': 'RETURN',
        'if': 'IF',
        'then': 'THEN',
        'else': 'ELSE',
        'and': 'AND',
        'or': 'OR',
        'not': 'NOT',
        'true': 'TRUE',
        'false': 'FALSE',
        'nothing': 'NOTHING',
    }

    # List of token names
    tokens = [
        'IDENTIFIER', 'NUMBER', 'FLOAT', 'STRING',
        'PLUS', 'MINUS', 'TIMES', 'DIVIDE',
        'EQ', 'NEQ', 'LT', 'GT', 'LTE', 'GTE',
        'LPAREN', 'RPAREN', 'LBRACE', 'RBRACE',
        'EQUALS', 'SEMICOLON', 'COMMA', 'DOT',
    ] + list(reserved.values())

    # Regular expression rules for simple tokens
    t_PLUS = r'\+'
    t_MINUS = r'-'
    t_TIMES = r'\*'
    t_DIVIDE = r'/'
    t_EQ = r'==='
    t_NEQ = r'=/='
    t_LTE = r'<='
    t_GTE = r'>='
    t_LT = r'<'
    t_GT = r'>'
    t_EQUALS = r'='
    t_LPAREN = r'\('
    t_RPAREN = r'\)'
    t_LBRACE = r'\{'
    t_RBRACE = r'\}'
    t_SEMICOLON = r';'
    t_COMMA = r','
    t_DOT = r'\.'

    # Comments
    def t_COMMENT(self, t):
        r'\#.*'
        pass

    def t_IDENTIFIER(self, t):
        r'[a-zA-Z][a-zA-Z_0-9]*'
        # Check for reserved words
        t.type = self.reserved.get(t.value, 'IDENTIFIER')
        return t

    def t_FLOAT(self, t):
        r'\d+\.\d+'
        t.value = float(t.value)
        return t

    def t_NUMBER(self, t):
        r'\d+'
        t.value = int(t.value)
        return t

    def t_STRING(self, t):
        r'"([^"\\\n]|\\.)*"'
        try:
            t.value = json.loads(t.value)
        except ValueError:
            self._fail(f"Invalid escape in string literal {t.value}", t)
        return t

    # Define a rule so we can track line numbers
    def t_newline(self, t):
        r'\n+'
        for i in range(len(t.value)):
            self.line_starts.append(t.lexpos + i + 1)
        t.lexer.lineno += len(t.value)

    # Error handling rule
    def t_error(self, t):
        self._fail(f"Illegal character '{t.value[0]}'", t)

    def _fail(self, message, t):
        column = self.column_of(t)
        raise ParseError(
            message=message,
            location=SourceLocation(self.source_file, t.lineno, column),
            context=get_source_context(self.source, t.lineno, column),
        )

    # Build the lexer
    def __init__(self):
        self.lexer = lex.lex(module=self, errorlog=logger)
        self.line_starts = [0]  # Track start of each line
        self.source = ""
        self.source_file = "<string>"

    def input(self, data):
        self.source = data
        self.lexer.input(data)
        self.lexer.lineno = 1
        self.line_starts = [0]  # Reset line starts

    def column_of(self, tok):
        line_start = self.line_starts[min(tok.lineno - 1, len(self.line_starts) - 1)]
        return tok.lexpos - line_start + 1  # Make columns 1-based

    def token(self):
        tok = self.lexer.token()
        if tok:
            tok.column = self.column_of(tok)
        return tok

    def tokenize(self, data):
        """All tokens of `data`, for tests and debugging"""
        self.input(data)
        result = []
        while True:
            tok = self.token()
            if tok is None:
                return result
            result.append(tok)
