import logging

import ply.yacc as yacc

from origami.lexer import Lexer
import origami.origami_ast as ast
from origami.errors import ParseError, SourceLocation, get_source_context

logger = logging.getLogger(__name__)

class Parser:
    start = 'program'

    precedence = (
        ('right', 'ELSE'),
        ('left', 'OR'),
        ('left', 'AND'),
        ('right', 'NOT'),
        ('nonassoc', 'EQ', 'NEQ', 'LT', 'GT', 'LTE', 'GTE'),
        ('left', 'PLUS', 'MINUS'),
        ('left', 'TIMES', 'DIVIDE'),
    )

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.lexer = Lexer()
        self.tokens = self.lexer.tokens  # Get token list from lexer
        self.parser = yacc.yacc(module=self, debug=False, write_tables=False, errorlog=logger)
        self.source_file = "<string>"

    def parse(self, source: str, file_path: str = "<string>") -> ast.Program:
        """Parse source code into a Program"""
        self.logger.debug(f"Parsing {file_path}")
        self.source_file = file_path
        self.lexer.source_file = file_path
        declarations = self.parser.parse(source, lexer=self.lexer)
        program = ast.Program(declarations, source_file=file_path)
        self.logger.debug(f"Parsed {len(declarations)} declarations from {file_path}")
        return program

    def _location(self, p, n=1):
        tok = p.slice[n]
        return SourceLocation(self.source_file, p.lineno(n), getattr(tok, 'column', 0))

    # Declarations

    def p_program(self, p):
        '''program : declarations'''
        p[0] = p[1]

    def p_declarations(self, p):
        '''declarations : declarations declaration
                        | empty'''
        if len(p) == 2:
            p[0] = []
        else:
            p[0] = p[1] + [p[2]]

    def p_declaration(self, p):
        '''declaration : union_declaration
                       | function_definition
                       | import_declaration'''
        p[0] = p[1]

    def p_union_declaration(self, p):
        '''union_declaration : UNION IDENTIFIER LBRACE case_list RBRACE
                             | UNION IDENTIFIER LBRACE case_list COMMA RBRACE'''
        p[0] = ast.SumTypeDeclaration(p[2], p[4], location=self._location(p))

    def p_case_list(self, p):
        '''case_list : case
                     | case_list COMMA case'''
        if len(p) == 2:
            p[0] = [p[1]]
        else:
            p[0] = p[1] + [p[3]]

    def p_case(self, p):
        '''case : IDENTIFIER
                | IDENTIFIER LPAREN name_list_opt RPAREN'''
        fields = p[3] if len(p) == 5 else []
        p[0] = ast.CaseDeclaration(p[1], fields, location=self._location(p))

    def p_name_list_opt(self, p):
        '''name_list_opt : name_list
                         | empty'''
        p[0] = p[1] if p[1] else []

    def p_name_list(self, p):
        '''name_list : IDENTIFIER
                     | name_list COMMA IDENTIFIER'''
        if len(p) == 2:
            p[0] = [p[1]]
        else:
            p[0] = p[1] + [p[3]]

    def p_function_definition(self, p):
        '''function_definition : DEFINE function_name LPAREN name_list_opt RPAREN block'''
        p[0] = ast.FunctionDefinition(p[2], p[4], p[6], location=self._location(p))

    def p_function_name(self, p):
        '''function_name : IDENTIFIER
                         | operator'''
        p[0] = p[1]

    def p_operator(self, p):
        '''operator : EQ
                    | NEQ
                    | GT
                    | LT
                    | GTE
                    | LTE
                    | PLUS
                    | MINUS
                    | TIMES
                    | DIVIDE
                    | OR
                    | AND
                    | NOT'''
        p[0] = p[1]

    def p_import_declaration(self, p):
        '''import_declaration : IMPORT import_list FROM STRING'''
        p[0] = ast.ImportDeclaration(p[2], p[4], location=self._location(p))

    def p_import_list(self, p):
        '''import_list : import_name
                       | import_list COMMA import_name'''
        if len(p) == 2:
            p[0] = [p[1]]
        else:
            p[0] = p[1] + [p[3]]

    def p_import_name(self, p):
        '''import_name : IDENTIFIER
                       | LPAREN operator RPAREN'''
        p[0] = p[1] if len(p) == 2 else p[2]

    # Statements

    def p_block(self, p):
        '''block : LBRACE statement_list RBRACE'''
        p[0] = p[2]

    def p_statement_list(self, p):
        '''statement_list : statement_list statement
                          | empty'''
        if len(p) == 2:
            p[0] = []
        else:
            p[0] = p[1] + [p[2]]

    def p_let_statement(self, p):
        '''statement : LET IDENTIFIER EQUALS expression SEMICOLON'''
        p[0] = ast.LetStatement(p[2], p[4], location=self._location(p))

    def p_return_statement(self, p):
        '''statement : RETURN expression SEMICOLON'''
        p[0] = ast.ReturnStatement(p[2], location=self._location(p))

    def p_expression_statement(self, p):
        '''statement : expression SEMICOLON'''
        p[0] = ast.ExpressionStatement(p[1], location=p[1].location)

    # Expressions

    def p_expression_conditional(self, p):
        '''expression : IF expression THEN expression ELSE expression'''
        p[0] = ast.Conditional(p[2], p[4], p[6], location=self._location(p))

    def p_expression_binop(self, p):
        '''expression : expression OR expression
                      | expression AND expression
                      | expression EQ expression
                      | expression NEQ expression
                      | expression LT expression
                      | expression GT expression
                      | expression LTE expression
                      | expression GTE expression
                      | expression PLUS expression
                      | expression MINUS expression
                      | expression TIMES expression
                      | expression DIVIDE expression'''
        p[0] = ast.BinaryOperation(p[2], p[1], p[3], location=p[1].location)

    def p_expression_not(self, p):
        '''expression : NOT expression'''
        p[0] = ast.UnaryOperation(p[1], p[2], location=self._location(p))

    def p_expression_postfix(self, p):
        '''expression : postfix'''
        p[0] = p[1]

    def p_postfix_field(self, p):
        '''postfix : postfix DOT IDENTIFIER'''
        p[0] = ast.FieldAccess(p[1], p[3], location=p[1].location)

    def p_postfix_call(self, p):
        '''postfix : postfix LPAREN arguments RPAREN'''
        p[0] = ast.FunctionCall(p[1], p[3], location=p[1].location)

    def p_postfix_primary(self, p):
        '''postfix : primary'''
        p[0] = p[1]

    def p_arguments(self, p):
        '''arguments : expression_list
                     | empty'''
        p[0] = p[1] if p[1] else []

    def p_expression_list(self, p):
        '''expression_list : expression
                           | expression_list COMMA expression'''
        if len(p) == 2:
            p[0] = [p[1]]
        else:
            p[0] = p[1] + [p[3]]

    def p_primary_literal(self, p):
        '''primary : NUMBER
                   | FLOAT
                   | STRING'''
        p[0] = ast.Literal(p[1], location=self._location(p))

    def p_primary_constant(self, p):
        '''primary : TRUE
                   | FALSE
                   | NOTHING'''
        value = {'true': True, 'false': False, 'nothing': None}[p[1]]
        p[0] = ast.Literal(value, location=self._location(p))

    def p_primary_variable(self, p):
        '''primary : IDENTIFIER'''
        p[0] = ast.Variable(p[1], location=self._location(p))

    def p_primary_group(self, p):
        '''primary : LPAREN expression RPAREN'''
        p[0] = p[2]

    def p_empty(self, p):
        '''empty :'''
        p[0] = None

    def p_error(self, p):
        if p is None:
            lines = self.lexer.source.splitlines() or [""]
            location = SourceLocation(self.source_file, len(lines), len(lines[-1]) + 1)
            raise ParseError(
                message="Unexpected end of input",
                location=location,
                notes=["Check for a missing '}' or ';'"]
            )
        column = getattr(p, 'column', 0)
        raise ParseError(
            message=f"Unexpected {p.type} {p.value!r}",
            location=SourceLocation(self.source_file, p.lineno, column),
            context=get_source_context(self.lexer.source, p.lineno, column),
            notes=["Check syntax near this location"]
        )
