from ply import lex

reserved = {
    'class': 'CLASS',
    'extends': 'EXTENDS',
    'integer': 'INTEGER',
    'boolean': 'BOOLEAN',
    'none': 'NONE',
    'if': 'IF',
    'else': 'ELSE',
    'while': 'WHILE',
    'do': 'DO',
    'print': 'PRINT',
    'return': 'RETURN',
    'new': 'NEW',
    'true': 'TRUE',
    'false': 'FALSE',
    'and': 'AND',
    'or': 'OR',
    'not': 'NOT',
}

tokens = [
    'IDENT', 'INT',
    'DOT',
    'PLUS', 'MINUS', 'TIMES', 'DIVIDE',
    'ARROW',
    'GT', 'GE', 'EQ',
] + sorted(set(reserved.values()))

literals = ['=', ':', ';', ',', '{', '}', '(', ')']

t_DOT = r'\.'
t_GE = r'>='
t_GT = r'>'
t_EQ = r'=='
t_ARROW = r'->'
t_PLUS = r'\+'
t_MINUS = r'-'
t_TIMES = r'\*'
t_DIVIDE = r'/'

def t_INT(t):
    r'\d+'
    t.value = int(t.value)
    return t

def t_IDENT(t):
    r'[A-Za-z_]\w*'
    t.type = reserved.get(t.value, 'IDENT')
    return t

t_ignore = ' \t\r'

def t_newline(t):
    r'\n+'
    t.lexer.lineno += t.value.count('\n')

def t_comment(t):
    r'//[^\n]*'
    pass

def t_multiline_comment(t):
    r'/\*(.|\n)*?\*/'
    t.lexer.lineno += t.value.count('\n')
    pass

def t_error(t):
    raise SyntaxError(f"第 {t.lineno} 行: 非法字符 {t.value[0]!r}")

lexer = lex.lex()
