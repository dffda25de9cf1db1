from ply import lex

from errors import SplcSyntaxError

reserved = {
    'int': 'INT_TYPE',
    'char': 'CHAR_TYPE',
    'struct': 'STRUCT',
    'return': 'RETURN',
    'if': 'IF',
    'else': 'ELSE',
    'while': 'WHILE',
}

tokens = [
    'IDENT', 'INT', 'CHAR', 'STRING',
    'DOT', 'ARROW',
    'PLUS', 'MINUS', 'TIMES', 'DIV', 'MOD',
    'LT', 'GT', 'LE', 'GE', 'EQ', 'NE',
    'AND', 'OR', 'NOT', 'AMP',
    'ASSIGN',
] + sorted(set(reserved.values()))

literals = [';', ',', '{', '}', '[', ']', '(', ')']

t_DOT = r'\.'
t_ARROW = r'->'

t_LE = r'<='
t_GE = r'>='
t_EQ = r'=='
t_NE = r'!='
t_LT = r'<'
t_GT = r'>'

t_AND = r'&&'
t_OR = r'\|\|'
t_NOT = r'!'
t_AMP = r'&'
t_ASSIGN = r'='

t_PLUS = r'\+'
t_MINUS = r'-'
t_TIMES = r'\*'
t_DIV = r'/'
t_MOD = r'%'


def find_column(data: str, lexpos: int) -> int:
    """lexpos -> 列号（从 1 开始）"""
    line_start = data.rfind('\n', 0, lexpos) + 1
    return lexpos - line_start + 1


def t_comment(t):
    r'//[^\n]*'
    pass

def t_multiline_comment(t):
    r'/\*(.|\n)*?\*/'
    t.lexer.lineno += t.value.count('\n')
    pass

def t_CHAR(t):
    r"'([^'\\\n]|\\.)'"
    s = t.value[1:-1]
    s = s.replace('\\n', '\n').replace('\\t', '\t').replace('\\0', '\0').replace("\\'", "'").replace('\\\\', '\\')
    t.value = s
    return t

def t_STRING(t):
    r'"([^"\\\n]|\\.)*"'
    s = t.value[1:-1]
    s = s.replace('\\n', '\n').replace('\\t', '\t').replace('\\\\', '\\').replace('\\"', '"')
    t.value = s
    return t

def t_INT(t):
    r'0[xX][0-9a-fA-F]+|\d+'
    # 保留原文：数组长度由语义分析解析
    return t

def t_IDENT(t):
    r'[A-Za-z_]\w*'
    t.type = reserved.get(t.value, 'IDENT')
    return t

t_ignore = ' \t\r'

def t_newline(t):
    r'\n+'
    t.lexer.lineno += t.value.count('\n')

def t_error(t):
    column = find_column(t.lexer.lexdata, t.lexpos)
    raise SplcSyntaxError(f"illegal character {t.value[0]!r}", t.lineno, column)

lexer = lex.lex()


def tokenize(data: str):
    """把源码切成 token 列表（调试 / 测试用）"""
    lexer.lineno = 1
    lexer.input(data)
    return list(lexer)
