from ply import yacc

from ast_nodes import *
from errors import SplcSyntaxError
from lexer import find_column, lexer, tokens

start = 'program'

precedence = (
    ('nonassoc', 'IFX'),                   # 悬空 else 归给最近的 if
    ('nonassoc', 'ELSE'),
    ('right', 'ASSIGN'),
    ('left', 'OR'),
    ('left', 'AND'),
    ('nonassoc', 'EQ', 'NE'),
    ('nonassoc', 'LT', 'GT', 'LE', 'GE'),
    ('left', 'PLUS', 'MINUS'),
    ('left', 'TIMES', 'DIV', 'MOD'),
    ('right', 'UNARY'),                    # 一元运算符 / 声明里的 *
    ('left', '[', 'DOT', 'ARROW'),         # 下标比 * 结合得紧：*v[3] 是 *(v[3])
)


def _ident(p, n) -> Ident:
    """第 n 个符号是 IDENT，带上行列号"""
    column = find_column(p.lexer.lexdata, p.lexpos(n))
    return Ident(p[n], p.lineno(n), column)


def parse_int_literal(text: str) -> int:
    if text[:2] in ('0x', '0X'):
        return int(text, 16)
    return int(text)


# ==================== 程序结构 ====================

def p_program(p):
    "program : item_list"
    p[0] = Program(p[1])

def p_item_list_multi(p):
    "item_list : item_list item"
    p[0] = p[1] + [p[2]]

def p_item_list_empty(p):
    "item_list : "
    p[0] = []

def p_item_global_var(p):
    "item : specifier declarator ';'"
    p[0] = GlobalVarDef(p[1], p[2])

def p_item_global_struct(p):
    "item : specifier ';'"
    p[0] = GlobalStructDecl(p[1])

def p_item_func_decl(p):
    "item : specifier IDENT '(' param_list_opt ')' ';'"
    p[0] = FuncDecl(p[1], _ident(p, 2), p[4])

def p_item_func_def(p):
    "item : specifier IDENT '(' param_list_opt ')' '{' stmt_list '}'"
    p[0] = FuncDef(p[1], _ident(p, 2), p[4], p[7])

def p_param_list_opt_multi(p):
    "param_list_opt : param_list"
    p[0] = p[1]

def p_param_list_opt_empty(p):
    "param_list_opt : "
    p[0] = []

def p_param_list_multi(p):
    "param_list : param_list ',' param"
    p[0] = p[1] + [p[3]]

def p_param_list_single(p):
    "param_list : param"
    p[0] = [p[1]]

def p_param(p):
    "param : specifier declarator"
    p[0] = (p[1], p[2])

# ==================== Specifier ====================

def p_specifier_int(p):
    "specifier : INT_TYPE"
    p[0] = IntSpec()

def p_specifier_char(p):
    "specifier : CHAR_TYPE"
    p[0] = CharSpec()

def p_specifier_struct_ref(p):
    "specifier : STRUCT IDENT"
    p[0] = StructSpec(_ident(p, 2))

def p_specifier_struct_full(p):
    "specifier : STRUCT IDENT '{' member_list '}'"
    p[0] = StructSpec(_ident(p, 2), p[4])

def p_member_list_multi(p):
    "member_list : member_list specifier declarator ';'"
    p[0] = p[1] + [(p[2], p[3])]

def p_member_list_empty(p):
    "member_list : "
    p[0] = []

# ==================== Declarator ====================

def p_declarator_ident(p):
    "declarator : IDENT"
    p[0] = SimpleDecl(_ident(p, 1))

def p_declarator_array(p):
    "declarator : declarator '[' INT ']'"
    p[0] = ArrayDecl(p[1], p[3])

def p_declarator_pointer(p):
    "declarator : TIMES declarator %prec UNARY"
    p[0] = PointerDecl(p[2])

def p_declarator_paren(p):
    "declarator : '(' declarator ')'"
    p[0] = ParenDecl(p[2])

# ==================== 语句 ====================

def p_stmt_list_multi(p):
    "stmt_list : stmt_list stmt"
    p[0] = p[1] + [p[2]] if p[2] is not None else p[1]

def p_stmt_list_empty(p):
    "stmt_list : "
    p[0] = []

def p_stmt_block(p):
    "stmt : '{' stmt_list '}'"
    p[0] = BlockStmt(p[2])

def p_stmt_var_dec(p):
    "stmt : specifier declarator ';'"
    p[0] = VarDecStmt(p[1], p[2])

def p_stmt_var_dec_init(p):
    "stmt : specifier declarator ASSIGN expr ';'"
    p[0] = VarDecStmt(p[1], p[2], p[4])

def p_stmt_expr(p):
    "stmt : expr ';'"
    p[0] = ExprStmt(p[1])

def p_stmt_empty(p):
    "stmt : ';'"
    p[0] = None

def p_stmt_return_value(p):
    "stmt : RETURN expr ';'"
    p[0] = ReturnStmt(p[2])

def p_stmt_return_empty(p):
    "stmt : RETURN ';'"
    p[0] = ReturnStmt(None)

def p_stmt_if(p):
    "stmt : IF '(' expr ')' stmt_or_empty %prec IFX"
    p[0] = IfStmt(p[3], p[5])

def p_stmt_if_else(p):
    "stmt : IF '(' expr ')' stmt_or_empty ELSE stmt_or_empty"
    p[0] = IfStmt(p[3], p[5], p[7])

def p_stmt_while(p):
    "stmt : WHILE '(' expr ')' stmt_or_empty"
    p[0] = WhileStmt(p[3], p[5])

def p_stmt_or_empty(p):
    "stmt_or_empty : stmt"
    # if (x) ;  空语句当作空 block
    p[0] = p[1] if p[1] is not None else BlockStmt([])

# ==================== 表达式 ====================

def p_expr_assign(p):
    "expr : expr ASSIGN expr"
    p[0] = AssignExpr(p[1], p[3])

def p_expr_binop(p):
    """expr : expr PLUS expr
            | expr MINUS expr
            | expr TIMES expr
            | expr DIV expr
            | expr MOD expr
            | expr LT expr
            | expr GT expr
            | expr LE expr
            | expr GE expr
            | expr EQ expr
            | expr NE expr
            | expr AND expr
            | expr OR expr"""
    p[0] = BinOp(p[2], p[1], p[3])

def p_expr_unary(p):
    """expr : MINUS expr %prec UNARY
            | NOT expr %prec UNARY
            | TIMES expr %prec UNARY
            | AMP expr %prec UNARY"""
    p[0] = UnaryOp(p[1], p[2])

def p_expr_index(p):
    "expr : expr '[' expr ']'"
    p[0] = IndexExpr(p[1], p[3])

def p_expr_field(p):
    "expr : expr DOT IDENT"
    p[0] = FieldAccess(p[1], p[3])

def p_expr_arrow(p):
    "expr : expr ARROW IDENT"
    p[0] = FieldAccess(p[1], p[3], arrow=True)

def p_expr_call(p):
    "expr : IDENT '(' arg_list_opt ')'"
    p[0] = CallExpr(_ident(p, 1), p[3])

def p_expr_paren(p):
    "expr : '(' expr ')'"
    p[0] = p[2]

def p_expr_ident(p):
    "expr : IDENT"
    p[0] = _ident(p, 1)

def p_expr_int(p):
    "expr : INT"
    p[0] = IntLiteral(parse_int_literal(p[1]))

def p_expr_char(p):
    "expr : CHAR"
    p[0] = CharLiteral(p[1])

def p_expr_string(p):
    "expr : STRING"
    p[0] = StringLiteral(p[1])

def p_arg_list_opt_multi(p):
    "arg_list_opt : arg_list"
    p[0] = p[1]

def p_arg_list_opt_empty(p):
    "arg_list_opt : "
    p[0] = []

def p_arg_list_multi(p):
    "arg_list : arg_list ',' expr"
    p[0] = p[1] + [p[3]]

def p_arg_list_single(p):
    "arg_list : expr"
    p[0] = [p[1]]

def p_error(p):
    if p:
        column = find_column(lexer.lexdata, p.lexpos)
        raise SplcSyntaxError(f"unexpected {p.value!r} ({p.type})", p.lineno, column)
    raise SplcSyntaxError("unexpected end of input", lexer.lineno, 0)


_parser = None


def parse(data: str, debug: bool = False) -> Program:
    global _parser
    if _parser is None:
        _parser = yacc.yacc(debug=debug, write_tables=False)
    lexer.lineno = 1
    return _parser.parse(data, lexer=lexer)
