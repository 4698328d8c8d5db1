from ply import yacc

from ast_nodes import *
from lexer import lexer, tokens

start = 'program'

precedence = (
    ('left', 'OR'),
    ('left', 'AND'),
    ('right', 'NOT'),
    ('nonassoc', 'GT', 'GE', 'EQ'),
    ('left', 'PLUS', 'MINUS'),
    ('left', 'TIMES', 'DIVIDE'),
    ('right', 'UMINUS'),
)


# ==================== 程序结构 ====================

def p_program(p):
    "program : class_list"
    p[0] = Program(p[1])

def p_class_list_multi(p):
    "class_list : class_list class_decl"
    p[0] = p[1] + [p[2]]

def p_class_list_single(p):
    "class_list : class_decl"
    p[0] = [p[1]]

def p_class_decl(p):
    "class_decl : CLASS IDENT extends_opt '{' class_items '}'"
    members = [item for item in p[5] if isinstance(item, Declaration)]
    methods = [item for item in p[5] if isinstance(item, MethodDecl)]
    p[0] = ClassDecl(p[2], p[3], members, methods)

def p_extends_opt_with_super(p):
    "extends_opt : EXTENDS IDENT"
    p[0] = p[2]

def p_extends_opt_empty(p):
    "extends_opt : "
    p[0] = None

# 成员和方法可以交错出现，在 class_decl 中再拆分
def p_class_items_member(p):
    """class_items : class_items declaration
                   | class_items method_decl"""
    p[0] = p[1] + [p[2]]

def p_class_items_empty(p):
    "class_items : "
    p[0] = []

def p_declaration(p):
    "declaration : type id_list ';'"
    p[0] = Declaration(p[1], p[2])

def p_id_list_multi(p):
    "id_list : id_list ',' IDENT"
    p[0] = p[1] + [p[3]]

def p_id_list_single(p):
    "id_list : IDENT"
    p[0] = [p[1]]

# ==================== 方法 ====================

def p_method_decl(p):
    "method_decl : IDENT '(' param_list_opt ')' ARROW type '{' body '}'"
    p[0] = MethodDecl(p[1], p[3], p[6], p[8])

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
    "param : IDENT ':' type"
    p[0] = Parameter(p[1], p[3])

def p_body(p):
    "body : declaration_list body_stmts return_opt"
    p[0] = MethodBody(p[1], p[2], p[3])

def p_declaration_list_multi(p):
    "declaration_list : declaration_list declaration"
    p[0] = p[1] + [p[2]]

def p_declaration_list_empty(p):
    "declaration_list : "
    p[0] = []

# 右递归：声明之后遇到 IDENT 时不必先归约空语句列表
def p_body_stmts_multi(p):
    "body_stmts : stmt body_stmts"
    p[0] = [p[1]] + p[2]

def p_body_stmts_empty(p):
    "body_stmts : "
    p[0] = []

def p_return_opt_with_value(p):
    "return_opt : RETURN expr ';'"
    p[0] = ReturnStatement(p[2])

def p_return_opt_no_value(p):
    "return_opt : RETURN ';'"
    p[0] = ReturnStatement(None)

def p_return_opt_empty(p):
    "return_opt : "
    p[0] = None

# ==================== 类型 ====================

def p_type_integer(p):
    "type : INTEGER"
    p[0] = IntegerType()

def p_type_boolean(p):
    "type : BOOLEAN"
    p[0] = BooleanType()

def p_type_none(p):
    "type : NONE"
    p[0] = NoneType()

def p_type_object(p):
    "type : IDENT"
    p[0] = ObjectType(p[1])

# ==================== 语句 ====================

def p_block(p):
    "block : '{' stmt_list '}'"
    p[0] = p[2]

def p_stmt_list_multi(p):
    "stmt_list : stmt_list stmt"
    p[0] = p[1] + [p[2]]

def p_stmt_list_empty(p):
    "stmt_list : "
    p[0] = []

def p_stmt_assign(p):
    "stmt : IDENT '=' expr ';'"
    p[0] = Assignment(p[1], p[3])

def p_stmt_assign_member(p):
    "stmt : IDENT DOT IDENT '=' expr ';'"
    p[0] = Assignment(p[1], p[5], member=p[3])

def p_stmt_call(p):
    "stmt : method_call ';'"
    p[0] = Call(p[1])

def p_stmt_if(p):
    "stmt : IF expr block else_opt"
    p[0] = IfElse(p[2], p[3], p[4])

def p_else_opt_with_block(p):
    "else_opt : ELSE block"
    p[0] = p[2]

def p_else_opt_empty(p):
    "else_opt : "
    p[0] = []

def p_stmt_while(p):
    "stmt : WHILE expr block"
    p[0] = While(p[2], p[3])

def p_stmt_do_while(p):
    "stmt : DO block WHILE expr ';'"
    p[0] = DoWhile(p[2], p[4])

def p_stmt_print(p):
    "stmt : PRINT expr ';'"
    p[0] = Print(p[2])

# ==================== 表达式规则 ====================

_BINARY_NODES = {
    '+': Plus, '-': Minus, '*': Times, '/': Divide,
    '>': Greater, '>=': GreaterEqual, '==': Equal,
    'and': And, 'or': Or,
}

def p_expr_binop(p):
    """expr : expr PLUS expr
            | expr MINUS expr
            | expr TIMES expr
            | expr DIVIDE expr
            | expr GT expr
            | expr GE expr
            | expr EQ expr
            | expr AND expr
            | expr OR expr"""
    p[0] = _BINARY_NODES[p[2]](p[1], p[3])

def p_expr_not(p):
    "expr : NOT expr"
    p[0] = Not(p[2])

def p_expr_uminus(p):
    "expr : MINUS expr %prec UMINUS"
    p[0] = Negation(p[2])

def p_expr_paren(p):
    "expr : '(' expr ')'"
    p[0] = p[2]

def p_expr_variable(p):
    "expr : IDENT"
    p[0] = Variable(p[1])

def p_expr_member(p):
    "expr : IDENT DOT IDENT"
    p[0] = MemberAccess(p[1], p[3])

def p_expr_call(p):
    "expr : method_call"
    p[0] = p[1]

def p_expr_int(p):
    "expr : INT"
    p[0] = IntegerLiteral(p[1])

def p_expr_true(p):
    "expr : TRUE"
    p[0] = BooleanLiteral(True)

def p_expr_false(p):
    "expr : FALSE"
    p[0] = BooleanLiteral(False)

def p_expr_new(p):
    "expr : NEW IDENT '(' arg_list_opt ')'"
    p[0] = New(p[2], p[4])

def p_expr_new_no_args(p):
    "expr : NEW IDENT"
    p[0] = New(p[2], [])

def p_method_call(p):
    "method_call : IDENT '(' arg_list_opt ')'"
    p[0] = MethodCall(None, p[1], p[3])

def p_method_call_qualified(p):
    "method_call : IDENT DOT IDENT '(' arg_list_opt ')'"
    p[0] = MethodCall(p[1], p[3], p[5])

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
        raise SyntaxError(f"第 {p.lineno} 行语法错误: 意外的 '{p.value}' ({p.type})")
    raise SyntaxError("语法错误: 意外的文件结尾")


_parser = None

def parse(data, debug=False):
    global _parser
    if _parser is None:
        _parser = yacc.yacc(debug=debug, write_tables=False)
    lexer.lineno = 1
    return _parser.parse(data, lexer=lexer)
