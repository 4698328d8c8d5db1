from dataclasses import dataclass, field
from typing import List, Optional, Any

# ========== 类型标注节点 ==========

@dataclass
class IntegerType:
    def __repr__(self): return "IntegerType"

@dataclass
class BooleanType:
    def __repr__(self): return "BooleanType"

@dataclass
class NoneType:
    def __repr__(self): return "NoneType"

@dataclass
class ObjectType:
    class_name: str
    def __repr__(self): return f"ObjectType({self.class_name})"

# ========== 程序结构 ==========

@dataclass
class Program:
    classes: List[Any]
    def __repr__(self): return f"Program({self.classes})"

@dataclass
class Declaration:
    """type a, b, c;  既用于类成员，也用于方法局部变量"""
    type_: Any
    names: List[str]
    def __repr__(self): return f"Decl({self.type_} {', '.join(self.names)})"

@dataclass
class Parameter:
    name: str
    type_: Any
    def __repr__(self): return f"Param({self.name}: {self.type_})"

@dataclass
class ReturnStatement:
    expr: Any
    def __repr__(self): return f"Return({self.expr})"

@dataclass
class MethodBody:
    declarations: List[Declaration] = field(default_factory=list)
    statements: List[Any] = field(default_factory=list)
    return_stmt: Optional[ReturnStatement] = None
    def __repr__(self):
        return f"Body(decls={self.declarations}, stmts={self.statements}, ret={self.return_stmt})"

@dataclass
class MethodDecl:
    name: str
    params: List[Parameter]
    return_type: Any
    body: MethodBody
    def __repr__(self): return f"Method({self.name}, params={self.params}, ret={self.return_type}, body={self.body})"

@dataclass
class ClassDecl:
    name: str
    superclass: Optional[str]
    members: List[Declaration] = field(default_factory=list)
    methods: List[MethodDecl] = field(default_factory=list)
    def __repr__(self):
        ext = f" extends {self.superclass}" if self.superclass else ""
        return f"Class({self.name}{ext}, members={self.members}, methods={self.methods})"

# ========== 语句 ==========

@dataclass
class Assignment:
    """name = expr;  或  name.member = expr;"""
    name: str
    expr: Any
    member: Optional[str] = None
    def __repr__(self):
        target = f"{self.name}.{self.member}" if self.member else self.name
        return f"Assign({target} = {self.expr})"

@dataclass
class Call:
    call: Any  # MethodCall
    def __repr__(self): return f"CallStmt({self.call})"

@dataclass
class IfElse:
    cond: Any
    then_block: List[Any]
    else_block: List[Any] = field(default_factory=list)
    def __repr__(self): return f"If({self.cond}, then={self.then_block}, else={self.else_block})"

@dataclass
class While:
    cond: Any
    block: List[Any]
    def __repr__(self): return f"While({self.cond}, {self.block})"

@dataclass
class DoWhile:
    block: List[Any]
    cond: Any
    def __repr__(self): return f"DoWhile({self.block}, {self.cond})"

@dataclass
class Print:
    expr: Any
    def __repr__(self): return f"Print({self.expr})"

# ========== 表达式 ==========

@dataclass
class Plus:
    left: Any
    right: Any
    def __repr__(self): return f"({self.left} + {self.right})"

@dataclass
class Minus:
    left: Any
    right: Any
    def __repr__(self): return f"({self.left} - {self.right})"

@dataclass
class Times:
    left: Any
    right: Any
    def __repr__(self): return f"({self.left} * {self.right})"

@dataclass
class Divide:
    left: Any
    right: Any
    def __repr__(self): return f"({self.left} / {self.right})"

@dataclass
class Greater:
    left: Any
    right: Any
    def __repr__(self): return f"({self.left} > {self.right})"

@dataclass
class GreaterEqual:
    left: Any
    right: Any
    def __repr__(self): return f"({self.left} >= {self.right})"

@dataclass
class Equal:
    left: Any
    right: Any
    def __repr__(self): return f"({self.left} == {self.right})"

@dataclass
class And:
    left: Any
    right: Any
    def __repr__(self): return f"({self.left} and {self.right})"

@dataclass
class Or:
    left: Any
    right: Any
    def __repr__(self): return f"({self.left} or {self.right})"

@dataclass
class Not:
    operand: Any
    def __repr__(self): return f"(not {self.operand})"

@dataclass
class Negation:
    operand: Any
    def __repr__(self): return f"(-{self.operand})"

@dataclass
class MethodCall:
    """obj.method(args)；obj 为 None 时表示调用当前类的方法"""
    obj: Optional[str]
    method: str
    args: List[Any] = field(default_factory=list)
    def __repr__(self):
        callee = f"{self.obj}.{self.method}" if self.obj else self.method
        return f"Call({callee}({', '.join(map(str, self.args))}))"

@dataclass
class MemberAccess:
    obj: str
    member: str
    def __repr__(self): return f"MemberAccess({self.obj}.{self.member})"

@dataclass
class Variable:
    name: str
    def __repr__(self): return f"Var({self.name})"

@dataclass
class IntegerLiteral:
    value: int
    def __repr__(self): return f"Int({self.value})"

@dataclass
class BooleanLiteral:
    value: bool
    def __repr__(self): return f"Bool({self.value})"

@dataclass
class New:
    class_name: str
    args: List[Any] = field(default_factory=list)
    def __repr__(self): return f"New({self.class_name}({', '.join(map(str, self.args))}))"


# 封闭的节点集合，分析器必须为其中每一种提供处理函数
STATEMENT_NODES = (Assignment, Call, IfElse, While, DoWhile, Print)

EXPRESSION_NODES = (
    Plus, Minus, Times, Divide, Negation,
    Greater, GreaterEqual, Equal, And, Or, Not,
    MethodCall, MemberAccess, Variable,
    IntegerLiteral, BooleanLiteral, New,
)
