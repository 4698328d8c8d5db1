from dataclasses import dataclass
from typing import List, Optional

from errors import ErrorCode, SemanticError
from my_types import SLOT_SIZE, TypeDesc
from symbols import ClassInfo, ClassTable, MethodTable, VariableInfo, VariableTable


@dataclass
class ScopeInfo:
    """作用域信息：'class' 作用域的表是成员表，'method' 作用域的表是参数+局部变量表"""
    scope_type: str  # 'class', 'method'
    name: str
    variables: VariableTable


class ScopeContext:
    """
    作用域上下文 - 一次分析运行独占一个实例
    只允许 类 -> 方法 两层嵌套
    """

    def __init__(self):
        self.classes: ClassTable = {}
        self.scopes: List[ScopeInfo] = []
        self.current_class_name: Optional[str] = None
        self.current_methods: Optional[MethodTable] = None

    def push_class(self, name: str, info: ClassInfo):
        """进入类：成员表/方法表绑定到新建的 ClassInfo"""
        if self.scopes:
            raise RuntimeError(f"类 {name} 不能嵌套声明")
        self.scopes.append(ScopeInfo('class', name, info.members))
        self.current_class_name = name
        self.current_methods = info.methods

    def pop_class(self):
        info = self.scopes.pop()
        if info.scope_type != 'class':
            raise RuntimeError("作用域栈不平衡")
        self.current_class_name = None
        self.current_methods = None

    def push_method(self, name: str, variables: VariableTable):
        if not self.scopes or self.scopes[-1].scope_type != 'class':
            raise RuntimeError(f"方法 {name} 必须声明在类中")
        self.scopes.append(ScopeInfo('method', name, variables))

    def pop_method(self):
        info = self.scopes.pop()
        if info.scope_type != 'method':
            raise RuntimeError("作用域栈不平衡")

    @property
    def current_variables(self) -> VariableTable:
        """当前方法的参数+局部变量表；不在方法中时为空表"""
        if self.scopes and self.scopes[-1].scope_type == 'method':
            return self.scopes[-1].variables
        return {}

    def declare(self, name: str, t: TypeDesc) -> VariableInfo:
        """在当前作用域的表中按顺序分配偏移量"""
        table = self.scopes[-1].variables
        if name in table:
            raise SemanticError(ErrorCode.DUPLICATE_DECLARATION, f"变量 '{name}'")
        info = VariableInfo(t, len(table) * SLOT_SIZE, SLOT_SIZE)
        table[name] = info
        return info
