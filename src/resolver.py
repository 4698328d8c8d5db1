from typing import Iterator, Optional

from errors import ErrorCode, SemanticError
from scope import ScopeContext
from symbols import ClassInfo, MethodInfo, VariableInfo


class NameResolver:
    """名字解析 - 沿单继承链查找成员和方法"""

    def __init__(self, scope: ScopeContext):
        self.scope = scope

    def resolve_class(self, name: str) -> ClassInfo:
        info = self.scope.classes.get(name)
        if info is None:
            raise SemanticError(ErrorCode.UNDEFINED_CLASS, name)
        return info

    def ancestors(self, class_name: str) -> Iterator[ClassInfo]:
        """
        从 class_name 本身开始，由近到远产出继承链上的每个类。
        父类名在类表中找不到时视为空扩展，链在此结束。
        """
        info = self.resolve_class(class_name)
        seen = {class_name}
        while True:
            yield info
            parent = info.superclass
            if not parent or parent not in self.scope.classes:
                return
            if parent in seen:
                raise SemanticError(ErrorCode.CIRCULAR_INHERITANCE, f"{class_name} -> {parent}")
            seen.add(parent)
            info = self.scope.classes[parent]

    def resolve_member(self, class_name: str, field_name: str) -> Optional[VariableInfo]:
        """找不到返回 None，由调用方决定报什么错"""
        for info in self.ancestors(class_name):
            if field_name in info.members:
                return info.members[field_name]
        return None

    def resolve_method(self, class_name: str, method_name: str) -> Optional[MethodInfo]:
        for info in self.ancestors(class_name):
            if method_name in info.methods:
                return info.methods[method_name]
        return None

    def resolve_identifier(self, name: str) -> VariableInfo:
        """查找顺序：参数/局部变量 -> 本类成员 -> 祖先类成员"""
        variables = self.scope.current_variables
        if name in variables:
            return variables[name]

        class_name = self.scope.current_class_name
        if class_name is not None:
            info = self.resolve_member(class_name, name)
            if info is not None:
                return info
        raise SemanticError(ErrorCode.UNDEFINED_VARIABLE, name)
