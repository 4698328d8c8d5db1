from dataclasses import dataclass
from typing import Optional


# 每个标量槽位的字节数（整数、布尔、对象引用都占一个槽）
SLOT_SIZE = 4


@dataclass(frozen=True)
class TypeDesc:
    """
    类型描述符：
    - kind: 'integer', 'boolean', 'none', 'object'
    - name: 仅对 'object' 有意义，是对象所属的类名
    """
    kind: str
    name: Optional[str] = None

    def __repr__(self):
        if self.kind == 'integer':
            return "Integer"
        if self.kind == 'boolean':
            return "Boolean"
        if self.kind == 'none':
            return "None"
        if self.kind == 'object':
            return f"Object({self.name})"
        return f"{self.kind}"

    def is_object(self) -> bool:
        return self.kind == 'object'

    def equals(self, other: 'TypeDesc') -> bool:
        """严格的名义类型相等：kind 相同，对象类型还要求类名相同"""
        if other is None:
            return False
        if self.kind != other.kind:
            return False
        if self.kind == 'object':
            return self.name == other.name
        return True


def object_type(class_name: str) -> TypeDesc:
    return TypeDesc('object', class_name)


# 基础类型常量
INTEGER = TypeDesc('integer')
BOOLEAN = TypeDesc('boolean')
NONE = TypeDesc('none')
