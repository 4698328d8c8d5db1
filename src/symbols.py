from dataclasses import dataclass, field
from typing import Dict, List, Optional

from my_types import TypeDesc


@dataclass
class VariableInfo:
    type_: TypeDesc
    offset: int
    size: int


@dataclass
class MethodInfo:
    """方法信息：参数与局部变量共用同一张变量表"""
    return_type: TypeDesc
    parameters: List[TypeDesc] = field(default_factory=list)
    locals_size: int = 0
    variables: Dict[str, VariableInfo] = field(default_factory=dict)


@dataclass
class ClassInfo:
    """类信息：只记录本类直接声明的成员和方法，父类名不在此处解析"""
    superclass: Optional[str]
    members: Dict[str, VariableInfo] = field(default_factory=dict)
    methods: Dict[str, MethodInfo] = field(default_factory=dict)
    members_size: int = 0


VariableTable = Dict[str, VariableInfo]
MethodTable = Dict[str, MethodInfo]
ClassTable = Dict[str, ClassInfo]
