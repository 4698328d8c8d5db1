from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    # 查找失败
    UNDEFINED_VARIABLE = 'undefined_variable'
    UNDEFINED_METHOD = 'undefined_method'
    UNDEFINED_CLASS = 'undefined_class'
    UNDEFINED_MEMBER = 'undefined_member'
    NOT_OBJECT = 'not_object'
    # 类型不匹配
    EXPRESSION_TYPE_MISMATCH = 'expression_type_mismatch'
    ARGUMENT_NUMBER_MISMATCH = 'argument_number_mismatch'
    ARGUMENT_TYPE_MISMATCH = 'argument_type_mismatch'
    WHILE_PREDICATE_TYPE_MISMATCH = 'while_predicate_type_mismatch'
    DO_WHILE_PREDICATE_TYPE_MISMATCH = 'do_while_predicate_type_mismatch'
    IF_PREDICATE_TYPE_MISMATCH = 'if_predicate_type_mismatch'
    ASSIGNMENT_TYPE_MISMATCH = 'assignment_type_mismatch'
    RETURN_TYPE_MISMATCH = 'return_type_mismatch'
    # 程序结构
    CONSTRUCTOR_RETURNS_TYPE = 'constructor_returns_type'
    NO_MAIN_CLASS = 'no_main_class'
    MAIN_CLASS_MEMBERS_PRESENT = 'main_class_members_present'
    NO_MAIN_METHOD = 'no_main_method'
    MAIN_METHOD_INCORRECT_SIGNATURE = 'main_method_incorrect_signature'
    DUPLICATE_DECLARATION = 'duplicate_declaration'
    CIRCULAR_INHERITANCE = 'circular_inheritance'


MESSAGES = {
    ErrorCode.UNDEFINED_VARIABLE: "未定义的变量",
    ErrorCode.UNDEFINED_METHOD: "方法不存在",
    ErrorCode.UNDEFINED_CLASS: "类不存在",
    ErrorCode.UNDEFINED_MEMBER: "类成员不存在",
    ErrorCode.NOT_OBJECT: "变量不是对象",
    ErrorCode.EXPRESSION_TYPE_MISMATCH: "表达式类型不匹配",
    ErrorCode.ARGUMENT_NUMBER_MISMATCH: "方法调用的参数个数不正确",
    ErrorCode.ARGUMENT_TYPE_MISMATCH: "方法调用的参数类型不正确",
    ErrorCode.WHILE_PREDICATE_TYPE_MISMATCH: "while 循环条件不是 boolean",
    ErrorCode.DO_WHILE_PREDICATE_TYPE_MISMATCH: "do-while 循环条件不是 boolean",
    ErrorCode.IF_PREDICATE_TYPE_MISMATCH: "if 语句条件不是 boolean",
    ErrorCode.ASSIGNMENT_TYPE_MISMATCH: "赋值两侧类型不匹配",
    ErrorCode.RETURN_TYPE_MISMATCH: "return 语句类型与声明的返回类型不一致",
    ErrorCode.CONSTRUCTOR_RETURNS_TYPE: "构造函数不能有返回类型",
    ErrorCode.NO_MAIN_CLASS: "找不到入口类",
    ErrorCode.MAIN_CLASS_MEMBERS_PRESENT: "入口类不能有成员变量",
    ErrorCode.NO_MAIN_METHOD: "入口类缺少入口方法",
    ErrorCode.MAIN_METHOD_INCORRECT_SIGNATURE: "入口方法签名错误",
    ErrorCode.DUPLICATE_DECLARATION: "重复声明",
    ErrorCode.CIRCULAR_INHERITANCE: "继承关系存在环",
}


class SemanticError(Exception):
    """语义错误，携带错误码；遇到第一个错误即终止分析"""

    def __init__(self, code: ErrorCode, detail: Optional[str] = None):
        self.code = code
        self.detail = detail
        message = MESSAGES[code]
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)

    def pretty(self) -> str:
        return f"[{self.code.value}] {self}"
