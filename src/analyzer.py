from typing import Dict, Any, List, Optional

from ast_nodes import *
from errors import ErrorCode, SemanticError
from my_types import *
from resolver import NameResolver
from scope import ScopeContext
from symbols import ClassInfo, ClassTable, MethodInfo


def type_from_node(tn) -> TypeDesc:
    """从 AST 类型标注节点转换为 TypeDesc"""
    if isinstance(tn, IntegerType):
        return INTEGER
    if isinstance(tn, BooleanType):
        return BOOLEAN
    if isinstance(tn, NoneType) or tn is None:
        return NONE
    if isinstance(tn, ObjectType):
        return object_type(tn.class_name)
    raise TypeError(f"未知的类型节点: {type(tn)}")


class ExpressionAnalyzer:
    """表达式类型求值 - 被 SemanticAnalyzer 组合使用"""

    def __init__(self, scope: ScopeContext, resolver: NameResolver):
        self.scope = scope
        self.resolver = resolver

    def analyze(self, expr) -> TypeDesc:
        """表达式分析主入口"""
        method_name = f'_analyze_{expr.__class__.__name__}'
        method = getattr(self, method_name, self._analyze_generic)
        return method(expr)

    def _analyze_generic(self, expr) -> TypeDesc:
        raise TypeError(f"未知的表达式类型: {type(expr)}")

    def _expect(self, expr, expected: TypeDesc):
        actual = self.analyze(expr)
        if not actual.equals(expected):
            raise SemanticError(
                ErrorCode.EXPRESSION_TYPE_MISMATCH, f"期望 {expected}，得到 {actual}"
            )

    def _arithmetic(self, expr) -> TypeDesc:
        self._expect(expr.left, INTEGER)
        self._expect(expr.right, INTEGER)
        return INTEGER

    _analyze_Plus = _arithmetic
    _analyze_Minus = _arithmetic
    _analyze_Times = _arithmetic
    _analyze_Divide = _arithmetic

    def _analyze_Negation(self, expr: Negation) -> TypeDesc:
        self._expect(expr.operand, INTEGER)
        return INTEGER

    def _comparison(self, expr) -> TypeDesc:
        self._expect(expr.left, INTEGER)
        self._expect(expr.right, INTEGER)
        return BOOLEAN

    _analyze_Greater = _comparison
    _analyze_GreaterEqual = _comparison

    def _analyze_Equal(self, expr: Equal) -> TypeDesc:
        left_type = self.analyze(expr.left)
        right_type = self.analyze(expr.right)
        if not left_type.equals(right_type):
            raise SemanticError(
                ErrorCode.EXPRESSION_TYPE_MISMATCH, f"不能比较 {left_type} 与 {right_type}"
            )
        return BOOLEAN

    def _logical(self, expr) -> TypeDesc:
        self._expect(expr.left, BOOLEAN)
        self._expect(expr.right, BOOLEAN)
        return BOOLEAN

    _analyze_And = _logical
    _analyze_Or = _logical

    def _analyze_Not(self, expr: Not) -> TypeDesc:
        self._expect(expr.operand, BOOLEAN)
        return BOOLEAN

    def _analyze_IntegerLiteral(self, expr: IntegerLiteral) -> TypeDesc:
        return INTEGER

    def _analyze_BooleanLiteral(self, expr: BooleanLiteral) -> TypeDesc:
        return BOOLEAN

    def _analyze_Variable(self, expr: Variable) -> TypeDesc:
        return self.resolver.resolve_identifier(expr.name).type_

    def object_class_of(self, name: str) -> str:
        """变量 name 的静态类型必须是对象，返回其类名"""
        t = self.resolver.resolve_identifier(name).type_
        if not t.is_object():
            raise SemanticError(ErrorCode.NOT_OBJECT, f"{name} 的类型是 {t}")
        return t.name

    def _analyze_MemberAccess(self, expr: MemberAccess) -> TypeDesc:
        class_name = self.object_class_of(expr.obj)
        info = self.resolver.resolve_member(class_name, expr.member)
        if info is None:
            raise SemanticError(ErrorCode.UNDEFINED_MEMBER, f"{class_name}.{expr.member}")
        return info.type_

    def _analyze_MethodCall(self, expr: MethodCall) -> TypeDesc:
        if expr.obj:
            class_name = self.object_class_of(expr.obj)
        else:
            class_name = self.scope.current_class_name

        method = self.resolver.resolve_method(class_name, expr.method)
        if method is None:
            raise SemanticError(ErrorCode.UNDEFINED_METHOD, f"{class_name}.{expr.method}")

        self._check_arguments(f"{class_name}.{expr.method}", method, expr.args)
        return method.return_type

    def _analyze_New(self, expr: New) -> TypeDesc:
        info = self.resolver.resolve_class(expr.class_name)

        # 构造函数只在本类中查找，不沿继承链
        constructor = info.methods.get(expr.class_name)
        if constructor is None:
            raise SemanticError(ErrorCode.UNDEFINED_METHOD, f"{expr.class_name} 没有构造函数")

        self._check_arguments(expr.class_name, constructor, expr.args)
        return object_type(expr.class_name)

    def _check_arguments(self, callee: str, method: MethodInfo, args: List[Any]):
        # 检查参数数量
        if len(args) != len(method.parameters):
            raise SemanticError(
                ErrorCode.ARGUMENT_NUMBER_MISMATCH,
                f"{callee} 期望 {len(method.parameters)} 个参数，得到 {len(args)}"
            )

        # 检查参数类型
        for i, (arg, ptype) in enumerate(zip(args, method.parameters)):
            arg_type = self.analyze(arg)
            if not ptype.equals(arg_type):
                raise SemanticError(
                    ErrorCode.ARGUMENT_TYPE_MISMATCH,
                    f"{callee} 第{i}个参数: 期望 {ptype}，得到 {arg_type}"
                )


def validate_program(classes: ClassTable, resolver: NameResolver,
                     entry_class: str = "Main", entry_method: str = "main"):
    """整体程序检查：按顺序执行，第一个失败的检查即报错"""
    # 1. 入口类存在
    main_class = classes.get(entry_class)
    if main_class is None:
        raise SemanticError(ErrorCode.NO_MAIN_CLASS, entry_class)

    # 2. 入口类没有成员
    if main_class.members:
        raise SemanticError(ErrorCode.MAIN_CLASS_MEMBERS_PRESENT, entry_class)

    # 3. 入口方法存在
    main_method = main_class.methods.get(entry_method)
    if main_method is None:
        raise SemanticError(ErrorCode.NO_MAIN_METHOD, f"{entry_class}.{entry_method}")

    # 4. 入口方法返回 none 且无参数
    if not main_method.return_type.equals(NONE) or main_method.parameters:
        raise SemanticError(ErrorCode.MAIN_METHOD_INCORRECT_SIGNATURE, f"{entry_class}.{entry_method}")

    # 5. 继承链无环
    for class_name in classes:
        for _ in resolver.ancestors(class_name):
            pass


class SemanticAnalyzer:
    """
    语义分析器主类
    一次遍历中同时建立符号表并检查方法体
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.entry_class = self.config.get("entry_class", "Main")
        self.entry_method = self.config.get("entry_method", "main")

    def analyze(self, program: Program) -> ClassTable:
        """
        主分析入口
        返回完整的类表；遇到第一个语义错误抛出 SemanticError
        """
        self.scope = ScopeContext()
        self.resolver = NameResolver(self.scope)
        self.expr_analyzer = ExpressionAnalyzer(self.scope, self.resolver)

        for cls in program.classes:
            self._analyze_ClassDecl(cls)

        validate_program(self.scope.classes, self.resolver, self.entry_class, self.entry_method)
        return self.scope.classes

    def _analyze_ClassDecl(self, node: ClassDecl):
        """类声明：先登记到类表，方法体里才能引用本类"""
        if node.name in self.scope.classes:
            raise SemanticError(ErrorCode.DUPLICATE_DECLARATION, f"类 '{node.name}'")

        info = ClassInfo(superclass=node.superclass)
        self.scope.classes[node.name] = info
        self.scope.push_class(node.name, info)

        for decl in node.members:
            self._analyze_Declaration(decl)
        info.members_size = len(info.members) * SLOT_SIZE

        for method in node.methods:
            self._analyze_MethodDecl(method)

        self.scope.pop_class()

    def _analyze_MethodDecl(self, node: MethodDecl):
        class_name = self.scope.current_class_name
        methods = self.scope.current_methods
        if node.name in methods:
            raise SemanticError(ErrorCode.DUPLICATE_DECLARATION, f"方法 '{class_name}.{node.name}'")

        info = MethodInfo(return_type=type_from_node(node.return_type))

        # 与类同名的方法是构造函数，必须返回 none
        if node.name == class_name and not info.return_type.equals(NONE):
            raise SemanticError(ErrorCode.CONSTRUCTOR_RETURNS_TYPE, f"{class_name}.{node.name}")

        self.scope.push_method(node.name, info.variables)

        # 声明参数
        for param in node.params:
            ptype = type_from_node(param.type_)
            self.scope.declare(param.name, ptype)
            info.parameters.append(ptype)

        for decl in node.body.declarations:
            self._analyze_Declaration(decl)
        info.locals_size = len(info.variables) * SLOT_SIZE

        # 在检查方法体之前登记，允许递归调用
        methods[node.name] = info

        for stmt in node.body.statements:
            self._analyze_stmt(stmt)

        ret_type = self._analyze_ReturnStatement(node.body.return_stmt)
        if not ret_type.equals(info.return_type):
            raise SemanticError(
                ErrorCode.RETURN_TYPE_MISMATCH,
                f"{class_name}.{node.name} 声明返回 {info.return_type}，实际返回 {ret_type}"
            )

        self.scope.pop_method()

    def _analyze_Declaration(self, node: Declaration):
        t = type_from_node(node.type_)
        for name in node.names:
            self.scope.declare(name, t)

    def _analyze_ReturnStatement(self, node: Optional[ReturnStatement]) -> TypeDesc:
        """只求值，是否匹配由方法检查决定"""
        if node is None or node.expr is None:
            return NONE
        return self.expr_analyzer.analyze(node.expr)

    def _analyze_stmt(self, stmt):
        """语句分析分发"""
        method_name = f'_analyze_{stmt.__class__.__name__}'
        method = getattr(self, method_name, None)
        if method is None:
            raise TypeError(f"未知的语句类型: {type(stmt)}")
        method(stmt)

    def _analyze_block(self, stmts: List[Any]):
        for s in stmts:
            self._analyze_stmt(s)

    def _analyze_Assignment(self, node: Assignment):
        if node.member:
            class_name = self.expr_analyzer.object_class_of(node.name)
            target = self.resolver.resolve_member(class_name, node.member)
            if target is None:
                raise SemanticError(ErrorCode.UNDEFINED_MEMBER, f"{class_name}.{node.member}")
        else:
            target = self.resolver.resolve_identifier(node.name)

        expr_type = self.expr_analyzer.analyze(node.expr)
        if not target.type_.equals(expr_type):
            raise SemanticError(
                ErrorCode.ASSIGNMENT_TYPE_MISMATCH, f"不能将 {expr_type} 赋值给 {target.type_}"
            )

    def _analyze_Call(self, node: Call):
        self.expr_analyzer.analyze(node.call)

    def _analyze_IfElse(self, node: IfElse):
        if not self.expr_analyzer.analyze(node.cond).equals(BOOLEAN):
            raise SemanticError(ErrorCode.IF_PREDICATE_TYPE_MISMATCH)
        self._analyze_block(node.then_block)
        self._analyze_block(node.else_block)

    def _analyze_While(self, node: While):
        if not self.expr_analyzer.analyze(node.cond).equals(BOOLEAN):
            raise SemanticError(ErrorCode.WHILE_PREDICATE_TYPE_MISMATCH)
        self._analyze_block(node.block)

    def _analyze_DoWhile(self, node: DoWhile):
        self._analyze_block(node.block)
        if not self.expr_analyzer.analyze(node.cond).equals(BOOLEAN):
            raise SemanticError(ErrorCode.DO_WHILE_PREDICATE_TYPE_MISMATCH)

    def _analyze_Print(self, node: Print):
        """任何类型都可以打印，只为传播错误"""
        self.expr_analyzer.analyze(node.expr)
