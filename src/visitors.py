import io

from symbols import ClassTable, MethodTable, VariableTable


class SymbolTablePrinter:
    """
    符号表打印机
    输出顺序与插入顺序一致，同一张表多次打印结果完全相同，可用于黄金文件比对
    """

    def __init__(self, indent_size=2):
        self.indent_size = indent_size
        self.output = io.StringIO()

    def print(self, classes: ClassTable) -> str:
        """打印类表并返回字符串"""
        self.output = io.StringIO()
        self._visit_ClassTable(classes, 0)
        return self.output.getvalue()

    def _write(self, text: str):
        self.output.write(text)

    def _indent(self, level: int):
        self._write(" " * (level * self.indent_size))

    def _visit_VariableTable(self, variables: VariableTable, depth: int):
        self._indent(depth)
        self._write("VariableTable {")
        if not variables:
            self._write("}")
            return
        self._write("\n")
        for i, (name, info) in enumerate(variables.items()):
            self._indent(depth + 1)
            self._write(f"{name} -> {{{info.type_}, {info.offset}, {info.size}}}")
            if i < len(variables) - 1:
                self._write(",")
            self._write("\n")
        self._indent(depth)
        self._write("}")

    def _visit_MethodTable(self, methods: MethodTable, depth: int):
        self._indent(depth)
        self._write("MethodTable {")
        if not methods:
            self._write("}")
            return
        self._write("\n")
        for i, (name, info) in enumerate(methods.items()):
            self._indent(depth + 1)
            self._write(f"{name} -> {{\n")
            self._indent(depth + 2)
            self._write(f"{info.return_type},\n")
            self._indent(depth + 2)
            params = ", ".join(str(t) for t in info.parameters)
            self._write(f"({params}),\n")
            self._indent(depth + 2)
            self._write(f"{info.locals_size},\n")
            self._visit_VariableTable(info.variables, depth + 2)
            self._write("\n")
            self._indent(depth + 1)
            self._write("}")
            if i < len(methods) - 1:
                self._write(",")
            self._write("\n")
        self._indent(depth)
        self._write("}")

    def _visit_ClassTable(self, classes: ClassTable, depth: int):
        self._indent(depth)
        self._write("ClassTable {\n")
        for i, (name, info) in enumerate(classes.items()):
            self._indent(depth + 1)
            self._write(f"{name} -> {{\n")
            if info.superclass:
                self._indent(depth + 2)
                self._write(f"{info.superclass},\n")
            self._visit_VariableTable(info.members, depth + 2)
            self._write(",\n")
            self._visit_MethodTable(info.methods, depth + 2)
            self._write("\n")
            self._indent(depth + 1)
            self._write("}")
            if i < len(classes) - 1:
                self._write(",")
            self._write("\n")
        self._indent(depth)
        self._write("}\n")


def print_table(classes: ClassTable, indent_size: int = 2) -> str:
    """
    便捷的符号表打印函数

    用法:
        from visitors import print_table
        print(print_table(classes), end="")
    """
    printer = SymbolTablePrinter(indent_size=indent_size)
    return printer.print(classes)
