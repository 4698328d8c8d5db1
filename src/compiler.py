import os
from pathlib import Path
from typing import Dict, Any, Optional, Union

from analyzer import SemanticAnalyzer
from parser import parse
from symbols import ClassTable
from visitors import print_table


class Compiler:
    """前端驱动：语法分析 + 语义分析，产出供代码生成使用的类表"""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}

        # 基础配置
        self.entry_class = self.config.get("entry_class", "Main")
        self.entry_method = self.config.get("entry_method", "main")
        self.dump_table = self.config.get("dump_table", False)
        self.verbose = self.config.get("verbose", False)

        self.analyzer = SemanticAnalyzer({
            "entry_class": self.entry_class,
            "entry_method": self.entry_method,
        })
        self.classes: Optional[ClassTable] = None

    def check_source(self, code: str) -> ClassTable:
        """检查源代码文本，返回类表；出错时抛出 SyntaxError 或 SemanticError"""
        if self.verbose:
            print(f"[LCC] 入口: {self.entry_class}.{self.entry_method}")

        # 语法分析
        program = parse(code)

        # 语义分析
        self.classes = self.analyzer.analyze(program)

        if self.verbose:
            print(f"[LCC] 语义检查通过，共 {len(self.classes)} 个类")
        return self.classes

    def check_file(self, source: Union[str, Path]) -> ClassTable:
        if not os.path.isfile(source):
            raise FileNotFoundError(f"源文件不存在: {source}")
        with open(source, 'r', encoding='utf-8') as f:
            code = f.read()
        return self.check_source(code)

    def dump(self) -> str:
        if self.classes is None:
            raise RuntimeError("尚未完成语义分析")
        return print_table(self.classes)
