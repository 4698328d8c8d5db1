#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
LCC 语义检查器
用法: ./lcc <源文件路径> [--dump] [--verbose]

示例:
    ./lcc hello.lang
    ./lcc shapes.lang --dump
    python3 lcc.py examples/main.lang --dump
"""

import sys
import os
from pathlib import Path

from compiler import Compiler
from errors import SemanticError


def print_usage():
    print(__doc__)
    print("\n参数说明:")
    print("  source    - 源文件路径 (.lang)")
    print("  --dump    - 检查通过后打印符号表")
    print("  --verbose - 打印检查过程")


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)

    flags = [a for a in args if a.startswith("--")]
    positional = [a for a in args if not a.startswith("--")]

    # 参数检查
    unknown = [f for f in flags if f not in ("--dump", "--verbose")]
    if len(positional) != 1 or unknown:
        print_usage()
        sys.exit(2)

    source_path = Path(positional[0])
    if not source_path.is_file():
        print(f"✗ 错误: 源文件不存在: {source_path}", file=sys.stderr)
        sys.exit(1)

    config = {
        "dump_table": "--dump" in flags,
        "verbose": "--verbose" in flags,
    }

    try:
        compiler = Compiler(config)
        compiler.check_file(source_path)
    except SemanticError as e:
        print(e.pretty(), file=sys.stderr)
        _maybe_traceback()
        sys.exit(1)
    except SyntaxError as e:
        print(f"[syntax_error] {e}", file=sys.stderr)
        _maybe_traceback()
        sys.exit(1)
    except UnicodeDecodeError as e:
        print(f"[encoding_error] 源文件不是有效的 UTF-8: {e}", file=sys.stderr)
        _maybe_traceback()
        sys.exit(1)

    if compiler.dump_table:
        print(compiler.dump(), end="")
    else:
        print(f"[LCC] ✓ {source_path.name}: 检查通过")


def _maybe_traceback():
    # 调试模式显示堆栈
    if os.environ.get("LCC_DEBUG"):
        import traceback
        traceback.print_exc()


if __name__ == "__main__":
    main()
