#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Splc 语义分析器命令行
用法: splc <源文件路径> [--ast] [--color] [--summary-on-error] [-v|-vv]

示例:
    splc test_1.splc
    splc test_2.splc --ast -v
"""

import logging
import os
import sys
from pathlib import Path

from compiler import SplcCompiler
from errors import SplcSyntaxError

EXIT_OK = 0
EXIT_ERROR = 1


def print_usage():
    print(__doc__)
    print("参数说明:")
    print("  source              - Splc 源文件路径")
    print("  --ast               - 同时输出带类型注释的语法树")
    print("  --color             - 语法树彩色输出")
    print("  --summary-on-error  - 有语义错误时也输出全局符号")
    print("  -v / -vv            - 日志级别 INFO / DEBUG（输出到 stderr）")


def configure_logging(verbosity: int):
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("[%(levelname)-5.5s] %(name)s: %(message)s"))
    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def main(argv=None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)

    flags = [a for a in args if a.startswith("-")]
    positional = [a for a in args if not a.startswith("-")]

    if len(positional) != 1 or "-h" in flags or "--help" in flags:
        print_usage()
        return EXIT_ERROR

    verbosity = 0
    for flag in flags:
        if flag == "-v":
            verbosity += 1
        elif flag == "-vv":
            verbosity += 2
    if verbosity:
        configure_logging(verbosity)

    source_path = Path(positional[0])
    if not source_path.is_file():
        print(f"错误: 源文件不存在: {source_path}", file=sys.stderr)
        return EXIT_ERROR

    config = {
        "dump_ast": "--ast" in flags,
        "color": "--color" in flags,
        "show_summary_on_error": "--summary-on-error" in flags,
    }

    try:
        compiler = SplcCompiler(config)
        compiler.compile_source(source_path)
    except SplcSyntaxError as e:
        print(f"Syntax error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except Exception as e:
        print(f"✗ 分析失败: {e}", file=sys.stderr)
        # 调试模式显示堆栈
        if os.environ.get("SPLC_DEBUG"):
            import traceback
            traceback.print_exc()
        return EXIT_ERROR

    for line in compiler.error_lines():
        print(line, file=sys.stderr)

    output = compiler.render()
    if output:
        sys.stdout.write(output)

    return EXIT_OK if compiler.ok else EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
