#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from analyzer import AnalysisResult, SemanticAnalyzer
from ast_nodes import Program
from parser import parse
from visitors import print_ast

logger = logging.getLogger(__name__)


def render_summary(result: AnalysisResult) -> str:
    """所有全局变量和函数，先变量后函数，各自按第一次出现的顺序"""
    lines = ["Variables:"]
    for sym in result.variables():
        lines.append(f"{sym.name}: {sym.render_type()}")
    lines.append("")
    lines.append("Functions:")
    for sym in result.functions():
        lines.append(f"{sym.name}: {sym.render_type()}")
    return "\n".join(lines) + "\n"


class SplcCompiler:
    """源码 -> 语法树 -> 语义分析 -> 输出文本"""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}

        # 基础配置
        self.dump_ast = bool(self.config.get("dump_ast", False))
        self.color = bool(self.config.get("color", False))
        self.show_summary_on_error = bool(self.config.get("show_summary_on_error", False))

        self.program: Optional[Program] = None
        self.result: Optional[AnalysisResult] = None

    def compile_source(self, source_file: Union[str, Path]) -> AnalysisResult:
        source_path = Path(source_file)
        logger.info("compiling %s", source_path)
        return self.compile_text(source_path.read_text(encoding="utf-8"))

    def compile_text(self, text: str) -> AnalysisResult:
        """解析失败时抛出 SplcSyntaxError；语义错误收集在结果里"""
        self.program = parse(text)
        self.result = SemanticAnalyzer().analyze(self.program)
        return self.result

    @property
    def ok(self) -> bool:
        return self.result is not None and self.result.ok

    def error_lines(self) -> List[str]:
        if self.result is None:
            return []
        return [err.message for err in self.result.errors]

    def render(self) -> str:
        """AST（可选）+ 汇总；有语义错误时默认不输出汇总"""
        if self.result is None:
            raise RuntimeError("nothing compiled yet")
        parts = []
        if self.dump_ast:
            parts.append(print_ast(self.program, show_types=True, show_locations=True, use_colors=self.color) + "\n")
        if self.result.ok or self.show_summary_on_error:
            parts.append(render_summary(self.result))
        return "\n".join(parts)
