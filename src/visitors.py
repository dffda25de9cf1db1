import io
from typing import Any

# 从 ast_nodes 导入所有节点类型
from ast_nodes import *


def declarator_text(decl) -> str:
    """把 declarator 还原成源码写法"""
    if isinstance(decl, SimpleDecl):
        return decl.ident.name
    if isinstance(decl, ArrayDecl):
        return f"{declarator_text(decl.inner)}[{decl.size}]"
    if isinstance(decl, PointerDecl):
        return f"*{declarator_text(decl.inner)}"
    if isinstance(decl, ParenDecl):
        return f"({declarator_text(decl.inner)})"
    return repr(decl)


def specifier_text(spec) -> str:
    if isinstance(spec, IntSpec):
        return "int"
    if isinstance(spec, CharSpec):
        return "char"
    if isinstance(spec, StructSpec):
        if spec.members is None:
            return f"struct {spec.tag.name}"
        members = ' '.join(f"{specifier_text(s)} {declarator_text(d)};" for s, d in spec.members)
        return f"struct {spec.tag.name} {{ {members} }}" if members else f"struct {spec.tag.name} {{}}"
    return repr(spec)


class ASTPrinter:
    """
    带注释的AST打印机
    支持：
    - 语义分析后的类型信息 (_type)
    - 标识符的源码位置
    - 彩色输出（可选）
    """

    def __init__(self, show_types=True, show_locations=False, use_colors=False, indent_size=2):
        self.show_types = show_types
        self.show_locations = show_locations
        self.use_colors = use_colors
        self.indent_size = indent_size
        self.output = io.StringIO()

        # 颜色代码
        if use_colors:
            self.colors = {
                'type': '\033[36m',  # 青色 - 类型信息
                'node': '\033[33m',  # 黄色 - 节点名
                'field': '\033[37m',  # 白色 - 字段名
                'value': '\033[32m',  # 绿色 - 值
                'comment': '\033[90m',  # 灰色 - 注释
                'reset': '\033[0m'
            }
        else:
            self.colors = {k: '' for k in ['type', 'node', 'field', 'value', 'comment', 'reset']}

    def print(self, node: Any) -> str:
        """打印AST并返回字符串"""
        self.output = io.StringIO()
        self._visit(node, 0)
        return self.output.getvalue()

    def _write(self, text: str):
        self.output.write(text)

    def _indent(self, level: int):
        self._write(" " * (level * self.indent_size))

    def _color(self, text: str, color: str) -> str:
        return f"{self.colors[color]}{text}{self.colors['reset']}"

    def _get_type_annotation(self, node: Any) -> str:
        """获取节点的类型注释"""
        if not self.show_types:
            return ""
        type_info = getattr(node, '_type', None)
        if type_info is not None:
            return self._color(f" /* : {type_info} */", 'type')
        return ""

    def _visit(self, node: Any, depth: int):
        """访问节点"""
        if node is None:
            self._write("null")
            return

        if isinstance(node, (str, int, bool)):
            self._write(self._color(repr(node), 'value'))
            return

        if isinstance(node, list):
            if not node:
                self._write("[]")
                return
            self._write("[")
            for i, item in enumerate(node):
                if i > 0:
                    self._write(", ")
                self._visit(item, depth + 1)
            self._write("]")
            return

        # 根据节点类型分发
        method_name = f'_visit_{node.__class__.__name__}'
        visitor = getattr(self, method_name, self._visit_generic)
        visitor(node, depth)

    def _visit_generic(self, node: Any, depth: int):
        """通用节点访问"""
        self._write(self._color(node.__class__.__name__, 'node'))
        self._write(" {")
        type_ann = self._get_type_annotation(node)
        if type_ann:
            self._write(type_ann)
        self._write("\n")

        for field_name, value in node.__dict__.items():
            if field_name.startswith('_'):
                continue
            self._indent(depth + 1)
            self._write(self._color(field_name, 'field'))
            self._write(": ")
            self._visit(value, depth + 1)
            self._write("\n")

        self._indent(depth)
        self._write("}")

    # 特定节点的优化打印

    def _visit_Program(self, node: Program, depth: int):
        self._write(self._color("Program", 'node'))
        self._write(" {\n")
        for item in node.items:
            self._indent(depth + 1)
            self._visit(item, depth + 1)
            self._write("\n")
        self._indent(depth)
        self._write("}")

    def _visit_FuncDef(self, node: FuncDef, depth: int):
        self._write_signature(node)
        self._write(" {\n")
        for stmt in node.body:
            self._indent(depth + 1)
            self._visit(stmt, depth + 1)
            self._write("\n")
        self._indent(depth)
        self._write("}")

    def _visit_FuncDecl(self, node: FuncDecl, depth: int):
        self._write_signature(node)
        self._write(";")

    def _write_signature(self, node):
        self._write(self._color(specifier_text(node.spec), 'node'))
        self._write(" ")
        self._write(self._color(node.name.name, 'value'))
        params = ", ".join(f"{specifier_text(s)} {declarator_text(d)}" for s, d in node.params)
        self._write(f"({params})")
        self._write(self._location(node.name))
        type_ann = self._get_type_annotation(node)
        if type_ann:
            self._write(type_ann)

    def _visit_GlobalVarDef(self, node: GlobalVarDef, depth: int):
        self._write_declaration(node.spec, node.declarator, node)
        self._write(";")

    def _visit_GlobalStructDecl(self, node: GlobalStructDecl, depth: int):
        self._write(self._color(specifier_text(node.spec), 'node'))
        self._write(";")

    def _visit_VarDecStmt(self, node: VarDecStmt, depth: int):
        self._write_declaration(node.spec, node.declarator, node)
        if node.init is not None:
            self._write(" = ")
            self._visit(node.init, depth)
        self._write(";")

    def _write_declaration(self, spec, decl, node):
        self._write(self._color(specifier_text(spec), 'node'))
        self._write(" ")
        self._write(self._color(declarator_text(decl), 'value'))
        type_ann = self._get_type_annotation(node)
        if type_ann:
            self._write(type_ann)

    def _visit_BlockStmt(self, node: BlockStmt, depth: int):
        self._write("{\n")
        for stmt in node.stmts:
            self._indent(depth + 1)
            self._visit(stmt, depth + 1)
            self._write("\n")
        self._indent(depth)
        self._write("}")

    def _visit_ExprStmt(self, node: ExprStmt, depth: int):
        self._visit(node.expr, depth)
        self._write(";")

    def _visit_BinOp(self, node: BinOp, depth: int):
        self._write("(")
        self._visit(node.left, depth)
        self._write(f" {self._color(node.op, 'node')} ")
        self._visit(node.right, depth)
        self._write(")")

    def _visit_AssignExpr(self, node: AssignExpr, depth: int):
        self._visit(node.target, depth)
        self._write(" = ")
        self._visit(node.value, depth)

    def _visit_CallExpr(self, node: CallExpr, depth: int):
        self._visit(node.callee, depth)
        self._write("(")
        for i, arg in enumerate(node.args):
            if i > 0:
                self._write(", ")
            self._visit(arg, depth)
        self._write(")")

    def _visit_Ident(self, node: Ident, depth: int):
        self._write(self._color(node.name, 'value'))
        self._write(self._location(node))
        type_ann = self._get_type_annotation(node)
        if type_ann:
            self._write(type_ann)

    def _visit_IntLiteral(self, node: IntLiteral, depth: int):
        self._write(self._color(str(node.value), 'value'))

    def _visit_FieldAccess(self, node: FieldAccess, depth: int):
        self._visit(node.base, depth)
        self._write(f"{'->' if node.arrow else '.'}{node.field}")

    def _visit_IndexExpr(self, node: IndexExpr, depth: int):
        self._visit(node.base, depth)
        self._write("[")
        self._visit(node.index, depth)
        self._write("]")

    def _location(self, ident: Ident) -> str:
        if not self.show_locations:
            return ""
        return self._color(f"@{ident.line}:{ident.column}", 'comment')


def print_ast(node: Any, show_types: bool = True, show_locations: bool = False, use_colors: bool = False) -> str:
    """
    便捷的AST打印函数

    用法:
        from visitors import print_ast
        print(print_ast(program))
    """
    printer = ASTPrinter(show_types=show_types, show_locations=show_locations, use_colors=use_colors)
    return printer.print(node)
