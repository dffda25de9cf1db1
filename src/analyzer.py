import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ast_nodes import *
from declarator import DeclaratorResolver
from errors import ErrorReporter, SemanticError
from registrar import Registrar
from scope import ScopeManager, Symbol, SymbolKind
from struct_registry import StructRegistry

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """一次分析的结果：文件作用域符号（按出现顺序）+ 语义错误（按发现顺序）"""
    global_symbols: List[Symbol]
    errors: List[SemanticError]
    structs: StructRegistry = field(default_factory=StructRegistry)

    @property
    def ok(self) -> bool:
        return not self.errors

    def variables(self) -> List[Symbol]:
        return [s for s in self.global_symbols if s.kind == SymbolKind.VARIABLE]

    def functions(self) -> List[Symbol]:
        return [s for s in self.global_symbols if s.kind == SymbolKind.FUNCTION]

    def symbol(self, name: str) -> Optional[Symbol]:
        for s in self.global_symbols:
            if s.name == name:
                return s
        return None


class ExpressionAnalyzer:
    """表达式分析 - 只检查直接的名字引用是否已声明"""

    def __init__(self, registrar: Registrar):
        self.registrar = registrar

    def analyze(self, expr):
        """表达式分析主入口"""
        if expr is None:
            return
        method_name = f'_analyze_{expr.__class__.__name__}'
        method = getattr(self, method_name, self._analyze_generic)
        method(expr)

    def _analyze_generic(self, expr):
        raise TypeError(f"unknown expression node: {type(expr).__name__}")

    def _analyze_IntLiteral(self, expr: IntLiteral):
        pass

    def _analyze_CharLiteral(self, expr: CharLiteral):
        pass

    def _analyze_StringLiteral(self, expr: StringLiteral):
        pass

    def _analyze_Ident(self, expr: Ident):
        sym = self.registrar.check_use(expr)
        if sym is not None:
            expr._type = sym.type

    def _analyze_CallExpr(self, expr: CallExpr):
        # 函数名本身算一次引用，参数里的名字各算各的
        self.registrar.check_use(expr.callee)
        for arg in expr.args:
            self.analyze(arg)

    def _analyze_IndexExpr(self, expr: IndexExpr):
        self.analyze(expr.base)
        self.analyze(expr.index)

    def _analyze_FieldAccess(self, expr: FieldAccess):
        # 成员名不是名字引用
        self.analyze(expr.base)

    def _analyze_UnaryOp(self, expr: UnaryOp):
        self.analyze(expr.operand)

    def _analyze_BinOp(self, expr: BinOp):
        self.analyze(expr.left)
        self.analyze(expr.right)

    def _analyze_AssignExpr(self, expr: AssignExpr):
        self.analyze(expr.target)
        self.analyze(expr.value)


class SemanticAnalyzer:
    """
    语义分析器主类：一次前序遍历，按源码顺序处理顶层定义和函数体。
    每个程序用一个新的实例。
    """

    def __init__(self, reporter: Optional[ErrorReporter] = None,
                 listener: Optional[Callable[[SemanticError], None]] = None):
        if reporter is None:
            reporter = ErrorReporter(listener)
        self.reporter = reporter
        self.scope = ScopeManager()
        self.structs = StructRegistry()
        self.resolver = DeclaratorResolver(self.structs, self.reporter)
        self.registrar = Registrar(self.scope, self.reporter)
        self.expr_analyzer = ExpressionAnalyzer(self.registrar)

    def analyze(self, program: Program) -> AnalysisResult:
        """主分析入口"""
        logger.info("analyzing %d top-level items", len(program.items))
        for item in program.items:
            self._analyze_node(item)

        # 所有定义处理完之后，再检查依赖之后定义的 struct 的全局变量
        self.registrar.check_pending_globals()

        result = AnalysisResult(
            global_symbols=list(self.registrar.global_symbols.values()),
            errors=list(self.reporter.errors),
            structs=self.structs,
        )
        logger.info("analysis finished: %d global symbols, %d errors",
                    len(result.global_symbols), len(result.errors))
        return result

    def _analyze_node(self, node):
        """顶层定义 / 语句分发"""
        method_name = f'_analyze_{node.__class__.__name__}'
        method = getattr(self, method_name, None)
        if method is None:
            raise TypeError(f"unknown program node: {type(node).__name__}")
        method(node)

    # ---------- 顶层定义 ----------

    def _analyze_FuncDef(self, node: FuncDef):
        """函数定义：登记函数，参数作为函数体作用域里的局部变量"""
        ftype, params = self.resolver.resolve_signature(node.spec, node.params)
        node._type = ftype
        self.registrar.declare_function(node.name, ftype, has_body=True)

        self.scope.push()
        for ptype, pident in params:
            if pident is not None:
                self.registrar.define_variable(pident, ptype)

        for stmt in node.body:
            self._analyze_node(stmt)
        self.scope.pop()

    def _analyze_FuncDecl(self, node: FuncDecl):
        """函数声明：先解析参数并检查重名，再解析返回类型、登记"""
        params = self.resolver.resolve_params(node.params)
        self.registrar.check_param_list(params)
        ftype = self.resolver.function_type(self.resolver.base_type(node.spec), params)
        node._type = ftype
        self.registrar.declare_function(node.name, ftype, has_body=False)

    def _analyze_GlobalVarDef(self, node: GlobalVarDef):
        t, ident = self.resolver.resolve(node.spec, node.declarator)
        node._type = t
        if ident is not None:
            self.registrar.define_variable(ident, t)

    def _analyze_GlobalStructDecl(self, node: GlobalStructDecl):
        """struct T; 或 struct T {...};  只影响 struct 表"""
        self.resolver.base_type(node.spec)

    # ---------- 语句 ----------

    def _analyze_BlockStmt(self, node: BlockStmt):
        self.scope.push()
        for stmt in node.stmts:
            self._analyze_node(stmt)
        self.scope.pop()

    def _analyze_VarDecStmt(self, node: VarDecStmt):
        """局部变量：先定义，再检查初始化表达式"""
        t, ident = self.resolver.resolve(node.spec, node.declarator)
        node._type = t
        if ident is not None:
            self.registrar.define_variable(ident, t)
        self.expr_analyzer.analyze(node.init)

    def _analyze_ExprStmt(self, node: ExprStmt):
        self.expr_analyzer.analyze(node.expr)

    def _analyze_ReturnStmt(self, node: ReturnStmt):
        self.expr_analyzer.analyze(node.expr)

    def _analyze_IfStmt(self, node: IfStmt):
        self.expr_analyzer.analyze(node.cond)
        self._analyze_node(node.then_stmt)
        if node.else_stmt is not None:
            self._analyze_node(node.else_stmt)

    def _analyze_WhileStmt(self, node: WhileStmt):
        self.expr_analyzer.analyze(node.cond)
        self._analyze_node(node.body)


def analyze(program: Program, listener: Optional[Callable[[SemanticError], None]] = None) -> AnalysisResult:
    """便捷入口：新建分析器分析一个程序"""
    return SemanticAnalyzer(listener=listener).analyze(program)
