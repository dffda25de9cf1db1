"""
名字进入作用域时的检查：Redeclaration / Redefinition / UndeclaredUse / IncompleteTypeDefinition
"""
import logging
from collections import OrderedDict
from typing import Dict, List, Optional, Tuple

from ast_nodes import Ident
from errors import ErrorReporter, SemanticErrorKind
from my_types import TypeDesc
from scope import Scope, ScopeManager, Symbol, SymbolKind

logger = logging.getLogger(__name__)


def classify_function(existing: Optional[Symbol], has_body: bool) -> Optional[SemanticErrorKind]:
    """
    文件作用域里函数声明/定义的冲突分类，None 表示合法：
        已有变量 + 声明 -> Redeclaration     已有变量 + 定义 -> Redefinition
        已有函数 + 声明 -> Redeclaration（不管之前是否已定义）
        已有定义 + 定义 -> Redefinition      只有声明 + 定义 -> 合法
    """
    if existing is None:
        return None
    if existing.kind == SymbolKind.VARIABLE:
        return SemanticErrorKind.REDEFINITION if has_body else SemanticErrorKind.REDECLARATION
    if not has_body:
        return SemanticErrorKind.REDECLARATION
    if existing.is_defined:
        return SemanticErrorKind.REDEFINITION
    return None


class Registrar:
    """
    符号登记：所有插入都经过这里的错误检查。
    global_symbols 按第一次出现的顺序记录文件作用域里的变量和函数。
    """

    def __init__(self, scope: ScopeManager, reporter: ErrorReporter):
        self.scope = scope
        self.reporter = reporter
        self.global_symbols: Dict[str, Symbol] = OrderedDict()
        # 全局的不完整 struct 变量，等整个程序看完再检查
        self.pending_globals: List[Symbol] = []

    def define_variable(self, ident: Ident, t: TypeDesc) -> Optional[Symbol]:
        """
        定义变量（全局变量 / 局部变量 / 参数），由当前作用域决定是否全局。
        报错时不插入，返回 None。
        """
        is_global = self.scope.is_global()

        # 元素为不完整 struct 的数组：立即报错
        if t.kind == 'array' and not t.elem.is_complete():
            self.reporter.report(SemanticErrorKind.INCOMPLETE_TYPE_DEFINITION, ident)
            return None

        deferred = False
        if t.kind == 'struct' and not t.complete:
            if not is_global:
                self.reporter.report(SemanticErrorKind.INCOMPLETE_TYPE_DEFINITION, ident)
                return None
            # 全局允许 struct 之后再补全
            deferred = True

        existing = self.scope.lookup_local(ident.name)
        if existing is not None:
            if is_global and existing.kind == SymbolKind.FUNCTION:
                self.reporter.report(SemanticErrorKind.REDECLARATION, ident)
            else:
                # 同一作用域重名（参数之间、参数和局部变量之间也算）
                self.reporter.report(SemanticErrorKind.REDEFINITION, ident)
            return None

        sym = Symbol(ident.name, SymbolKind.VARIABLE, t, True, ident)
        self.scope.bind(sym)
        if is_global:
            self.global_symbols.setdefault(ident.name, sym)
            if deferred:
                self.pending_globals.append(sym)
        return sym

    def declare_function(self, ident: Ident, ftype: TypeDesc, has_body: bool) -> Optional[Symbol]:
        """函数声明（has_body=False）或定义（has_body=True），总在文件作用域"""
        file_scope: Scope = self.scope.file_scope
        existing = file_scope.lookup_local(ident.name)

        kind = classify_function(existing, has_body)
        if kind is not None:
            self.reporter.report(kind, ident)
            return None

        if existing is None:
            sym = Symbol(ident.name, SymbolKind.FUNCTION, ftype, has_body, ident)
            file_scope.symbols[ident.name] = sym
            self.global_symbols.setdefault(ident.name, sym)
            logger.debug("bind function %s: %s", ident.name, ftype)
            return sym

        # 先声明后定义：用定义的签名覆盖
        if not existing.type.equals(ftype):
            logger.info("definition of %s changes its signature: %s -> %s", ident.name, existing.type, ftype)
        existing.type = ftype
        existing.is_defined = True
        logger.debug("define declared function %s: %s", ident.name, ftype)
        return existing

    def check_param_list(self, params: List[Tuple[TypeDesc, Optional[Ident]]]) -> bool:
        """
        只有声明的函数：检查参数之间是否重名，不建立任何作用域。
        报告第一处重名后停止，返回是否通过。
        """
        seen = Scope()
        for ptype, pident in params:
            if pident is None:
                continue
            if seen.lookup_local(pident.name) is not None:
                self.reporter.report(SemanticErrorKind.REDEFINITION, pident)
                return False
            seen.symbols[pident.name] = Symbol(pident.name, SymbolKind.VARIABLE, ptype, True, pident)
        return True

    def check_use(self, ident: Ident) -> Optional[Symbol]:
        """标识符引用必须能在作用域链里找到"""
        sym = self.scope.lookup(ident.name)
        if sym is None:
            self.reporter.report(SemanticErrorKind.UNDECLARED_USE, ident)
        return sym

    def check_pending_globals(self):
        """整个程序处理完之后，仍然不完整的全局 struct 变量报错"""
        for sym in self.pending_globals:
            if not sym.type.is_complete():
                self.reporter.report(SemanticErrorKind.INCOMPLETE_TYPE_DEFINITION, sym.ident)
        self.pending_globals = []
