import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, List

from ast_nodes import Ident
from errors import ScopeError
from my_types import TypeDesc

logger = logging.getLogger(__name__)


class SymbolKind(Enum):
    VARIABLE = "variable"
    FUNCTION = "function"


@dataclass(eq=False)
class Symbol:
    """
    符号：名字对应的实体
    - 变量：is_defined 恒为 True
    - 函数：False 表示只有声明，True 表示已有函数体
    - ident：定义位置的标识符，报错用
    """
    name: str
    kind: SymbolKind
    type: TypeDesc
    is_defined: bool
    ident: Ident

    @property
    def is_function(self) -> bool:
        return self.kind == SymbolKind.FUNCTION

    def render_type(self) -> str:
        """直接以 struct 为类型的变量打印完整成员，其余打印简写"""
        if self.kind == SymbolKind.VARIABLE:
            return self.type.full_form()
        return self.type.short_form()


@dataclass(eq=False)
class Scope:
    """一层作用域，parent 指向外层"""
    parent: Optional['Scope'] = None
    symbols: Dict[str, Symbol] = field(default_factory=dict)

    def lookup_local(self, name: str) -> Optional[Symbol]:
        return self.symbols.get(name)

    def lookup(self, name: str) -> Optional[Symbol]:
        s = self
        while s is not None:
            if name in s.symbols:
                return s.symbols[name]
            s = s.parent
        return None


class ScopeManager:
    """作用域管理器 - 栈底是文件作用域"""

    def __init__(self):
        self.scopes: List[Scope] = [Scope()]

    @property
    def current(self) -> Scope:
        return self.scopes[-1]

    @property
    def file_scope(self) -> Scope:
        return self.scopes[0]

    @property
    def depth(self) -> int:
        return len(self.scopes)

    def push(self) -> Scope:
        """进入新作用域（函数体 / block）"""
        scope = Scope(parent=self.current)
        self.scopes.append(scope)
        logger.debug("enter scope (depth %d)", self.depth)
        return scope

    def pop(self) -> Scope:
        """退出作用域，里面的绑定随之失效"""
        if len(self.scopes) <= 1:
            raise ScopeError("cannot exit the file scope")
        scope = self.scopes.pop()
        logger.debug("exit scope (depth %d, %d bindings)", self.depth + 1, len(scope.symbols))
        return scope

    def bind(self, symbol: Symbol):
        """插入当前作用域，错误检查由 Registrar 负责"""
        self.current.symbols[symbol.name] = symbol
        logger.debug("bind %s %s: %s", symbol.kind.value, symbol.name, symbol.type)

    def lookup(self, name: str) -> Optional[Symbol]:
        return self.current.lookup(name)

    def lookup_local(self, name: str) -> Optional[Symbol]:
        return self.current.lookup_local(name)

    def is_global(self) -> bool:
        """检查当前是否在文件作用域"""
        return len(self.scopes) == 1
