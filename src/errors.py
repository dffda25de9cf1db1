import logging
from enum import Enum
from typing import Callable, Iterator, List, Optional

from ast_nodes import Ident

logger = logging.getLogger(__name__)


class SemanticErrorKind(Enum):
    REDECLARATION = "Redeclaration of"
    REDEFINITION = "Redefinition of"
    UNDECLARED_USE = "Undeclared use of"
    INCOMPLETE_TYPE_DEFINITION = "Definition of incomplete type"


class SemanticError(Exception):
    """一条语义错误：错误种类 + 触发错误的标识符（位置）。只上报，不抛出。"""

    def __init__(self, kind: SemanticErrorKind, ident: Ident):
        self.kind = kind
        self.ident = ident
        super().__init__(self.message)

    @property
    def name(self) -> str:
        return self.ident.name

    @property
    def line(self) -> int:
        return self.ident.line

    @property
    def column(self) -> int:
        return self.ident.column

    @property
    def message(self) -> str:
        return f"Error at line {self.line}:{self.column}: {self.kind.value} '{self.name}'"

    def __repr__(self):
        return f"SemanticError({self.kind.name}, {self.name}@{self.line}:{self.column})"


class SplcSyntaxError(SyntaxError):
    """词法/语法错误，解析失败后不再做语义分析"""

    def __init__(self, msg: str, line: int = 0, column: int = 0):
        super().__init__(f"line {line}:{column}: {msg}")
        self.line = line
        self.column = column


class ScopeError(RuntimeError):
    """作用域栈使用不当（例如弹出文件作用域），属于调用方的编程错误"""
    pass


class ErrorReporter:
    """语义错误的唯一上报通道：按发现顺序收集，可选回调"""

    def __init__(self, listener: Optional[Callable[[SemanticError], None]] = None):
        self.listener = listener
        self.errors: List[SemanticError] = []

    def report(self, kind: SemanticErrorKind, ident: Ident) -> SemanticError:
        err = SemanticError(kind, ident)
        self.errors.append(err)
        logger.info("%s", err.message)
        if self.listener is not None:
            self.listener(err)
        return err

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def count(self, kind: Optional[SemanticErrorKind] = None) -> int:
        if kind is None:
            return len(self.errors)
        return sum(1 for e in self.errors if e.kind == kind)

    def kinds(self) -> List[SemanticErrorKind]:
        return [e.kind for e in self.errors]

    def __iter__(self) -> Iterator[SemanticError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)
