from dataclasses import dataclass, field
from typing import List, Optional, Any, Tuple


@dataclass
class Program:
    items: List[Any]
    def __repr__(self): return f"Program({self.items})"

# ========== 标识符（带源码位置） ==========
@dataclass
class Ident:
    name: str
    line: int = 0
    column: int = 0
    def __repr__(self): return f"Ident({self.name})"

    @property
    def site(self) -> Tuple[int, int]:
        return (self.line, self.column)

# ========== Specifier ==========
@dataclass
class IntSpec:
    def __repr__(self): return "Spec(int)"

@dataclass
class CharSpec:
    def __repr__(self): return "Spec(char)"

@dataclass
class StructSpec:
    """struct Tag（members 为 None）或 struct Tag { specifier declarator; ... }"""
    tag: Ident
    members: Optional[List[Tuple[Any, Any]]] = None  # [(specifier, declarator), ...]

    @property
    def is_full(self) -> bool:
        return self.members is not None

    def __repr__(self):
        if self.members is None:
            return f"Spec(struct {self.tag.name})"
        return f"Spec(struct {self.tag.name} {{{self.members}}})"

# ========== Declarator ==========
@dataclass
class SimpleDecl:
    ident: Ident
    def __repr__(self): return f"Var({self.ident.name})"

@dataclass
class ArrayDecl:
    inner: Any
    size: str  # 保留字面量原文，由 resolver 负责解析
    def __repr__(self): return f"ArrayOf({self.inner}[{self.size}])"

@dataclass
class PointerDecl:
    inner: Any
    def __repr__(self): return f"PointerOf(*{self.inner})"

@dataclass
class ParenDecl:
    inner: Any
    def __repr__(self): return f"Paren({self.inner})"

# ========== 顶层定义 ==========
@dataclass
class FuncDef:
    spec: Any
    name: Ident
    params: List[Tuple[Any, Any]]  # [(specifier, declarator), ...]
    body: List[Any]
    def __repr__(self): return f"FuncDef({self.name.name}, params={self.params}, body={self.body})"

@dataclass
class FuncDecl:
    spec: Any
    name: Ident
    params: List[Tuple[Any, Any]]
    def __repr__(self): return f"FuncDecl({self.name.name}, params={self.params})"

@dataclass
class GlobalVarDef:
    spec: Any
    declarator: Any
    def __repr__(self): return f"GlobalVar({self.spec} {self.declarator})"

@dataclass
class GlobalStructDecl:
    spec: StructSpec
    def __repr__(self): return f"GlobalStruct({self.spec})"

# ========== 语句 ==========
@dataclass
class BlockStmt:
    stmts: List[Any] = field(default_factory=list)
    def __repr__(self): return f"Block({self.stmts})"

@dataclass
class VarDecStmt:
    spec: Any
    declarator: Any
    init: Optional[Any] = None
    def __repr__(self): return f"VarDec({self.spec} {self.declarator} = {self.init})"

@dataclass
class ExprStmt:
    expr: Any
    def __repr__(self): return f"ExprStmt({self.expr})"

@dataclass
class ReturnStmt:
    expr: Optional[Any]
    def __repr__(self): return f"Return({self.expr})"

@dataclass
class IfStmt:
    cond: Any
    then_stmt: Any
    else_stmt: Optional[Any] = None
    def __repr__(self): return f"If({self.cond}, then={self.then_stmt}, else={self.else_stmt})"

@dataclass
class WhileStmt:
    cond: Any
    body: Any
    def __repr__(self): return f"While({self.cond}, {self.body})"

# ========== 表达式 ==========
@dataclass
class IntLiteral:
    value: int
    def __repr__(self): return f"Int({self.value})"

@dataclass
class CharLiteral:
    value: str
    def __repr__(self): return f"Char({self.value!r})"

@dataclass
class StringLiteral:
    value: str
    def __repr__(self): return f"Str({self.value!r})"

@dataclass
class CallExpr:
    callee: Ident
    args: List[Any]
    def __repr__(self): return f"Call({self.callee}({', '.join(map(str, self.args))}))"

@dataclass
class IndexExpr:
    base: Any
    index: Any
    def __repr__(self): return f"Index({self.base}[{self.index}])"

@dataclass
class FieldAccess:
    base: Any       # 被访问的对象
    field: str      # 成员名，不是对名字的引用
    arrow: bool = False
    def __repr__(self):
        op = '->' if self.arrow else '.'
        return f"FieldAccess({self.base}{op}{self.field})"

@dataclass
class UnaryOp:
    op: str           # '-', '!', '*', '&'
    operand: Any
    def __repr__(self): return f"UnaryOp({self.op}{self.operand})"

@dataclass
class BinOp:
    op: str
    left: Any
    right: Any
    def __repr__(self): return f"BinOp({self.left} {self.op} {self.right})"

@dataclass
class AssignExpr:
    target: Any
    value: Any
    def __repr__(self): return f"Assign({self.target} = {self.value})"
