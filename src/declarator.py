"""
Declarator 解析：specifier + declarator -> (完整类型, 声明的名字)

组合规则（结构递归）：
    x               基础类型本身
    (D)             透明
    *D[N]           Array(Pointer(resolve(D)), N)    指针数组
    (*x)[N]         Pointer(Array(base, N))          指向数组的指针
    D[N]            Array(resolve(D), N)
    *D              Pointer(resolve(D))

长度 <= 0 或无法解析时报 IncompleteTypeDefinition，并退回元素类型继续分析。
"""
import logging
from typing import Any, List, Optional, Tuple

from ast_nodes import *
from errors import ErrorReporter, SemanticErrorKind
from my_types import *
from struct_registry import StructRegistry

logger = logging.getLogger(__name__)


INT_MAX = 2 ** 31 - 1


def parse_array_size(text) -> int:
    """数组长度字面量 -> int，无法解析或超出 32 位 int 时返回 -1"""
    if isinstance(text, int):
        size = text
    else:
        try:
            size = int(str(text).strip())
        except ValueError:
            return -1
    if size > INT_MAX:
        return -1
    return size


class DeclaratorResolver:

    def __init__(self, structs: StructRegistry, reporter: ErrorReporter):
        self.structs = structs
        self.reporter = reporter

    # ---------- specifier ----------

    def base_type(self, spec) -> TypeDesc:
        """获取最底层的基本类型（int / char / struct）"""
        if isinstance(spec, IntSpec):
            return INT
        if isinstance(spec, CharSpec):
            return CHAR
        if isinstance(spec, StructSpec):
            if spec.is_full:
                return self._define_struct(spec)
            return self.structs.lookup_or_declare(spec.tag.name).type
        raise TypeError(f"unknown specifier: {spec!r}")

    def _define_struct(self, spec: StructSpec) -> TypeDesc:
        """struct T { ... }：第一次完整定义时填充成员，重复定义报 Redefinition"""
        info = self.structs.lookup_or_declare(spec.tag.name)
        if info.is_defined:
            self.reporter.report(SemanticErrorKind.REDEFINITION, spec.tag)
            return info.type

        self.structs.complete(info)
        fields = info.type.fields
        for member_spec, member_decl in spec.members:
            ftype, fident = self.resolve(member_spec, member_decl)
            if fident is None:
                continue

            # 成员重名
            if fident.name in fields:
                self.reporter.report(SemanticErrorKind.REDEFINITION, fident)
                continue

            # 成员是不完整 struct（指针除外）；仍然放进成员列表
            if not ftype.is_complete():
                self.reporter.report(SemanticErrorKind.INCOMPLETE_TYPE_DEFINITION, fident)

            fields[fident.name] = ftype
        return info.type

    # ---------- declarator ----------

    def resolve(self, spec, declarator) -> Tuple[TypeDesc, Optional[Ident]]:
        """specifier + declarator 组合出完整类型，同时取出变量名"""
        base = self.base_type(spec)
        return self.resolve_declarator(base, declarator)

    def resolve_declarator(self, base: TypeDesc, decl) -> Tuple[TypeDesc, Optional[Ident]]:
        if isinstance(decl, SimpleDecl):
            return base, decl.ident

        if isinstance(decl, ParenDecl):
            return self.resolve_declarator(base, decl.inner)

        if isinstance(decl, PointerDecl):
            if isinstance(decl.inner, ArrayDecl):
                # *v[N]：[] 比 * 结合得紧，是“指针数组”
                elem, ident = self.resolve_declarator(base, decl.inner.inner)
                return self._make_array(pointer_to(elem), decl.inner.size, ident)
            inner, ident = self.resolve_declarator(base, decl.inner)
            return pointer_to(inner), ident

        if isinstance(decl, ArrayDecl):
            target = decl.inner
            if (isinstance(target, ParenDecl) and isinstance(target.inner, PointerDecl)
                    and isinstance(target.inner.inner, SimpleDecl)):
                # (*v)[N]：指向数组的指针
                ident = target.inner.inner.ident
                arr, ident = self._make_array(base, decl.size, ident)
                return pointer_to(arr), ident
            elem, ident = self.resolve_declarator(base, target)
            return self._make_array(elem, decl.size, ident)

        raise TypeError(f"unknown declarator: {decl!r}")

    def _make_array(self, elem: TypeDesc, size_text, ident: Optional[Ident]) -> Tuple[TypeDesc, Optional[Ident]]:
        size = parse_array_size(size_text)
        if size <= 0:
            if ident is not None:
                self.reporter.report(SemanticErrorKind.INCOMPLETE_TYPE_DEFINITION, ident)
            return elem, ident
        return array_of(elem, size), ident

    # ---------- 函数签名 ----------

    def resolve_signature(self, spec, params: List[Tuple[Any, Any]]) -> Tuple[TypeDesc, List[Tuple[TypeDesc, Optional[Ident]]]]:
        """
        函数签名：先返回类型，再按顺序解析参数。
        返回 (函数类型, [(参数类型, 参数名), ...])，参数名不属于函数类型。
        每个参数只解析一次，调用方复用结果做重名检查 / 绑定局部变量。
        """
        ret = self.base_type(spec)
        resolved = self.resolve_params(params)
        return self.function_type(ret, resolved), resolved

    def resolve_params(self, params: List[Tuple[Any, Any]]) -> List[Tuple[TypeDesc, Optional[Ident]]]:
        return [self.resolve(pspec, pdecl) for pspec, pdecl in params]

    def function_type(self, ret: TypeDesc, resolved: List[Tuple[TypeDesc, Optional[Ident]]]) -> TypeDesc:
        return func_type(ret, [ptype for ptype, _ in resolved])
