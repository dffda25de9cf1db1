from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(eq=False)
class TypeDesc:
    """
    类型描述符：
    - kind: 'int', 'char', 'array', 'pointer', 'struct', 'func'
    - name: 对于 'struct' 是 tag
    - elem: 对于 'array' 是元素类型，对于 'pointer' 是指向的类型
    - size: 对于 'array' 是声明的长度
    - fields: 对于 'struct' 是有序的 成员名 -> 类型
    - complete: 对于 'struct' 表示是否已有完整定义（只会从 False 变成 True）
    - ret / params: 对于 'func' 是返回类型和参数类型列表（不含参数名）

    同一个 tag 的 struct 在整个程序里只有一个 TypeDesc 对象，补全定义时原地修改。
    """
    kind: str
    name: Optional[str] = None
    elem: Optional['TypeDesc'] = None
    size: int = 0
    fields: Dict[str, 'TypeDesc'] = field(default_factory=dict)
    complete: bool = False
    ret: Optional['TypeDesc'] = None
    params: List['TypeDesc'] = field(default_factory=list)

    def __repr__(self):
        return self.short_form()

    def short_form(self) -> str:
        if self.kind in ('int', 'char'):
            return self.kind
        if self.kind == 'array':
            return f"{self.elem.short_form()}[{self.size}]"
        if self.kind == 'pointer':
            return f"{self.elem.short_form()}*"
        if self.kind == 'struct':
            return f"struct {self.name}"
        if self.kind == 'func':
            params = ','.join(p.short_form() for p in self.params)
            return f"{self.ret.short_form()}({params})"
        return self.kind

    def full_form(self) -> str:
        """struct 打印完整成员列表；不完整或没有成员时退回 short_form"""
        if self.kind != 'struct' or not self.complete or not self.fields:
            return self.short_form()
        members = ''.join(f"{ftype.short_form()} {fname};" for fname, ftype in self.fields.items())
        return f"struct {self.name}{{{members}}}"

    def is_complete(self) -> bool:
        """指针总是完整的；数组要求元素类型完整"""
        if self.kind == 'struct':
            return self.complete
        if self.kind == 'array':
            return self.elem.is_complete()
        return True

    def equals(self, other: 'TypeDesc') -> bool:
        if other is None:
            return False
        if self.kind != other.kind:
            return False
        if self.kind in ('int', 'char'):
            return True
        if self.kind == 'array':
            return self.size == other.size and self.elem.equals(other.elem)
        if self.kind == 'pointer':
            return self.elem.equals(other.elem)
        if self.kind == 'struct':
            return self.name == other.name
        if self.kind == 'func':
            if len(self.params) != len(other.params):
                return False
            if not self.ret.equals(other.ret):
                return False
            return all(a.equals(b) for a, b in zip(self.params, other.params))
        return False


def array_of(elem: TypeDesc, size: int) -> TypeDesc:
    return TypeDesc('array', elem=elem, size=size)


def pointer_to(base: TypeDesc) -> TypeDesc:
    return TypeDesc('pointer', elem=base)


def struct_type(tag: str) -> TypeDesc:
    return TypeDesc('struct', name=tag)


def func_type(ret: TypeDesc, params: List[TypeDesc]) -> TypeDesc:
    return TypeDesc('func', ret=ret, params=list(params))


# 基础类型常量
INT = TypeDesc('int')
CHAR = TypeDesc('char')
