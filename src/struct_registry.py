import logging
from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from my_types import TypeDesc, struct_type

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class StructInfo:
    """struct tag 信息：共享的 TypeDesc + 是否已经有过完整定义"""
    tag: str
    type: TypeDesc
    is_defined: bool = False


class StructRegistry:
    """
    struct tag 命名空间（文件级，独立于作用域链，不会被内层作用域遮蔽）。
    条目按 tag 存放，整个分析过程中一直存在；前向引用会先建一个不完整条目。
    """

    def __init__(self):
        self.entries: Dict[str, StructInfo] = {}

    def get(self, tag: str) -> Optional[StructInfo]:
        return self.entries.get(tag)

    def lookup_or_declare(self, tag: str) -> StructInfo:
        """struct T：查找，不存在则登记为不完整 struct"""
        info = self.entries.get(tag)
        if info is None:
            info = StructInfo(tag, struct_type(tag))
            self.entries[tag] = info
            logger.debug("declare struct %s (incomplete)", tag)
        return info

    def complete(self, info: StructInfo):
        """开始填充完整定义：清掉旧成员，标记为完整"""
        info.is_defined = True
        info.type.fields.clear()
        info.type.complete = True
        logger.debug("define struct %s", info.tag)

    def __contains__(self, tag: str) -> bool:
        return tag in self.entries

    def __iter__(self) -> Iterator[StructInfo]:
        return iter(self.entries.values())

    def __len__(self) -> int:
        return len(self.entries)
