"""
赋值 (Assignments)
==================

赋值是从变量名到类别索引（从0开始）的映射，例如 {'A': 0, 'B': 1}。
出现在赋值中的键即为"已实例化"的变量。

这里的所有辅助函数都把赋值当作值类型：返回新的字典，从不修改输入。
这样在Gibbs采样中原地更新当前样本时，不会与其他引用产生别名问题。
"""

from typing import Dict, Hashable, Iterable

Assignment = Dict[Hashable, int]


def consistent(a: Assignment, b: Assignment) -> bool:
    """
    判断两个赋值是否一致

    两个赋值在所有共同变量上取值相同时称为一致。

    Args:
        a: 第一个赋值
        b: 第二个赋值

    Returns:
        是否一致
    """
    if len(a) > len(b):
        a, b = b, a
    return all(b[k] == v for k, v in a.items() if k in b)


def merge(*assignments: Assignment) -> Assignment:
    """
    合并多个赋值，后面的赋值覆盖前面的

    Args:
        assignments: 要合并的赋值

    Returns:
        新的赋值
    """
    merged = {}
    for assignment in assignments:
        merged.update(assignment)
    return merged


def without(assignment: Assignment, name: Hashable) -> Assignment:
    """返回去掉变量name后的赋值副本"""
    return {k: v for k, v in assignment.items() if k != name}


def restrict_to(assignment: Assignment, names: Iterable[Hashable]) -> Assignment:
    """只保留names中的变量"""
    names = set(names)
    return {k: v for k, v in assignment.items() if k in names}
