from functools import cmp_to_key

from .types import *


def _key_of(selector: Optional[SortSelector], item: Any) -> Any:
    return item if selector is None else selector(item)


def compose_comparer(sort_keys: List[SortKey]) -> Callable[[Any, Any], int]:
    """
    builds a three-way comparer over every key in the list.
    the first key that differs decides, its direction flips the sign.
    """
    keys = tuple(sort_keys)

    def compare_items(item1: Any, item2: Any) -> int:
        for ascending, selector in keys:
            k1, k2 = _key_of(selector, item1), _key_of(selector, item2)
            if k1 == k2:
                continue
            if k1 < k2:
                return -1 if ascending else 1
            return 1 if ascending else -1
        return 0

    return compare_items


def sort_buffer(buffer: List[T], sort_keys: SortKeyList) -> List[T]:
    """
    sorts `buffer` in place. python's sort is stable, so items that tie on
    every key keep their encounter order.
    """
    if sort_keys.is_single:
        # single key: no comparer loop, reverse=True is still stable
        ascending, selector = sort_keys[0]
        buffer.sort(key=selector, reverse=not ascending)
    else:
        buffer.sort(key=cmp_to_key(compose_comparer(sort_keys)))
    return buffer
