"""traits_flags 중첩 경로 쓰기"""

from typing import Any, Dict, Sequence


def set_flag_path(root: Dict[str, Any], path: Sequence[str], value: Any) -> None:
    """root 안의 path 위치에 value를 쓴다 (root 직접 수정).

    중간 노드가 없거나 객체(dict)가 아니면 빈 객체로 덮어쓰고 계속 진행.
    path가 비어 있으면 아무것도 하지 않는다.
    """
    if not path:
        return

    cursor = root
    for key in path[:-1]:
        node = cursor.get(key)
        if not isinstance(node, dict):
            node = {}
            cursor[key] = node
        cursor = node

    cursor[path[-1]] = value


def get_flag_path(root: Dict[str, Any], path: Sequence[str], default: Any = None) -> Any:
    """path 위치의 값 조회. 경로가 끊기면 default."""
    cursor: Any = root
    for key in path:
        if not isinstance(cursor, dict) or key not in cursor:
            return default
        cursor = cursor[key]
    return cursor
