"""
Walks over the genre hierarchy held in memory.

The maps are built from one `(id, parent_id)` query, so cycle checks and
ancestor chains never issue a query per node. Every walk keeps a visited
set and stops on a repeated node even if stored data were corrupted.
"""
from collections import defaultdict, deque


def build_children_map(pairs) -> dict:
    """{parent_id: [child_id, ...]} from (id, parent_id) pairs"""
    children = defaultdict(list)
    for genre_id, parent_id in pairs:
        if parent_id is not None:
            children[parent_id].append(genre_id)
    return dict(children)


def build_parent_map(pairs) -> dict:
    """{id: parent_id} from (id, parent_id) pairs"""
    return {genre_id: parent_id for genre_id, parent_id in pairs}


def collect_descendants(children_map: dict, root_id) -> set:
    """All ids below root_id (root_id itself excluded)"""
    descendants = set()
    queue = deque(children_map.get(root_id, []))

    while queue:
        node = queue.popleft()
        if node in descendants or node == root_id:
            continue
        descendants.add(node)
        queue.extend(children_map.get(node, []))

    return descendants


def walk_parent_chain(parent_map: dict, start_id) -> list:
    """
    Ancestor ids of start_id ordered root first, immediate parent last.
    Parents missing from the map end the walk.
    """
    chain = []
    seen = {start_id}
    current = parent_map.get(start_id)

    while current is not None and current not in seen and current in parent_map:
        seen.add(current)
        chain.append(current)
        current = parent_map.get(current)

    chain.reverse()
    return chain


def would_create_cycle(children_map: dict, genre_id, new_parent_id) -> bool:
    if new_parent_id is None:
        return False
    if new_parent_id == genre_id:
        return True
    return new_parent_id in collect_descendants(children_map, genre_id)
