from dataclasses import dataclass, field

# На корневом уровне эти папки идут первыми
GROUP_ORDER = ["src", "public"]


@dataclass
class TreeNode:
    name: str
    path: str
    is_dir: bool
    children: list["TreeNode"] = field(default_factory=list)


def build_file_tree(paths: list[str]) -> TreeNode:
    """Построить дерево файлов для проводника: папки раньше файлов, затем по алфавиту."""
    root = TreeNode(name="", path="", is_dir=True)

    for raw in paths:
        clean = raw.lstrip("/")
        if not clean:
            continue
        parts = [p for p in clean.split("/") if p]
        current = root

        for i, segment in enumerate(parts):
            is_file = i == len(parts) - 1 and not clean.endswith("/")
            if is_file:
                current.children.append(TreeNode(name=segment, path=clean, is_dir=False))
                continue

            child = next((c for c in current.children if c.is_dir and c.name == segment), None)
            if child is None:
                child_path = f"{current.path}/{segment}" if current.path else segment
                child = TreeNode(name=segment, path=child_path, is_dir=True)
                current.children.append(child)
            current = child

    _sort(root)
    return root


def _sort_key(node: TreeNode, at_root: bool):
    group = len(GROUP_ORDER)
    if at_root and node.name in GROUP_ORDER:
        group = GROUP_ORDER.index(node.name)
    return (not node.is_dir, group, node.name.lower())


def _sort(node: TreeNode):
    at_root = node.path == ""
    node.children.sort(key=lambda c: _sort_key(c, at_root))
    for child in node.children:
        if child.is_dir:
            _sort(child)
