from vibe_codegen.sandbox.adapter import AdapterError, SandboxBundle, SandboxTemplate, adapt, normalize_path
from vibe_codegen.sandbox.debounce import PreviewDebouncer
from vibe_codegen.sandbox.file_tree import TreeNode, build_file_tree

__all__ = [
    "adapt",
    "normalize_path",
    "AdapterError",
    "SandboxBundle",
    "SandboxTemplate",
    "PreviewDebouncer",
    "TreeNode",
    "build_file_tree",
]
