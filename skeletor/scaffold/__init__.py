"""Template materialization for Porter mixin projects.

Modules:
- templates: Jinja rendering of paths, contents, defaults and hooks
- source: locating the embedded, local or cloned template tree
- engine: walking the tree and producing the output
- core: orchestrating a complete generation run
"""
