"""gluegen export — C++ glue emission from a GlueModule.

Public API::

    from gluegen.export import to_glue_source
    cpp_text = to_glue_source(module)
"""

from .cpp import GlueWriter, to_glue_source

__all__ = ["GlueWriter", "to_glue_source"]
