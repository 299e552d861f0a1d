"""Provider integrations.

Submodules are imported explicitly (``providers.deepseek``) so that the
streaming layer can use ``providers.errors`` without pulling in adapters.
"""
