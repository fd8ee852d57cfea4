# grammatch/examples/__init__.py
"""Ready-made grammars (INI files, key/value lists)."""
