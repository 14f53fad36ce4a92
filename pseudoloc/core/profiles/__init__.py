"""Locale profiles: substitution tables and filler alphabets per target locale.

The built-in set covers German, Polish and Russian. More locales can be
registered in code or loaded from a YAML profile file; a profile is frozen
once it is registered.
"""
