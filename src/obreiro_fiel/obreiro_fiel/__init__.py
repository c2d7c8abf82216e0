"""Obreiro Fiel package.

Roster and scheduling for church workers, organized by feature modules
(workers, events, uniforms, settings, ...) around one explicit state store,
with a thin Flask controller layer on top.
"""
