# Path: report_mailer/core/__init__.py
"""
report_mailer Core Package

Core utilities shared by every pipeline stage.

Submodules:
    - logger: IPO-aware logging and diagnostic sinks
"""
