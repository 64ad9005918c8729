# Path: report_mailer/__init__.py
"""
report_mailer - SQL reports rendered and delivered

Runs declared SQL queries against SQLite or PostgreSQL, casts the
results to declared field kinds, assembles tables and charts, renders
them as Html, Markdown or plain text, and prints and/or mails the
result.

Packages:
    - definition: YAML report definitions (pydantic)
    - source: Data source adapters (SQLAlchemy)
    - process: Value model, field caster, query executor
    - output: Sections, charts, formatters
    - send: Dispatcher and SMTP transport
    - core: IPO logging and diagnostic sinks
"""

__version__ = '0.1.0'
