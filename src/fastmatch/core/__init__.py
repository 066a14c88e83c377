"""Core subpackage.

- config: INI-backed ConfigManager
- logging_setup: session log directories and handlers
- timing: SplitTimer for per-call diagnostics
"""
