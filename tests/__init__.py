"""jobform test suite.

- form/: the UI-agnostic form core, driven by a manual clock
- tui/: prompt_toolkit controls, focus host and application wiring
- top level: settings, logging, errors and the asyncio scheduler
"""
