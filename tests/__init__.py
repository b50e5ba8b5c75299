"""Tip splitter test suite.

- test_sanitize.py / test_validators.py: field text filtering and bounds
- test_calculator.py: per-person split and money formatting
- test_state.py / test_debounce.py: state container and debouncing
- test_orchestrator.py: event transitions against in-memory fake ports
- tui/: settings loading and prompt_toolkit controls
"""
