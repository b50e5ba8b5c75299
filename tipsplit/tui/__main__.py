"""Entry point for running the TUI as a module.

Usage:
    python -m tipsplit.tui
    python -m tipsplit.tui --settings .tip-splitter.yaml --log-file logs/tipsplit.log
"""

from tipsplit.tui.app import main

if __name__ == "__main__":
    main()
