"""
Tally — a terminal counter driven by a Store/Dispatcher/View loop.

The View polls the keyboard, turns key presses into transition requests,
hands them to the Dispatcher, and redraws the counter read back from the
Store. Data flows one way only.

Package layout (src/tally/):
  core/  — store, dispatcher, actions, config, logging, exceptions
  ui/    — key decoding, rendering, terminal backend, event loop
  cli/   — Click CLI entry point
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
