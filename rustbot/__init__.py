"""
RustBot - evaluate Rust snippets from Discord on the Rust playground.
"""

__version__ = "0.1.0"
__logo__ = "🦀"
