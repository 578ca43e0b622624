"""CLI for RustBot."""
