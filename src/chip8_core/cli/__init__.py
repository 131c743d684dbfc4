"""
CHIP-8 Core Command-Line Interface
==================================

This package provides command-line tools for the CHIP-8 core:

- **chip8run**: Headless ROM runner with text and PNG output

Each tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["chiprun"]
