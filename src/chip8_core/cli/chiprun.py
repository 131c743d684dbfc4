"""
chip8run - Headless CHIP-8 ROM Runner
=====================================

This module implements a command-line host for the CHIP-8 core. It loads
a ROM, optionally holds keys down, runs a number of frames as fast as
possible and prints the resulting framebuffer.

Usage Examples
--------------
Run a ROM for 60 frames and print the screen:
    $ chip8run IBM.ch8

Run an exact number of instructions:
    $ chip8run IBM.ch8 --cycles 100

Hold keys while running:
    $ chip8run PONG.ch8 --key 1 --key q --frames 120

Save a screenshot:
    $ chip8run IBM.ch8 --screenshot ibm.png --scale 10

Seed and speed can also come from CHIP8_SEED and CHIP8_SPEED.
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional, Tuple

import click

from chip8_core import __version__
from chip8_core.cli.errors import handle_cli_exception
from chip8_core.emulator import Emulator, EmulatorConfig

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def parse_int(value: str, name: str) -> int:
    """
    Parse a decimal, 0x-prefixed or $-prefixed integer.

    Raises:
        click.BadParameter: If the value is not a number
    """
    try:
        if value.startswith("$"):
            return int(value[1:], 16)
        return int(value, 0)
    except ValueError:
        raise click.BadParameter(f"invalid number '{value}'", param_hint=name)


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "rom",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-f", "--frames",
    type=click.IntRange(min=1),
    default=60,
    show_default=True,
    help="Number of frames to run",
)
@click.option(
    "-c", "--cycles",
    type=click.IntRange(min=1),
    default=None,
    help="Run exactly this many instructions (overrides --frames)",
)
@click.option(
    "--speed",
    type=click.IntRange(min=1),
    default=None,
    help="Frame size multiplier (default: CHIP8_SPEED or 1)",
)
@click.option(
    "--seed",
    type=str,
    default=None,
    help="Random source seed, decimal or hex (default: CHIP8_SEED or 1)",
)
@click.option(
    "-k", "--key",
    "keys",
    multiple=True,
    help="Key to hold down for the whole run (repeatable, e.g. -k 1 -k q)",
)
@click.option(
    "-s", "--screenshot",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the final framebuffer as PNG",
)
@click.option(
    "--scale",
    type=click.IntRange(min=1),
    default=8,
    show_default=True,
    help="Screenshot pixel scale",
)
@click.option(
    "--text/--no-text",
    default=True,
    help="Print the final framebuffer as text (default: enabled)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="chip8run")
def main(
    rom: Path,
    frames: int,
    cycles: Optional[int],
    speed: Optional[int],
    seed: Optional[str],
    keys: Tuple[str, ...],
    screenshot: Optional[Path],
    scale: int,
    text: bool,
    verbose: bool,
) -> None:
    """
    Run a CHIP-8 ROM headless and show the resulting screen.

    ROM is the program file to load at $200.

    Examples:

        # Run for 60 frames
        chip8run IBM.ch8

        # Run 100 instructions and save a PNG
        chip8run IBM.ch8 --cycles 100 -s ibm.png
    """
    setup_logging(verbose)

    try:
        config = EmulatorConfig.from_env()
        if seed is not None:
            config = replace(config, seed=parse_int(seed, "--seed"))
        if speed is not None:
            config = replace(config, speed=speed)

        emu = Emulator(config)
        emu.load_rom(rom)

        for key in keys:
            if emu.cpu.keypad.key_index(key) is None:
                click.echo(f"Warning: key '{key}' is not mapped, ignoring", err=True)
            emu.press_key(key)

        total = cycles if cycles is not None else frames * config.frame_cycles
        logger.debug("Running %d instructions (seed=%d)", total, config.seed)
        emu.run(total)

        if text:
            click.echo(emu.display_text)

        if screenshot:
            screenshot.write_bytes(emu.render_display(scale=scale))
            if verbose:
                click.echo(f"Screenshot written to: {screenshot}", err=True)

        if verbose:
            click.echo(
                f"Executed {emu.total_cycles} instructions, "
                f"PC=${emu.cpu.pc:04X}, tone={'on' if emu.should_beep else 'off'}",
                err=True,
            )

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Emulation")


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
