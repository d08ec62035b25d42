#!/usr/bin/env python3
"""
SimpleOS - A single-user operating system shell simulation

This is the main entry point for SimpleOS.

Usage:
    simpleos                      # interactive shell
    simpleos --config cfg.json    # load settings from a JSON file
    simpleos --script demo.txt    # run commands from a file and exit

Author: YSNRFD
Version: 1.0.0
"""

import argparse
import sys
from pathlib import Path
from typing import Optional, List

from simpleos.core.bootloader import Bootloader
from simpleos.shell.shell import Shell


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='simpleos',
        description='A single-user operating system shell simulation.'
    )
    parser.add_argument(
        '--config',
        help='path to a JSON configuration file'
    )
    parser.add_argument(
        '--script',
        help='run the commands in this file instead of reading from the terminal'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for SimpleOS.

    Boot sequence:
    1. Load configuration
    2. Initialize logging
    3. Boot the kernel
    4. Run the shell (or a script)
    5. Shutdown
    """
    args = build_parser().parse_args(argv)

    bootloader = Bootloader(args.config)
    result = bootloader.boot()

    if not result.success:
        print(f"Boot failed at stage {result.stage.name}", file=sys.stderr)
        print(f"Error: {result.message}", file=sys.stderr)
        return 1

    kernel = bootloader.get_kernel()
    shell = Shell(kernel)

    try:
        if args.script:
            print(result.banner)
            shell.run_script(Path(args.script).read_text(encoding='utf-8'))
        else:
            shell.run(banner=result.banner)
    except KeyboardInterrupt:
        print("\n\nInterrupted")
    finally:
        bootloader.shutdown()

    return 0


if __name__ == '__main__':
    sys.exit(main())
