from __future__ import annotations

"""
Main Entry Point and Global Supervisor.

Routes execution to the CLI controller and installs a last-resort exception
hook so that unexpected crashes are logged and reported on stderr with a
non-zero exit code.
"""

import logging
import sys
import traceback
from typing import Any, Optional, Type


def global_exception_handler(exctype: Type[BaseException], value: BaseException, tb: Any) -> None:
    """
    Log an unhandled exception and terminate the process.

    Args:
        exctype: Exception class.
        value: Exception instance.
        tb: Traceback object.
    """
    stack_trace = "".join(traceback.format_exception(exctype, value, tb))

    logger = logging.getLogger("scriptdeps.supervisor")
    logger.critical(f"FATAL EXCEPTION DETECTED: {value}\n{stack_trace}")

    print("\n" + "=" * 80, file=sys.stderr)
    print("CRITICAL ERROR (SCRIPTDEPS CLI)", file=sys.stderr)
    print("=" * 80, file=sys.stderr)
    print(stack_trace, file=sys.stderr)
    sys.exit(1)


def main(argv: Optional[list] = None) -> int:
    """
    Run the command line interface.

    Returns:
        int: Standard process exit code.
    """
    sys.excepthook = global_exception_handler
    from scriptdeps.interface.cli.app import main as cli_main
    return cli_main(argv)


if __name__ == "__main__":
    sys.exit(main())
