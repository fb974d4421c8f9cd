"""fxrun - compose and run Java/JavaFX launch commands.

Returns:
    int: Exit code
"""
import logging

from args import parse_args
from common.logging_utils import extra_context, is_debug_enabled


def main(argv=None):
    """Main function of the program."""
    logger = logging.getLogger(__name__)
    args = parse_args(argv)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.action)
        )

    # Lazy import keeps --help free of runtime probing imports
    if args.action == "compose":
        from cli_run import compose_command  # pylint: disable=import-outside-toplevel
        compose_command(args)
    else:
        from cli_run import run_command  # pylint: disable=import-outside-toplevel
        run_command(args)


if __name__ == "__main__":
    main()
