#main.py
"""
Main entry point for the home automation console.
Installs the global exception hook and hands over to the Typer application.
"""

import logging             # Imports logging to record uncaught errors
import sys                 # Imports sys to install the exception hook

from home_automation.cli import run  # Imports the console application


def setup_exception_handling(logger):
    """
    Configures a global exception handler so uncaught errors end up in the log.
    logger: The Logger instance to record errors.
    """

    def handle_exception(exc_type, exc_value, exc_traceback):
        # Lets Ctrl+C end the program quietly
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return
        logger.error("Uncaught exception:", exc_info=(exc_type, exc_value, exc_traceback))

    sys.excepthook = handle_exception


def main():
    """
    Starts the console application.
    """
    setup_exception_handling(logging.getLogger("home_automation"))
    run()


if __name__ == "__main__":
    # Entry point to run the main function
    main()
