# SPDX-License-Identifier: MIT

from habitual import configuration
from habitual.cleanup import register_cleanup
from habitual.initialize import initialize
from habitual.logging_setup import configure_logging
from habitual.repository.configuration import CONFIGURATION_REPO
from habitual.terminal.app import run


def main() -> None:
    initialize()
    configure_logging(
        configuration.LOG_PATH,
        CONFIGURATION_REPO.get_config().get("log_level", "INFO"),
    )
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
