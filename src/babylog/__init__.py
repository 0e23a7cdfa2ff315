# SPDX-License-Identifier: MIT

from babylog.cleanup import register_cleanup
from babylog.initialize import initialize
from babylog.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
