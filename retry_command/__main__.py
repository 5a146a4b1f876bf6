# retry_command/__main__.py

from retry_command import __version__ as about
from retry_command.cli.main import main

if __name__ == "__main__":
    main(prog_name=about.__title__)
