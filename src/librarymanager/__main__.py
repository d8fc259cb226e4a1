"""Main entry point for the librarymanager package."""

from librarymanager.cli import main


if __name__ == "__main__":
    main()
