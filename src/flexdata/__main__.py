"""Entry point for 'python -m flexdata'."""

from flexdata.cli import main

if __name__ == "__main__":
    main()
