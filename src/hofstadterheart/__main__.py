"""Command-line interface."""
from hofstadterheart.main import main

if __name__ == "__main__":
    main()
