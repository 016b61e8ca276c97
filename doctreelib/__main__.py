"""Allow ``python -m doctreelib``."""

from .commands import main

if __name__ == "__main__":
    main()
