"""Launch the Pascal's triangle lab."""
import sys

from mathsets.app.main import main

if __name__ == "__main__":
    sys.exit(main())
