"""Run securerand as `python -m securerand`."""
import sys

from securerand.main import main


if __name__ == "__main__":
    sys.exit(main())
