"""Allow running as: python -m jobform"""

from jobform.tui.app import main

if __name__ == "__main__":
    main()
