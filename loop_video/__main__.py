"""
Entry point for running the Loop Video Service as a module.
"""

from .main import main

if __name__ == "__main__":
    main()
