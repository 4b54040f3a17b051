"""
Main entry point for the resume_matcher package.

Usage:
    python -m resume_matcher [command] [options]

See 'python -m resume_matcher --help' for available commands.
"""

from resume_matcher.cli import main

if __name__ == "__main__":
    main()
