"""
CLI entry point for the rf-link-plan command.
"""
from rf_link_planner.runner import main

# Re-export main for the console_scripts entry point
__all__ = ['main']

if __name__ == '__main__':
    main()
