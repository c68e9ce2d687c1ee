"""
bumv - Main Entry

Supports:
- CLI mode (default): edit the file list in your text editor
- GUI mode (--gui or -g parameter)

Usage:
    python -m bumv                    # CLI mode, current directory
    python -m bumv -r ./photos        # CLI mode, recursive
    python -m bumv --gui              # GUI mode
    python -m bumv -g                 # GUI mode
"""

import sys


def main():
    """Main entry point"""
    # Check if GUI should be started
    if "--gui" in sys.argv or "-g" in sys.argv:
        try:
            from .gui import main as gui_main
        except ImportError as e:
            print(f"Error: Unable to start GUI, please ensure PySide6 is installed")
            print(f"Detailed error: {e}")
            print("\nInstall command: pip install 'bumv[gui]'")
            return 1
        return gui_main()

    from .cli import main as cli_main
    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
