"""
TapCalc
Main application entry point
"""
import argparse
import atexit
import config
from launcher import ApiServer


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="tapcalc", description=f"{config.APP_NAME} {config.VERSION}")
    parser.add_argument("--web", action="store_true", help="also start the JSON API server")
    return parser.parse_args(argv)


def run_gui():
    import tkinter as tk
    from gui import CalculatorGUI

    root = tk.Tk()
    CalculatorGUI(root)
    root.mainloop()


def main(argv=None, server=None, gui=run_gui):
    args = parse_args(argv)

    if args.web:
        server = server if server is not None else ApiServer()
        server.start()
        atexit.register(server.stop)

    try:
        gui()
    finally:
        if args.web:
            server.stop()
            atexit.unregister(server.stop)


if __name__ == "__main__":
    main()
